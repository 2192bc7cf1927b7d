import time
import unittest

from zkpass.session import SessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestSessionStore(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.sessions = SessionStore(timeout=60, interval=10, clock=self.clock)

    def test_create_and_get(self) -> None:
        session_id = self.sessions.create("alice")
        session = self.sessions.get(session_id)
        self.assertEqual(session.username, "alice")
        self.assertEqual(session.last_activity, 1000.0)
        self.assertIsNone(self.sessions.get("missing"))

    def test_ids_are_unique(self) -> None:
        ids = {self.sessions.create("alice") for _ in range(20)}
        self.assertEqual(len(ids), 20)
        self.assertEqual(len(self.sessions), 20)

    def test_sweep_removes_idle_sessions(self) -> None:
        old = self.sessions.create("alice")
        self.clock.now += 30
        fresh = self.sessions.create("bob")

        self.clock.now += 29
        self.assertEqual(self.sessions.sweep(), 0)

        self.clock.now += 1
        self.assertEqual(self.sessions.sweep(), 1)
        self.assertIsNone(self.sessions.get(old))
        self.assertIsNotNone(self.sessions.get(fresh))

    def test_invalid_arguments(self) -> None:
        with self.assertRaises(ValueError):
            SessionStore(timeout=0)
        with self.assertRaises(ValueError):
            SessionStore(interval=-1)


class TestSessionSweepThread(unittest.TestCase):
    def test_background_sweep(self) -> None:
        sessions = SessionStore(timeout=0.01, interval=0.02)
        sessions.create("alice")
        with sessions:
            self.assertTrue(sessions.running)
            deadline = time.monotonic() + 5
            while len(sessions) and time.monotonic() < deadline:
                time.sleep(0.01)
        self.assertEqual(len(sessions), 0)
        self.assertFalse(sessions.running)

    def test_start_is_idempotent_and_stop_joins(self) -> None:
        sessions = SessionStore(timeout=60, interval=60)
        sessions.start()
        thread = sessions._thread
        sessions.start()
        self.assertIs(sessions._thread, thread)
        sessions.stop(timeout=5)
        self.assertFalse(thread.is_alive())
        self.assertFalse(sessions.running)


if __name__ == "__main__":
    unittest.main()
