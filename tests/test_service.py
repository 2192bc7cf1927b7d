import threading
import unittest

from zkpass.auth import AuthService
from zkpass.errors import DecodeError, NotFoundError, VerificationFailure
from zkpass.factory import DISCRETE_LOG, ELLIPTIC_CURVE, available_suites, load_suite
from zkpass.protocol import encode_commitment
from zkpass.store import UserRecord, UserStore


class Prover:
    """Client half of one protocol round, kept in memory."""

    def __init__(self, suite, secret: int) -> None:
        self.suite = suite
        self.secret = secret
        self.cp, self.k = suite.protocol.commitment(suite.params, secret)
        self.y1, self.y2, self.r1, self.r2 = encode_commitment(suite.group, self.cp)

    def respond(self, challenge: bytes) -> bytes:
        group = self.suite.group
        s = self.suite.protocol.challenge_response(self.suite.params, self.k, group.decode_scalar(challenge), self.secret)
        return group.encode_scalar(s)


class TestAuthService(unittest.TestCase):
    suite_args = (DISCRETE_LOG, "rfc5114_modp_1024_160")

    def setUp(self) -> None:
        self.suite = load_suite(*self.suite_args)
        self.service = AuthService(self.suite)
        self.prover = Prover(self.suite, self.suite.group.random_scalar())

    def _challenge(self, user: str = "alice"):
        self.service.register(user, self.prover.y1, self.prover.y2)
        return self.service.create_authentication_challenge(user, self.prover.r1, self.prover.r2)

    def test_successful_login_mints_session(self) -> None:
        auth_id, challenge = self._challenge()
        session_id = self.service.verify_authentication(auth_id, self.prover.respond(challenge))

        session = self.service.sessions.get(session_id)
        self.assertIsNotNone(session)
        self.assertEqual(session.username, "alice")
        self.assertEqual(self.service.store.pending_challenges, 0)

    def test_challenge_is_single_use(self) -> None:
        auth_id, challenge = self._challenge()
        s = self.prover.respond(challenge)
        self.service.verify_authentication(auth_id, s)
        with self.assertRaises(NotFoundError):
            self.service.verify_authentication(auth_id, s)

    def test_unknown_user(self) -> None:
        with self.assertRaises(NotFoundError):
            self.service.create_authentication_challenge("mallory", self.prover.r1, self.prover.r2)
        self.assertEqual(self.service.store.pending_challenges, 0)

    def test_unknown_user_wins_over_malformed_commitment(self) -> None:
        with self.assertRaises(NotFoundError):
            self.service.create_authentication_challenge("nobody", b"\x00", b"\x00")

    def test_unknown_challenge(self) -> None:
        with self.assertRaises(NotFoundError):
            self.service.verify_authentication("no-such-id", b"\x01")
        with self.assertRaises(NotFoundError):
            self.service.discard_challenge("no-such-id")

    def test_wrong_response_fails_and_consumes_challenge(self) -> None:
        auth_id, challenge = self._challenge()
        impostor = Prover(self.suite, self.suite.group.random_scalar())
        with self.assertRaises(VerificationFailure):
            self.service.verify_authentication(auth_id, impostor.respond(challenge))
        with self.assertRaises(NotFoundError):
            self.service.verify_authentication(auth_id, self.prover.respond(challenge))
        self.assertEqual(len(self.service.sessions), 0)

    def test_new_challenge_overwrites_round(self) -> None:
        first_id, first_challenge = self._challenge()
        stale = self.prover.respond(first_challenge)

        self.prover = Prover(self.suite, self.prover.secret)
        second_id, second_challenge = self.service.create_authentication_challenge(
            "alice", self.prover.r1, self.prover.r2
        )
        with self.assertRaises(VerificationFailure):
            self.service.verify_authentication(first_id, stale)
        self.service.verify_authentication(second_id, self.prover.respond(second_challenge))

    def test_reregistration_clears_round(self) -> None:
        auth_id, challenge = self._challenge()
        self.service.register("alice", self.prover.y1, self.prover.y2)
        with self.assertRaises(VerificationFailure):
            self.service.verify_authentication(auth_id, self.prover.respond(challenge))

    def test_invalid_elements_are_rejected(self) -> None:
        with self.assertRaises(DecodeError):
            self.service.register("alice", b"\x00", self.prover.y2)
        self.assertIsNone(self.service.store.read("alice"))

        self.service.register("alice", self.prover.y1, self.prover.y2)
        with self.assertRaises(DecodeError):
            self.service.create_authentication_challenge("alice", self.prover.r1, b"\x00")
        self.assertEqual(self.service.store.pending_challenges, 0)

    def test_concurrent_verifications_single_winner(self) -> None:
        auth_id, challenge = self._challenge()
        s = self.prover.respond(challenge)
        outcomes = []
        barrier = threading.Barrier(8)

        def attempt() -> None:
            barrier.wait()
            try:
                outcomes.append(self.service.verify_authentication(auth_id, s))
            except NotFoundError:
                outcomes.append(None)

        threads = [threading.Thread(target=attempt) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len([outcome for outcome in outcomes if outcome is not None]), 1)
        self.assertEqual(outcomes.count(None), 7)


class TestAuthServiceRistretto(TestAuthService):
    suite_args = (ELLIPTIC_CURVE, "ec25519")

    def test_malformed_response_consumes_challenge(self) -> None:
        auth_id, challenge = self._challenge()
        with self.assertRaises(DecodeError):
            self.service.verify_authentication(auth_id, b"\x01\x02")
        with self.assertRaises(NotFoundError):
            self.service.verify_authentication(auth_id, self.prover.respond(challenge))


class TestAuthServicePallas(TestAuthService):
    suite_args = (ELLIPTIC_CURVE, "pallas")


class TestUserStore(unittest.TestCase):
    def test_crud(self) -> None:
        store = UserStore()
        store.create(UserRecord(username="bob", y1=1, y2=2))
        self.assertEqual(store.user_count, 1)
        self.assertTrue(store.update("bob", store.read("bob").with_round(3, 4)))
        self.assertEqual(store.read("bob").r2, 4)
        self.assertFalse(store.update("carol", UserRecord(username="carol", y1=1, y2=2)))
        self.assertEqual(store.delete("bob").username, "bob")
        self.assertIsNone(store.read("bob"))

    def test_challenges_have_distinct_ids(self) -> None:
        store = UserStore()
        first = store.create_auth_challenge("bob", 5)
        second = store.create_auth_challenge("bob", 5)
        self.assertNotEqual(first, second)
        self.assertEqual(store.get_auth_challenge(first).challenge, 5)
        self.assertEqual(store.delete_auth_challenge(first).username, "bob")
        self.assertIsNone(store.delete_auth_challenge(first))
        self.assertEqual(store.pending_challenges, 1)


class TestFactory(unittest.TestCase):
    def test_every_suite_loads(self) -> None:
        for kind, names in available_suites().items():
            for name in names:
                with self.subTest(kind=kind, name=name):
                    suite = load_suite(kind, name)
                    self.assertEqual((suite.kind, suite.name), (kind, name))
                    self.assertIs(suite.group, suite.protocol.group)

    def test_suites_are_cached(self) -> None:
        self.assertIs(load_suite(ELLIPTIC_CURVE, "vesta"), load_suite(ELLIPTIC_CURVE, "vesta"))

    def test_unknown_names(self) -> None:
        for kind, name in (
            (DISCRETE_LOG, "ec25519"),
            (ELLIPTIC_CURVE, "rfc5114_modp_1024_160"),
            ("lattice", "toy"),
        ):
            with self.subTest(kind=kind, name=name):
                with self.assertRaises(ValueError):
                    load_suite(kind, name)


if __name__ == "__main__":
    unittest.main()
