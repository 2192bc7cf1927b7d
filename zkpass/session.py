"""Sessions minted after a successful authentication, expired by a periodic sweep."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .constants import SESSION_TIMEOUT, SWEEP_INTERVAL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    username: str
    last_activity: float


class SessionStore:
    """Thread-safe session map with its own background sweep.

    The sweep thread is started by :meth:`start` and joined by :meth:`stop`;
    request threads and the sweep share one lock.
    """

    def __init__(
        self,
        timeout: float = SESSION_TIMEOUT,
        interval: float = SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout <= 0 or interval <= 0:
            raise ValueError("Session timeout and sweep interval must be positive")
        self.timeout = timeout
        self.interval = interval
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def create(self, username: str) -> str:
        session_id = str(uuid.uuid4())
        with self._lock:
            self._sessions[session_id] = Session(username=username, last_activity=self._clock())
        return session_id

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    def sweep(self) -> int:
        """Drop sessions idle for at least ``timeout`` seconds; return how many went."""

        now = self._clock()
        with self._lock:
            expired = [
                session_id
                for session_id, session in self._sessions.items()
                if now - session.last_activity >= self.timeout
            ]
            for session_id in expired:
                del self._sessions[session_id]
            remaining = len(self._sessions)
        logger.info("Session cleanup performed: %d expired, %d active", len(expired), remaining)
        return len(expired)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="zkpass-session-sweep", daemon=True)
        self._thread.start()
        logger.debug("Session sweep started (interval=%ss, timeout=%ss)", self.interval, self.timeout)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.debug("Session sweep stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.sweep()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __enter__(self) -> "SessionStore":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


__all__ = ["Session", "SessionStore"]
