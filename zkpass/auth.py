"""Registration, challenge issuance and verification for remote provers."""

from __future__ import annotations

import logging
import threading
from typing import Optional, Tuple

from .errors import NotFoundError, VerificationFailure
from .factory import ProtocolSuite
from .protocol import CommitParameters
from .session import SessionStore
from .store import UserRecord, UserStore

logger = logging.getLogger(__name__)


class AuthService:
    """Drives the Chaum-Pedersen verifier over one configured protocol suite.

    Every access to the user/challenge store happens under a single lock;
    decoding and protocol arithmetic run outside it. A challenge is removed
    from the store as soon as a verification attempt claims it, whatever the
    outcome.
    """

    def __init__(
        self,
        suite: ProtocolSuite,
        store: Optional[UserStore] = None,
        sessions: Optional[SessionStore] = None,
    ) -> None:
        self.suite = suite
        self.store = store if store is not None else UserStore()
        self.sessions = sessions if sessions is not None else SessionStore()
        self._lock = threading.Lock()

    @property
    def group(self):
        return self.suite.group

    def register(self, user: str, y1: bytes, y2: bytes) -> None:
        logger.debug("register: user=%s", user)
        record = UserRecord(
            username=user,
            y1=self.group.decode_element(y1),
            y2=self.group.decode_element(y2),
        )
        with self._lock:
            self.store.create(record)
        logger.info("Registered user %s", user)

    def create_authentication_challenge(self, user: str, r1: bytes, r2: bytes) -> Tuple[str, bytes]:
        logger.debug("create_authentication_challenge: user=%s", user)
        with self._lock:
            self._require_user(user)

        r1_value = self.group.decode_element(r1)
        r2_value = self.group.decode_element(r2)
        challenge = self.suite.protocol.challenge(self.suite.params)

        with self._lock:
            record = self._require_user(user)
            self.store.update(user, record.with_round(r1_value, r2_value))
            auth_id = self.store.create_auth_challenge(user, challenge)

        return auth_id, self.group.encode_scalar(challenge)

    def verify_authentication(self, auth_id: str, s: bytes) -> str:
        logger.debug("verify_authentication: auth_id=%s", auth_id)
        with self._lock:
            pending = self.store.delete_auth_challenge(auth_id)
            if pending is None:
                raise NotFoundError("Challenge not found")
            record = self.store.read(pending.username)
        if record is None:
            raise NotFoundError("User not found")

        response = self.group.decode_scalar(s)
        if record.r1 is None or record.r2 is None:
            logger.warning("User %s has no pending commitment", record.username)
            raise VerificationFailure("Invalid authentication")

        cp = CommitParameters(y1=record.y1, y2=record.y2, r1=record.r1, r2=record.r2)
        if not self.suite.protocol.verify(self.suite.params, response, pending.challenge, cp):
            logger.warning("Invalid authentication for user %s", record.username)
            raise VerificationFailure("Invalid authentication")

        session_id = self.sessions.create(record.username)
        logger.info("User %s authenticated", record.username)
        return session_id

    def _require_user(self, user: str) -> UserRecord:
        # Caller holds the lock.
        record = self.store.read(user)
        if record is None:
            logger.warning("Challenge requested for unknown user %s", user)
            raise NotFoundError("User not found")
        return record

    def discard_challenge(self, auth_id: str) -> None:
        """Consume a pending challenge without verifying anything."""

        with self._lock:
            if self.store.delete_auth_challenge(auth_id) is None:
                raise NotFoundError("Challenge not found")

    def start(self) -> None:
        self.sessions.start()

    def stop(self) -> None:
        self.sessions.stop()


__all__ = ["AuthService"]
