"""In-memory user and authentication challenge records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UserRecord:
    """Public commitment of a registered user and the latest round commitment."""

    username: str
    y1: Any
    y2: Any
    r1: Optional[Any] = None
    r2: Optional[Any] = None

    def with_round(self, r1: Any, r2: Any) -> "UserRecord":
        return replace(self, r1=r1, r2=r2)


@dataclass(frozen=True)
class AuthChallenge:
    """A challenge issued to ``username`` and not yet answered."""

    id: str
    username: str
    challenge: int


class UserStore:
    """Users keyed by name and pending challenges keyed by id.

    The store does no locking of its own; callers serialise access.
    """

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        self._challenges: Dict[str, AuthChallenge] = {}

    def create(self, user: UserRecord) -> None:
        self._users[user.username] = user

    def read(self, username: str) -> Optional[UserRecord]:
        return self._users.get(username)

    def update(self, username: str, user: UserRecord) -> bool:
        if username not in self._users:
            return False
        self._users[username] = user
        return True

    def delete(self, username: str) -> Optional[UserRecord]:
        return self._users.pop(username, None)

    def create_auth_challenge(self, username: str, challenge: int) -> str:
        auth_id = str(uuid.uuid4())
        self._challenges[auth_id] = AuthChallenge(id=auth_id, username=username, challenge=challenge)
        return auth_id

    def get_auth_challenge(self, auth_id: str) -> Optional[AuthChallenge]:
        return self._challenges.get(auth_id)

    def delete_auth_challenge(self, auth_id: str) -> Optional[AuthChallenge]:
        return self._challenges.pop(auth_id, None)

    @property
    def user_count(self) -> int:
        return len(self._users)

    @property
    def pending_challenges(self) -> int:
        return len(self._challenges)


__all__ = ["AuthChallenge", "UserRecord", "UserStore"]
