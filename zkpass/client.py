"""Prover side: an HTTP client for the service and the full login round."""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from .errors import ZKPassError
from .factory import ProtocolSuite
from .group import Group
from .protocol import encode_commitment

logger = logging.getLogger(__name__)


class TransportError(ZKPassError):
    """The request could not be delivered or the server rejected it."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthClient:
    """Thin wrapper over the three service calls; byte fields travel as hex."""

    def __init__(self, base_url: str = "", *, http: Optional[httpx.Client] = None, timeout: float = 10.0) -> None:
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def _post(self, path: str, payload: Dict[str, str]) -> Dict[str, Any]:
        try:
            reply = self._http.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"{path}: {exc}") from exc
        if reply.status_code != 200:
            try:
                detail = reply.json().get("detail", reply.text)
            except ValueError:
                detail = reply.text
            raise TransportError(f"{path}: {detail}", status_code=reply.status_code)
        return reply.json()

    def params(self) -> Dict[str, str]:
        try:
            reply = self._http.get("/params")
            reply.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"/params: {exc}") from exc
        return reply.json()

    def register(self, user: str, y1: bytes, y2: bytes) -> None:
        self._post("/register", {"user": user, "y1": y1.hex(), "y2": y2.hex()})

    def create_authentication_challenge(self, user: str, r1: bytes, r2: bytes) -> Tuple[str, bytes]:
        body = self._post("/challenge", {"user": user, "r1": r1.hex(), "r2": r2.hex()})
        try:
            return body["auth_id"], bytes.fromhex(body["c"])
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError(f"/challenge: malformed reply: {exc!r}") from exc

    def verify_authentication(self, auth_id: str, s: bytes) -> str:
        body = self._post("/verify", {"auth_id": auth_id, "s": s.hex()})
        return body["session_id"]

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "AuthClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def derive_secret(group: Group, password: Optional[str] = None) -> int:
    """Hash ``password`` with SHA-512 into a scalar, or sample a random one."""

    if password is None:
        return group.random_scalar()
    return group.scalar_from_digest(hashlib.sha512(password.encode("utf-8")).digest())


def login(client: AuthClient, suite: ProtocolSuite, user: str, secret: int) -> str:
    """Register ``user`` and authenticate once; return the session id."""

    protocol, params, group = suite.protocol, suite.params, suite.group
    cp, k = protocol.commitment(params, secret)
    y1, y2, r1, r2 = encode_commitment(group, cp)

    client.register(user, y1, y2)
    logger.debug("Registered %s", user)

    auth_id, c_bytes = client.create_authentication_challenge(user, r1, r2)
    challenge = group.decode_scalar(c_bytes)
    response = protocol.challenge_response(params, k, challenge, secret)

    session_id = client.verify_authentication(auth_id, group.encode_scalar(response))
    logger.info("Authenticated %s", user)
    return session_id


__all__ = ["AuthClient", "TransportError", "derive_secret", "login"]
