"""FastAPI transport for the Chaum-Pedersen authentication service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .auth import AuthService
from .encoding import decode_hex
from .errors import DecodeError, NotFoundError, VerificationFailure

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    user: str
    y1: str
    y2: str


class RegisterResponse(BaseModel):
    pass


class ChallengeRequest(BaseModel):
    user: str
    r1: str
    r2: str


class ChallengeResponse(BaseModel):
    auth_id: str
    c: str


class VerifyRequest(BaseModel):
    auth_id: str
    s: str


class VerifyResponse(BaseModel):
    session_id: str


class ParamsResponse(BaseModel):
    type: str
    name: str


def create_app(service: AuthService) -> FastAPI:
    """Build the HTTP application around ``service``.

    The session sweep runs for the lifetime of the application.
    """

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        service.start()
        logger.info("Serving %s/%s", service.suite.kind, service.suite.name)
        try:
            yield
        finally:
            service.stop()

    app = FastAPI(
        title="ZKPass",
        description="Chaum-Pedersen zero-knowledge authentication",
        lifespan=lifespan,
    )
    app.state.service = service

    @app.get("/params", response_model=ParamsResponse)
    def params() -> ParamsResponse:
        return ParamsResponse(type=service.suite.kind, name=service.suite.name)

    @app.post("/register", response_model=RegisterResponse)
    def register(request: RegisterRequest) -> RegisterResponse:
        try:
            service.register(
                request.user,
                decode_hex(request.y1, "y1"),
                decode_hex(request.y2, "y2"),
            )
        except DecodeError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return RegisterResponse()

    @app.post("/challenge", response_model=ChallengeResponse)
    def create_authentication_challenge(request: ChallengeRequest) -> ChallengeResponse:
        try:
            auth_id, challenge = service.create_authentication_challenge(
                request.user,
                decode_hex(request.r1, "r1"),
                decode_hex(request.r2, "r2"),
            )
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except DecodeError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ChallengeResponse(auth_id=auth_id, c=challenge.hex())

    @app.post("/verify", response_model=VerifyResponse)
    def verify_authentication(request: VerifyRequest) -> VerifyResponse:
        try:
            response = decode_hex(request.s, "s")
        except DecodeError as exc:
            # The attempt still uses up the challenge.
            try:
                service.discard_challenge(request.auth_id)
            except NotFoundError as missing:
                raise HTTPException(status_code=404, detail=str(missing)) from missing
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        try:
            session_id = service.verify_authentication(request.auth_id, response)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (DecodeError, VerificationFailure) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return VerifyResponse(session_id=session_id)

    return app


__all__ = ["create_app"]
