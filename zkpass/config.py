"""Runtime settings for the server and client commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from . import constants


@dataclass(frozen=True)
class Settings:
    host: str = constants.DEFAULT_HOST
    port: int = constants.DEFAULT_PORT
    type: str = constants.DEFAULT_TYPE
    params: str = constants.DEFAULT_PARAMS
    session_timeout: float = constants.SESSION_TIMEOUT
    sweep_interval: float = constants.SWEEP_INTERVAL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read ``ZKPASS_*`` variables, falling back to the defaults."""

        env = os.environ if environ is None else environ
        defaults = cls()
        try:
            return cls(
                host=env.get("ZKPASS_HOST", defaults.host),
                port=int(env.get("ZKPASS_PORT", defaults.port)),
                type=env.get("ZKPASS_TYPE", defaults.type),
                params=env.get("ZKPASS_PARAMS", defaults.params),
                session_timeout=float(env.get("ZKPASS_SESSION_TIMEOUT", defaults.session_timeout)),
                sweep_interval=float(env.get("ZKPASS_SWEEP_INTERVAL", defaults.sweep_interval)),
                log_level=env.get("ZKPASS_LOG_LEVEL", defaults.log_level).upper(),
            )
        except ValueError as exc:
            raise ValueError(f"Invalid ZKPASS_* setting: {exc}") from exc

    @property
    def base_url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"http://{host}:{self.port}"


__all__ = ["Settings"]
