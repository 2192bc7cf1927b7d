"""Chaum-Pedersen zero-knowledge authentication over modular and elliptic-curve groups."""

from .auth import AuthService
from .discretelog import DiscreteLogChaumPedersen, ModPGroup
from .errors import DecodeError, NotFoundError, VerificationFailure, ZKPassError
from .factory import ProtocolSuite, available_suites, load_suite
from .group import Group, GroupParameters
from .pallas import PallasGroup
from .protocol import ChaumPedersen, CommitParameters, EllipticCurveChaumPedersen, execute_protocol
from .ristretto import Ristretto255Group, RistrettoPoint
from .session import SessionStore
from .store import AuthChallenge, UserRecord, UserStore
from .vesta import VestaGroup

__version__ = "0.1.0"

__all__ = [
    "AuthChallenge",
    "AuthService",
    "ChaumPedersen",
    "CommitParameters",
    "DecodeError",
    "DiscreteLogChaumPedersen",
    "EllipticCurveChaumPedersen",
    "Group",
    "GroupParameters",
    "ModPGroup",
    "NotFoundError",
    "PallasGroup",
    "ProtocolSuite",
    "Ristretto255Group",
    "RistrettoPoint",
    "SessionStore",
    "UserRecord",
    "UserStore",
    "VerificationFailure",
    "VestaGroup",
    "ZKPassError",
    "available_suites",
    "execute_protocol",
    "load_suite",
]
