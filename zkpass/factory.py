"""Select one (group type, parameter set) pair by name."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, List, Tuple

from .discretelog import MODP_PARAMETERS, DiscreteLogChaumPedersen, ModPGroup
from .group import Group, GroupParameters
from .pallas import PallasGroup, pallas_parameters
from .protocol import ChaumPedersen, EllipticCurveChaumPedersen
from .ristretto import Ristretto255Group, ec25519_parameters
from .vesta import VestaGroup, vesta_parameters

DISCRETE_LOG = "discrete_log"
ELLIPTIC_CURVE = "elliptic_curve"

_CURVES: Dict[str, Tuple[Callable[[], Group], Callable[[], GroupParameters]]] = {
    "ec25519": (Ristretto255Group, ec25519_parameters),
    "pallas": (PallasGroup, pallas_parameters),
    "vesta": (VestaGroup, vesta_parameters),
}


@dataclass(frozen=True)
class ProtocolSuite:
    """A protocol law bound to the parameters a server uses for its lifetime."""

    kind: str
    name: str
    protocol: ChaumPedersen
    params: GroupParameters

    @property
    def group(self) -> Group:
        return self.protocol.group


def available_suites() -> Dict[str, List[str]]:
    return {
        DISCRETE_LOG: sorted(MODP_PARAMETERS),
        ELLIPTIC_CURVE: sorted(_CURVES),
    }


@lru_cache(maxsize=None)
def load_suite(kind: str, name: str) -> ProtocolSuite:
    if kind == DISCRETE_LOG:
        try:
            params = MODP_PARAMETERS[name]
        except KeyError as exc:
            raise ValueError(f"Unknown modp group '{name}'") from exc
        protocol: ChaumPedersen = DiscreteLogChaumPedersen(ModPGroup.from_parameters(params, name=name))
        return ProtocolSuite(kind=kind, name=name, protocol=protocol, params=params)

    if kind == ELLIPTIC_CURVE:
        try:
            group_factory, params_factory = _CURVES[name]
        except KeyError as exc:
            raise ValueError(f"Unknown elliptic curve '{name}'") from exc
        protocol = EllipticCurveChaumPedersen(group_factory())
        return ProtocolSuite(kind=kind, name=name, protocol=protocol, params=params_factory())

    raise ValueError(f"Unknown protocol type '{kind}'")


__all__ = ["DISCRETE_LOG", "ELLIPTIC_CURVE", "ProtocolSuite", "available_suites", "load_suite"]
