"""Chaum-Pedersen over the Pallas curve."""

from __future__ import annotations

from functools import lru_cache

from . import constants
from .group import GroupParameters
from .weierstrass import CurvePoint, WeierstrassCurve, WeierstrassGroup

PALLAS_BASE_MODULUS = 0x40000000000000000000000000000000224698FC094CF91B992D30ED00000001
PALLAS_SCALAR_MODULUS = 0x40000000000000000000000000000000224698FC0994A8DD8C46EB2100000001

PALLAS = WeierstrassCurve(name="pallas", p=PALLAS_BASE_MODULUS, n=PALLAS_SCALAR_MODULUS, b=5)


class PallasGroup(WeierstrassGroup):
    def __init__(self) -> None:
        super().__init__(PALLAS)


@lru_cache(maxsize=None)
def pallas_parameters() -> GroupParameters[CurvePoint]:
    reference = PALLAS.decode(bytes.fromhex(constants.PALLAS_REFERENCE))
    return GroupParameters(
        g=PALLAS.decode(bytes.fromhex(constants.PALLAS_G)),
        h=PALLAS.decode(bytes.fromhex(constants.PALLAS_H)),
        p=reference,
        q=reference,
    )


__all__ = ["PALLAS", "PallasGroup", "pallas_parameters"]
