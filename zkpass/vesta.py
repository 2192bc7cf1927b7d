"""Chaum-Pedersen over the Vesta curve, the cycle partner of Pallas."""

from __future__ import annotations

from functools import lru_cache

from . import constants
from .group import GroupParameters
from .pallas import PALLAS_BASE_MODULUS, PALLAS_SCALAR_MODULUS
from .weierstrass import CurvePoint, WeierstrassCurve, WeierstrassGroup

# Vesta is defined over the Pallas scalar field and has the Pallas base field as its order.
VESTA = WeierstrassCurve(name="vesta", p=PALLAS_SCALAR_MODULUS, n=PALLAS_BASE_MODULUS, b=5)


class VestaGroup(WeierstrassGroup):
    def __init__(self) -> None:
        super().__init__(VESTA)


@lru_cache(maxsize=None)
def vesta_parameters() -> GroupParameters[CurvePoint]:
    generator = VESTA.generator()
    return GroupParameters(
        g=generator,
        h=VESTA.hash_to_point(constants.VESTA_H_SEED),
        p=generator,
        q=generator,
    )


__all__ = ["VESTA", "VestaGroup", "vesta_parameters"]
