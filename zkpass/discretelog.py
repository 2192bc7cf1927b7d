"""Chaum-Pedersen over a prime-order subgroup of the integers modulo ``p``."""

from __future__ import annotations

import secrets
from typing import Dict

from . import constants
from .encoding import int_from_bytes, int_to_bytes
from .errors import DecodeError
from .group import Group, GroupParameters
from .protocol import ChaumPedersen, CommitParameters


class ModPGroup(Group):
    """Integers modulo the prime ``p``; ``g`` generates the subgroup of order ``q``."""

    def __init__(self, p: int, q: int, g: int, name: str = "modp") -> None:
        if p < 3 or not 0 < q < p:
            raise ValueError("Invalid modular group")
        self.p = p
        self.q = q
        self.g = g
        self.name = name

    @property
    def order(self) -> int:
        return self.q

    def encode_element(self, element: int) -> bytes:
        return int_to_bytes(element)

    def decode_element(self, data: bytes) -> int:
        value = int_from_bytes(data)
        if not 0 < value < self.p:
            raise DecodeError(f"Element is not a residue modulo the {self.name} prime")
        return value

    def encode_scalar(self, scalar: int) -> bytes:
        return int_to_bytes(scalar)

    def decode_scalar(self, data: bytes) -> int:
        return int_from_bytes(data)

    def scalar_from_digest(self, data: bytes) -> int:
        return int_from_bytes(data)

    def random_scalar(self) -> int:
        # Nonces and challenges are drawn below the modulus, not the subgroup order.
        return secrets.randbelow(self.p)

    def random_element(self) -> int:
        return pow(self.g, secrets.randbelow(self.q - 1) + 1, self.p)

    def scale(self, element: int, scalar: int) -> int:
        return pow(element, scalar, self.p)

    def combine(self, left: int, right: int) -> int:
        return (left * right) % self.p

    @classmethod
    def from_parameters(cls, params: GroupParameters[int], name: str = "modp") -> "ModPGroup":
        return cls(params.p, params.q, params.g, name=name)


class DiscreteLogChaumPedersen(ChaumPedersen):
    """Subtractive law: ``s = k - c·x (mod q)`` checked against ``y^(p - c - 1)``."""

    def challenge_response(self, params: GroupParameters[int], k: int, c: int, x: int) -> int:
        cx = c * x
        if k >= cx:
            return (k - cx) % params.q
        return params.q - (cx - k) % params.q

    def verify(self, params: GroupParameters[int], s: int, c: int, cp: CommitParameters[int]) -> bool:
        p = params.p
        exponent = p - c - 1
        lhs1 = pow(params.g, s, p)
        rhs1 = (cp.r1 * pow(cp.y1, exponent, p)) % p
        lhs2 = pow(params.h, s, p)
        rhs2 = (cp.r2 * pow(cp.y2, exponent, p)) % p
        return (lhs1 == rhs1) & (lhs2 == rhs2)


def _from_hex(p: str, q: str, g: str, h: str) -> GroupParameters[int]:
    return GroupParameters(g=int(g, 16), h=int(h, 16), p=int(p, 16), q=int(q, 16))


MODP_PARAMETERS: Dict[str, GroupParameters[int]] = {
    "rfc5114_modp_1024_160": _from_hex(
        constants.RFC5114_MODP_1024_160_P,
        constants.RFC5114_MODP_1024_160_Q,
        constants.RFC5114_MODP_1024_160_G,
        constants.RFC5114_MODP_1024_160_H,
    ),
    "rfc5114_modp_2048_224": _from_hex(
        constants.RFC5114_MODP_2048_224_P,
        constants.RFC5114_MODP_2048_224_Q,
        constants.RFC5114_MODP_2048_224_G,
        constants.RFC5114_MODP_2048_224_H,
    ),
    "rfc5114_modp_2048_256": _from_hex(
        constants.RFC5114_MODP_2048_256_P,
        constants.RFC5114_MODP_2048_256_Q,
        constants.RFC5114_MODP_2048_256_G,
        constants.RFC5114_MODP_2048_256_H,
    ),
    "toy": GroupParameters(g=constants.TOY_G, h=constants.TOY_H, p=constants.TOY_P, q=constants.TOY_Q),
}


__all__ = ["DiscreteLogChaumPedersen", "MODP_PARAMETERS", "ModPGroup"]
