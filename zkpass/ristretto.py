"""Ristretto255: the prime-order group built on Curve25519 (RFC 9496).

Point validation and arithmetic are delegated to libsodium through
``pysodium``. Points are carried as their canonical 32-byte encoding, which
is unique per group element, so equality is byte equality.

libsodium's scalar multiplication refuses to produce the identity; a zero
scalar or an identity input is answered here without calling it.
"""

from __future__ import annotations

import secrets
from functools import lru_cache

import pysodium

from . import constants
from .encoding import WIDE_BYTES, from_le32, to_le32
from .errors import DecodeError
from .group import Group, GroupParameters

L = 2**252 + 27742317777372353535851937790883648493

IDENTITY_BYTES = bytes(32)
BASEPOINT_BYTES = bytes.fromhex("e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76")


class RistrettoPoint:
    """An element of the Ristretto255 group."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    @classmethod
    def identity(cls) -> "RistrettoPoint":
        return cls(IDENTITY_BYTES)

    def is_identity(self) -> bool:
        return self._data == IDENTITY_BYTES

    def __add__(self, other: "RistrettoPoint") -> "RistrettoPoint":
        if self.is_identity():
            return other
        if other.is_identity():
            return self
        return RistrettoPoint(pysodium.crypto_core_ristretto255_add(self._data, other._data))

    def __sub__(self, other: "RistrettoPoint") -> "RistrettoPoint":
        if other.is_identity():
            return self
        return RistrettoPoint(pysodium.crypto_core_ristretto255_sub(self._data, other._data))

    def __neg__(self) -> "RistrettoPoint":
        return RistrettoPoint.identity() - self

    def __mul__(self, scalar: int) -> "RistrettoPoint":
        scalar %= L
        if scalar == 0 or self.is_identity():
            return RistrettoPoint.identity()
        n = to_le32(scalar)
        if self._data == BASEPOINT_BYTES:
            return RistrettoPoint(pysodium.crypto_scalarmult_ristretto255_base(n))
        return RistrettoPoint(pysodium.crypto_scalarmult_ristretto255(n, self._data))

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RistrettoPoint):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"RistrettoPoint({self._data.hex()})"

    def encode(self) -> bytes:
        return self._data

    @classmethod
    def decode(cls, data: bytes) -> "RistrettoPoint":
        from_le32(data, "RistrettoPoint")
        data = bytes(data)
        if data == IDENTITY_BYTES:
            return cls.identity()
        if not pysodium.crypto_core_ristretto255_is_valid_point(data):
            raise DecodeError("Invalid RistrettoPoint encoding")
        return cls(data)


BASEPOINT = RistrettoPoint(BASEPOINT_BYTES)


def reduce_scalar(data: bytes) -> int:
    """Zero-pad or truncate to 64 bytes and reduce modulo ``L`` with libsodium."""

    buffer = bytes(data[:WIDE_BYTES]).ljust(WIDE_BYTES, b"\x00")
    return int.from_bytes(pysodium.crypto_core_ristretto255_scalar_reduce(buffer), "little")


class Ristretto255Group(Group):
    name = "ec25519"

    @property
    def order(self) -> int:
        return L

    def encode_element(self, element: RistrettoPoint) -> bytes:
        return element.encode()

    def decode_element(self, data: bytes) -> RistrettoPoint:
        return RistrettoPoint.decode(data)

    def encode_scalar(self, scalar: int) -> bytes:
        return to_le32(scalar % L)

    def decode_scalar(self, data: bytes) -> int:
        from_le32(data, "Scalar")
        return reduce_scalar(data)

    def scalar_from_digest(self, data: bytes) -> int:
        return reduce_scalar(data)

    def random_scalar(self) -> int:
        return secrets.randbelow(L)

    def random_element(self) -> RistrettoPoint:
        return BASEPOINT * (secrets.randbelow(L - 1) + 1)

    def scale(self, element: RistrettoPoint, scalar: int) -> RistrettoPoint:
        return element * scalar

    def combine(self, left: RistrettoPoint, right: RistrettoPoint) -> RistrettoPoint:
        return left + right


@lru_cache(maxsize=None)
def ec25519_parameters() -> GroupParameters[RistrettoPoint]:
    return GroupParameters(
        g=RistrettoPoint.decode(bytes.fromhex(constants.EC25519_G)),
        h=RistrettoPoint.decode(bytes.fromhex(constants.EC25519_H)),
        p=BASEPOINT,
        q=BASEPOINT,
    )


__all__ = [
    "BASEPOINT",
    "L",
    "Ristretto255Group",
    "RistrettoPoint",
    "ec25519_parameters",
    "reduce_scalar",
]
