"""Prime-order short Weierstrass curves ``y^2 = x^3 + b`` (the Pasta cycle).

Points use Jacobian coordinates ``(X, Y, Z)`` standing for ``(X/Z^2, Y/Z^3)``;
the point at infinity has ``Z = 0``. The compressed encoding follows the
``pasta_curves`` convention: 32 bytes holding ``x`` little-endian, with the
parity of ``y`` in the most significant bit, and 32 zero bytes for the
identity.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from typing import Optional

from .encoding import from_le32, reduce_wide, to_le32
from .errors import DecodeError
from .group import Group


def sqrt_mod(value: int, p: int) -> Optional[int]:
    """Tonelli-Shanks square root modulo an odd prime, or ``None``."""

    value %= p
    if value == 0:
        return 0
    if pow(value, (p - 1) // 2, p) != 1:
        return None
    if p % 4 == 3:
        return pow(value, (p + 1) // 4, p)

    q, s = p - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1
    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1

    m = s
    c = pow(z, q, p)
    t = pow(value, q, p)
    r = pow(value, (q + 1) // 2, p)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        r = r * b % p
    return r


@dataclass(frozen=True)
class WeierstrassCurve:
    """Curve ``y^2 = x^3 + b`` over ``F_p`` with a group of prime order ``n``."""

    name: str
    p: int
    n: int
    b: int

    def point(self, x: int, y: int) -> "CurvePoint":
        if (y * y - x * x * x - self.b) % self.p:
            raise DecodeError(f"Point is not on the {self.name} curve")
        return CurvePoint(self, x % self.p, y % self.p, 1)

    def identity(self) -> "CurvePoint":
        return CurvePoint(self, 0, 1, 0)

    def generator(self) -> "CurvePoint":
        # (-1, 2) lies on both Pasta curves since (-1)^3 + 5 = 4.
        return self.point(self.p - 1, 2)

    def lift_x(self, x: int, odd: bool) -> Optional["CurvePoint"]:
        y = sqrt_mod(x * x * x + self.b, self.p)
        if y is None:
            return None
        if (y & 1) != odd:
            y = self.p - y
        return CurvePoint(self, x, y, 1)

    def hash_to_point(self, seed: bytes) -> "CurvePoint":
        """Deterministic point with unknown discrete log, by try-and-increment."""

        counter = 0
        while True:
            digest = hashlib.sha512(seed + counter.to_bytes(4, "big")).digest()
            x = int.from_bytes(digest, "little") % self.p
            point = self.lift_x(x, odd=False)
            if point is not None and not point.is_identity():
                return point
            counter += 1

    def decode(self, data: bytes) -> "CurvePoint":
        raw = bytearray(data)
        if len(raw) != 32:
            raise DecodeError(f"Invalid bytes length for {self.name} point: expected 32, got {len(raw)}")
        odd = bool(raw[31] >> 7)
        raw[31] &= 0x7F
        x = from_le32(bytes(raw), f"{self.name} point")
        if x >= self.p:
            raise DecodeError(f"Non-canonical {self.name} x-coordinate")
        if x == 0 and not odd:
            return self.identity()
        point = self.lift_x(x, odd)
        if point is None:
            raise DecodeError(f"Failed to decompress {self.name} point")
        return point


class CurvePoint:
    __slots__ = ("curve", "x", "y", "z")

    def __init__(self, curve: WeierstrassCurve, x: int, y: int, z: int) -> None:
        self.curve = curve
        self.x = x
        self.y = y
        self.z = z

    def is_identity(self) -> bool:
        return self.z % self.curve.p == 0

    def affine(self):
        p = self.curve.p
        z_inv = pow(self.z, p - 2, p)
        z_inv2 = z_inv * z_inv % p
        return self.x * z_inv2 % p, self.y * z_inv2 % p * z_inv % p

    def double(self) -> "CurvePoint":
        if self.is_identity() or self.y % self.curve.p == 0:
            return self.curve.identity()
        p = self.curve.p
        x1, y1, z1 = self.x, self.y, self.z
        a = x1 * x1 % p
        b = y1 * y1 % p
        c = b * b % p
        d = 2 * ((x1 + b) * (x1 + b) - a - c) % p
        e = 3 * a % p
        f = e * e % p
        x3 = (f - 2 * d) % p
        y3 = (e * (d - x3) - 8 * c) % p
        z3 = 2 * y1 * z1 % p
        return CurvePoint(self.curve, x3, y3, z3)

    def __add__(self, other: "CurvePoint") -> "CurvePoint":
        if self.is_identity():
            return other
        if other.is_identity():
            return self
        p = self.curve.p
        z1z1 = self.z * self.z % p
        z2z2 = other.z * other.z % p
        u1 = self.x * z2z2 % p
        u2 = other.x * z1z1 % p
        s1 = self.y * other.z % p * z2z2 % p
        s2 = other.y * self.z % p * z1z1 % p
        h = (u2 - u1) % p
        r = 2 * (s2 - s1) % p
        if h == 0:
            if r == 0:
                return self.double()
            return self.curve.identity()
        i = (2 * h) * (2 * h) % p
        j = h * i % p
        v = u1 * i % p
        x3 = (r * r - j - 2 * v) % p
        y3 = (r * (v - x3) - 2 * s1 * j) % p
        z3 = ((self.z + other.z) * (self.z + other.z) - z1z1 - z2z2) * h % p
        return CurvePoint(self.curve, x3, y3, z3)

    def __neg__(self) -> "CurvePoint":
        return CurvePoint(self.curve, self.x, -self.y % self.curve.p, self.z)

    def __sub__(self, other: "CurvePoint") -> "CurvePoint":
        return self + (-other)

    def __mul__(self, scalar: int) -> "CurvePoint":
        scalar %= self.curve.n
        result = self.curve.identity()
        for bit in bin(scalar)[2:]:
            result = result.double()
            if bit == "1":
                result = result + self
        return result

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurvePoint) or other.curve != self.curve:
            return NotImplemented
        if self.is_identity() or other.is_identity():
            return self.is_identity() and other.is_identity()
        p = self.curve.p
        z1z1 = self.z * self.z % p
        z2z2 = other.z * other.z % p
        same_x = (self.x * z2z2 - other.x * z1z1) % p == 0
        same_y = (self.y * z2z2 * other.z - other.y * z1z1 * self.z) % p == 0
        return same_x and same_y

    def __hash__(self) -> int:
        return hash(self.encode())

    def __repr__(self) -> str:
        return f"{self.curve.name.capitalize()}Point({self.encode().hex()})"

    def encode(self) -> bytes:
        if self.is_identity():
            return bytes(32)
        x, y = self.affine()
        encoded = bytearray(to_le32(x))
        encoded[31] |= (y & 1) << 7
        return bytes(encoded)


class WeierstrassGroup(Group):
    """Group adapter over one curve; scalars are canonical little-endian."""

    def __init__(self, curve: WeierstrassCurve) -> None:
        self.curve = curve
        self.name = curve.name

    @property
    def order(self) -> int:
        return self.curve.n

    def encode_element(self, element: CurvePoint) -> bytes:
        return element.encode()

    def decode_element(self, data: bytes) -> CurvePoint:
        return self.curve.decode(data)

    def encode_scalar(self, scalar: int) -> bytes:
        return to_le32(scalar % self.curve.n)

    def decode_scalar(self, data: bytes) -> int:
        value = from_le32(data, f"{self.name} scalar")
        if value >= self.curve.n:
            raise DecodeError(f"Non-canonical {self.name} scalar")
        return value

    def scalar_from_digest(self, data: bytes) -> int:
        return reduce_wide(data, self.curve.n)

    def random_scalar(self) -> int:
        return secrets.randbelow(self.curve.n)

    def random_element(self) -> CurvePoint:
        return self.curve.generator() * (secrets.randbelow(self.curve.n - 1) + 1)

    def scale(self, element: CurvePoint, scalar: int) -> CurvePoint:
        return element * scalar

    def combine(self, left: CurvePoint, right: CurvePoint) -> CurvePoint:
        return left + right


__all__ = ["CurvePoint", "WeierstrassCurve", "WeierstrassGroup", "sqrt_mod"]
