"""Capabilities every group must offer to the Chaum-Pedersen engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class GroupParameters(Generic[T]):
    """Independent generators ``g`` and ``h`` plus the reference values ``p`` and ``q``.

    For the modular group ``p`` is the prime modulus and ``q`` the order of the
    subgroup generated by ``g`` and ``h``. Elliptic-curve parameter sets carry
    reference points in ``p`` and ``q``; the arithmetic takes the order from
    the group itself.
    """

    g: T
    h: T
    p: T
    q: T


class Group(ABC):
    """A prime-order group with canonical encodings.

    Elements are whatever type the subclass chooses; scalars are plain
    non-negative integers.
    """

    name: str = ""

    @property
    @abstractmethod
    def order(self) -> int:
        """Order of the scalar field (or subgroup) the responses live in."""

    @abstractmethod
    def encode_element(self, element: Any) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decode_element(self, data: bytes) -> Any:
        """Decode ``data`` or raise :class:`~zkpass.errors.DecodeError`."""

    @abstractmethod
    def encode_scalar(self, scalar: int) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decode_scalar(self, data: bytes) -> int:
        """Decode ``data`` or raise :class:`~zkpass.errors.DecodeError`."""

    @abstractmethod
    def scalar_from_digest(self, data: bytes) -> int:
        """Build a scalar from input of any length, such as a hash digest."""

    @abstractmethod
    def random_scalar(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def random_element(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def scale(self, element: Any, scalar: int) -> Any:
        """Exponentiation or scalar multiplication, written ``element ∘ scalar``."""

    @abstractmethod
    def combine(self, left: Any, right: Any) -> Any:
        """The group law: modular multiplication or point addition."""

    def equals(self, left: Any, right: Any) -> bool:
        return left == right

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


__all__ = ["Group", "GroupParameters"]
