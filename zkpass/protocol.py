"""Generic Chaum-Pedersen commitment/challenge/response/verify engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Tuple, TypeVar

from .group import Group, GroupParameters

T = TypeVar("T")


@dataclass(frozen=True)
class CommitParameters(Generic[T]):
    """Public values sent by the prover: ``(y1, y2)`` binds the secret, ``(r1, r2)`` the round."""

    y1: T
    y2: T
    r1: T
    r2: T

    def __iter__(self):
        return iter((self.y1, self.y2, self.r1, self.r2))


class ChaumPedersen(ABC):
    """The four protocol steps over one group.

    Every method is a pure function of its arguments; instances only hold
    the immutable group they operate on and may be shared between threads.
    """

    def __init__(self, group: Group) -> None:
        self.group = group

    def commitment(self, params: GroupParameters, x: int) -> Tuple[CommitParameters, int]:
        group = self.group
        y1 = group.scale(params.g, x)
        y2 = group.scale(params.h, x)
        k = self.commitment_random(params)
        r1 = group.scale(params.g, k)
        r2 = group.scale(params.h, k)
        return CommitParameters(y1=y1, y2=y2, r1=r1, r2=r2), k

    def commitment_random(self, params: GroupParameters) -> int:
        return self.group.random_scalar()

    def challenge(self, params: GroupParameters) -> int:
        return self.group.random_scalar()

    @abstractmethod
    def challenge_response(self, params: GroupParameters, k: int, c: int, x: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def verify(self, params: GroupParameters, s: int, c: int, cp: CommitParameters) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.group!r})"


class EllipticCurveChaumPedersen(ChaumPedersen):
    """Additive law shared by the elliptic-curve groups: ``s = k + c·x``."""

    def challenge_response(self, params: GroupParameters, k: int, c: int, x: int) -> int:
        return (k + c * x) % self.group.order

    def verify(self, params: GroupParameters, s: int, c: int, cp: CommitParameters) -> bool:
        group = self.group
        first = group.equals(
            group.scale(params.g, s),
            group.combine(cp.r1, group.scale(cp.y1, c)),
        )
        second = group.equals(
            group.scale(params.h, s),
            group.combine(cp.r2, group.scale(cp.y2, c)),
        )
        return first & second


def execute_protocol(protocol: ChaumPedersen, params: GroupParameters, x: int) -> bool:
    """Run one honest round with both roles in-process."""

    cp, k = protocol.commitment(params, x)
    c = protocol.challenge(params)
    s = protocol.challenge_response(params, k, c, x)
    return protocol.verify(params, s, c, cp)


def encode_commitment(group: Group, cp: CommitParameters) -> Tuple[bytes, bytes, bytes, bytes]:
    return tuple(group.encode_element(value) for value in cp)  # type: ignore[return-value]


def decode_commitment(group: Group, data: Tuple[bytes, bytes, bytes, bytes]) -> CommitParameters[Any]:
    y1, y2, r1, r2 = (group.decode_element(value) for value in data)
    return CommitParameters(y1=y1, y2=y2, r1=r1, r2=r2)


__all__ = [
    "ChaumPedersen",
    "CommitParameters",
    "EllipticCurveChaumPedersen",
    "decode_commitment",
    "encode_commitment",
    "execute_protocol",
]
