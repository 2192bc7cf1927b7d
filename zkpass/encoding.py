"""Byte-level helpers shared by the group encodings."""

from __future__ import annotations

from .errors import DecodeError

WIDE_BYTES = 64


def int_to_bytes(value: int) -> bytes:
    """Minimal big-endian encoding; zero encodes as a single null byte."""

    if value < 0:
        raise ValueError("Only non-negative integers can be encoded")
    length = max(1, (value.bit_length() + 7) // 8)
    return value.to_bytes(length, "big")


def int_from_bytes(data: bytes) -> int:
    return int.from_bytes(data, "big")


def to_le32(value: int) -> bytes:
    return value.to_bytes(32, "little")


def from_le32(data: bytes, what: str = "value") -> int:
    if len(data) != 32:
        raise DecodeError(f"Invalid bytes length for {what}: expected 32, got {len(data)}")
    return int.from_bytes(data, "little")


def reduce_wide(data: bytes, order: int) -> int:
    """Reduce arbitrary-length input to a uniform scalar modulo ``order``.

    The input is zero-padded or truncated to a 64-byte buffer and read as a
    little-endian integer, which leaves a negligible bias for 256-bit orders.
    """

    buffer = bytes(data[:WIDE_BYTES]).ljust(WIDE_BYTES, b"\x00")
    return int.from_bytes(buffer, "little") % order


def decode_hex(value: str, what: str = "value") -> bytes:
    """Decode a hex string taken from the wire."""

    text = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise DecodeError(f"{what} must be hex encoded") from exc


__all__ = [
    "WIDE_BYTES",
    "decode_hex",
    "from_le32",
    "int_from_bytes",
    "int_to_bytes",
    "reduce_wide",
    "to_le32",
]
