"""Exceptions raised by the protocol engine and the authentication service."""

from __future__ import annotations


class ZKPassError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(ZKPassError, ValueError):
    """Byte input is malformed, has the wrong length or is not a group member."""


class NotFoundError(ZKPassError, LookupError):
    """Unknown user, or an authentication challenge that is no longer pending."""


class VerificationFailure(ZKPassError):
    """A well-formed response failed the protocol equations."""


__all__ = ["DecodeError", "NotFoundError", "VerificationFailure", "ZKPassError"]
