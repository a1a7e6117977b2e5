"""Conversion between hexadecimal and raw git object ids."""

from __future__ import annotations

GIT_RAW_OBJECT_ID = 20
GIT_HEX_OBJECT_ID = 40

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class InvalidObjectIdError(ValueError):
    """Raised when text cannot be read as a git object id."""


def git_str_to_oid(text: str) -> bytes:
    """Parse the first 40 hex characters of ``text`` into a 20-byte object id.

    Upper and lower case hex digits are accepted. Characters after the first
    40 are ignored.
    """
    hex_part = text[:GIT_HEX_OBJECT_ID]
    if len(hex_part) < GIT_HEX_OBJECT_ID or not set(hex_part) <= _HEX_DIGITS:
        raise InvalidObjectIdError(
            f"illegal character encountered while parsing git object id: {hex_part}"
        )
    return bytes.fromhex(hex_part)


def git_oid_to_str(oid: bytes) -> str:
    """Format a 20-byte object id as 40 lower case hex characters."""
    if len(oid) != GIT_RAW_OBJECT_ID:
        raise InvalidObjectIdError(
            f"git object id must be {GIT_RAW_OBJECT_ID} bytes, not {len(oid)}"
        )
    return bytes(oid).hex()