"""Time-ordered log identifiers in the 32-character hyphen-less UUID form."""

from __future__ import annotations

import os
import string
import time
import uuid

__all__ = ["uuid7", "new_log_id", "from_log_id"]

_HEX = frozenset(string.hexdigits)
_RANDOM_MASK = (1 << 80) - 1


def uuid7() -> uuid.UUID:
    """Return a version 7 UUID: a millisecond Unix timestamp followed by random bits."""
    millis = time.time_ns() // 1_000_000
    value = (millis & ((1 << 48) - 1)) << 80
    value |= int.from_bytes(os.urandom(10), "big") & _RANDOM_MASK
    value &= ~(0xF << 76)
    value |= 0x7 << 76
    value &= ~(0x3 << 62)
    value |= 0x2 << 62
    return uuid.UUID(int=value)


def new_log_id() -> str:
    """Return a fresh log id: a UUID v7 as 32 lower-case hex digits."""
    return uuid7().hex


def from_log_id(log_id: str) -> uuid.UUID | None:
    """Parse a 32-character hyphen-less log id back into a UUID, or return None."""
    if len(log_id) != 32 or not set(log_id) <= _HEX:
        return None
    formatted = "-".join(
        (log_id[0:8], log_id[8:12], log_id[12:16], log_id[16:20], log_id[20:32])
    )
    try:
        return uuid.UUID(formatted)
    except ValueError:
        return None