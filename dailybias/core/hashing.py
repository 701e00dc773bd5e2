"""Stable string hashing for deterministic date-keyed selection."""

from __future__ import annotations


def hash_string(value: str) -> int:
    """
    Non-negative 32-bit hash of ``value``.

    Uses the ``h * 31 + c`` rolling scheme on signed 32-bit arithmetic, so the
    result is identical across processes and Python versions (unlike the
    builtin ``hash``, which is salted per process).
    """
    h = 0
    for char in value:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return abs(h)


__all__ = ["hash_string"]
