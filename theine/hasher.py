"""Seeded 64-bit hashing of arbitrary hashable keys."""

from __future__ import annotations

import os
from typing import Callable, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)

_MASK64 = (1 << 64) - 1


def _mix(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & _MASK64
    x = ((x ^ (x >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    x = ((x ^ (x >> 27)) * 0x94D049BB133111EB) & _MASK64
    return x ^ (x >> 31)


class Hasher(Generic[K]):
    """Hashes keys to well-distributed unsigned 64-bit integers.

    Each hasher draws its own random seed, so hashes are stable for one
    hasher but differ between hashers. An optional function turns a key
    into a string that is hashed in its place.
    """

    def __init__(self, string_key_func: Optional[Callable[[K], str]] = None) -> None:
        self._key_func = string_key_func
        self._seed = int.from_bytes(os.urandom(8), "little")

    def hash(self, key: K) -> int:
        """Return the 64-bit hash of ``key``."""
        source = self._key_func(key) if self._key_func is not None else key
        return _mix((hash(source) & _MASK64) ^ self._seed)