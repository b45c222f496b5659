"""A small bloom filter used as the doorkeeper admission policy."""

from __future__ import annotations

import math

_U32 = 0xFFFFFFFF


def next_power_of_two(i: int) -> int:
    """Smallest power of two >= ``i`` in 32-bit arithmetic (0 maps to 0)."""
    n = (i - 1) & _U32
    n |= n >> 1
    n |= n >> 2
    n |= n >> 4
    n |= n >> 8
    n |= n >> 16
    return (n + 1) & _U32


class BloomFilter:
    """Bloom filter over pre-computed 64-bit hashes."""

    def __init__(self, false_positive_rate: float) -> None:
        self.false_positive_rate = false_positive_rate
        self.capacity = 0
        self.m = 0
        self.k = 0
        self._bits = bytearray()
        self.ensure_capacity(320)

    @classmethod
    def with_size(cls, size: int) -> "BloomFilter":
        """Create a filter with ``size`` bytes of bits and no hash functions yet."""
        bloom = cls.__new__(cls)
        bloom.false_positive_rate = 0.0
        bloom.capacity = 0
        bloom.k = 0
        bloom.m = next_power_of_two((size * 8) & _U32)
        bloom._bits = bytearray((bloom.m + 7) // 8)
        return bloom

    def ensure_capacity(self, capacity: int) -> None:
        """Grow (and clear) the filter so it suits ``capacity`` items."""
        if capacity <= self.capacity:
            return
        if not 0.0 < self.false_positive_rate < 1.0:
            raise ValueError("false positive rate must be between 0 and 1")
        capacity = next_power_of_two(capacity)
        bits = capacity * -math.log(self.false_positive_rate) / (math.log(2.0) ** 2)
        m = max(next_power_of_two(int(bits) & _U32), 1024)
        self.capacity = capacity
        self.m = m
        self._bits = bytearray((m + 7) // 8)
        self.k = max(int(0.7 * m / capacity), 2)

    def _positions(self, h: int):
        h1 = h & _U32
        h2 = (h >> 32) & _U32
        mask = self.m - 1
        return [(h1 + i * h2) & mask for i in range(self.k)]

    def _get(self, bit: int) -> bool:
        return bool(self._bits[bit >> 3] & (1 << (bit & 7)))

    def _getset(self, bit: int) -> bool:
        previous = self._get(bit)
        self._bits[bit >> 3] |= 1 << (bit & 7)
        return previous

    def exist(self, h: int) -> bool:
        """Whether the hash is probably in the filter."""
        return all(self._get(bit) for bit in self._positions(h))

    def insert(self, h: int) -> bool:
        """Add a hash; return True if it was already considered present."""
        previous = [self._getset(bit) for bit in self._positions(h)]
        return all(previous)

    def reset(self) -> None:
        """Clear every bit."""
        self._bits = bytearray(len(self._bits))