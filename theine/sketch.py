"""Count-min sketch with 4-bit counters and periodic aging."""

from __future__ import annotations

from typing import Iterator, List, Tuple

_MASK64 = (1 << 64) - 1
_RESET_MASK = 0x7777777777777777
_ONE_MASK = 0x1111111111111111
_DEPTH = 4


def rehash(h: int) -> int:
    """Spread the bits of a 64-bit hash."""
    h = (h * 0x94D049BB133111EB) & _MASK64
    return h ^ (h >> 31)


class CountMinSketch:
    """Frequency estimator: blocked count-min sketch of 4-bit counters.

    Each hash picks a block of eight 64-bit words (one cache line) and one
    counter in each of four word pairs of that block. After ``sample_size``
    successful additions every counter is halved.
    """

    def __init__(self) -> None:
        self.table: List[int] = []
        self.additions = 0
        self.sample_size = 0
        self.block_mask = 0
        self.ensure_capacity(64)

    def _locate(self, h: int) -> Iterator[Tuple[int, int]]:
        block = (h & self.block_mask) << 3
        counter_hash = rehash(h)
        for depth in range(_DEPTH):
            part = counter_hash >> (depth << 3)
            index = block + (part & 1) + (depth << 1)
            yield index, ((part >> 1) & 0xF) << 2

    def _increment(self, index: int, shift: int) -> bool:
        mask = 0xF << shift
        value = self.table[index]
        if value & mask == mask:
            return False
        self.table[index] = value + (1 << shift)
        return True

    def add(self, h: int) -> bool:
        """Count one occurrence of ``h``; return True if the sketch was aged."""
        added = False
        for index, shift in self._locate(h & _MASK64):
            added = self._increment(index, shift) or added
        if added:
            self.additions += 1
            if self.additions == self.sample_size:
                self.reset()
                return True
        return False

    def addn(self, h: int, n: int) -> None:
        """Count ``n`` occurrences of ``h`` without aging."""
        locations = list(self._locate(h & _MASK64))
        for _ in range(n):
            for index, shift in locations:
                self._increment(index, shift)

    def reset(self) -> None:
        """Halve every counter and adjust the addition count."""
        count = 0
        for i, value in enumerate(self.table):
            count += (value & _ONE_MASK).bit_count()
            self.table[i] = (value >> 1) & _RESET_MASK
        self.additions = max(0, self.additions - (count >> 2)) >> 1

    def estimate(self, h: int) -> int:
        """Estimated frequency of ``h``."""
        counts = (
            (self.table[index] >> shift) & 0xF for index, shift in self._locate(h & _MASK64)
        )
        return min(min(counts), 100)

    def ensure_capacity(self, size: int) -> None:
        """Grow the table to at least ``size`` words, clearing all counts."""
        if len(self.table) >= size:
            return
        size = max(size, 16)
        new_size = 1 << (size - 1).bit_length()
        self.table = [0] * new_size
        self.sample_size = 10 * new_size
        self.block_mask = (new_size >> 3) - 1
        self.additions = 0

    def counters(self) -> List[List[int]]:
        """All counters, one list of 16 nibbles per word, most significant first."""
        return [[(word >> (4 * i)) & 0xF for i in reversed(range(16))] for word in self.table]