"""Hit and miss statistics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Stats:
    """A snapshot of cache hits and misses."""

    hits: int = 0
    misses: int = 0

    def hit_ratio(self) -> float:
        """Fraction of lookups that hit; 0.0 when there were none."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total