"""Nanosecond clock relative to a start instant, with a cached reading."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta

INT64_MAX = (1 << 63) - 1
INT64_MIN = -(1 << 63)


def saturating_add(a: int, b: int) -> int:
    """Add two int64 values, clamping the result to the int64 range."""
    if b > 0 and a > INT64_MAX - b:
        return INT64_MAX
    if b < 0 and a < INT64_MIN - b:
        return INT64_MIN
    return a + b


def _nanoseconds(ttl: float | timedelta) -> int:
    if isinstance(ttl, timedelta):
        return (ttl.days * 86_400 + ttl.seconds) * 1_000_000_000 + ttl.microseconds * 1_000
    return int(ttl * 1_000_000_000)


@dataclass
class Clock:
    """Measures time in nanoseconds since ``start`` (nanoseconds since the epoch)."""

    start: int = field(default_factory=time.time_ns)
    _now: int = field(default=0, repr=False)

    def now_nano(self) -> int:
        """Nanoseconds elapsed since the start instant."""
        return time.time_ns() - self.start

    def now_nano_cached(self) -> int:
        """The last reading stored by :meth:`refresh_now_cache`."""
        return self._now

    def refresh_now_cache(self) -> None:
        """Store the current reading for cheap later access."""
        self._now = self.now_nano()

    def set_now_cache(self, n: int) -> None:
        """Overwrite the cached reading."""
        self._now = n

    def expire_nano(self, ttl: float | timedelta) -> int:
        """Expiry time for a ttl given in seconds or as a timedelta.

        The result saturates at the int64 limits instead of overflowing.
        """
        return saturating_add(self.now_nano(), _nanoseconds(ttl))