"""Striped unsigned 64-bit counter for contended increments."""

from __future__ import annotations

import os
import random
import threading
from typing import List, Optional

_MASK64 = (1 << 64) - 1


def _round_up_power_of_two(n: int) -> int:
    return 1 << (n - 1).bit_length()


class _Stripe:
    __slots__ = ("lock", "value")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.value = 0


class UnsignedCounter:
    """An unsigned 64-bit counter split over several stripes.

    Concurrent updates land on different stripes to reduce contention;
    the value is the sum of all stripes, wrapping modulo 2**64.
    """

    def __init__(self, stripes: Optional[int] = None) -> None:
        if stripes is None:
            stripes = os.cpu_count() or 1
        if stripes < 1:
            raise ValueError("stripes must be positive")
        count = _round_up_power_of_two(stripes)
        self.stripes: List[_Stripe] = [_Stripe() for _ in range(count)]
        self._mask = count - 1

    def inc(self) -> None:
        """Increment the counter by 1."""
        self.add(1)

    def add(self, delta: int) -> None:
        """Add ``delta`` to the counter."""
        index = threading.get_ident() & self._mask
        while True:
            stripe = self.stripes[index]
            if stripe.lock.acquire(blocking=False):
                try:
                    stripe.value = (stripe.value + delta) & _MASK64
                finally:
                    stripe.lock.release()
                return
            # Contended: try another randomly selected stripe.
            index = random.getrandbits(32) & self._mask

    def value(self) -> int:
        """Current value; may miss updates still in progress."""
        return sum(stripe.value for stripe in self.stripes) & _MASK64

    def reset(self) -> None:
        """Set the counter back to zero; not safe against concurrent updates."""
        for stripe in self.stripes:
            stripe.value = 0