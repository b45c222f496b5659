"""Segmented LRU: a probation segment feeding a protected segment."""

from __future__ import annotations

import struct

from theine.entry import Entry, ListType
from theine.linkedlist import LinkedList


def _float32(x: float) -> float:
    return struct.unpack("f", struct.pack("f", x))[0]


class Slru:
    """Main space of the policy, split into probation and protected lists."""

    def __init__(self, size: int) -> None:
        self.maxsize = size
        # The probation list's size is dynamic.
        self.probation = LinkedList(0, ListType.PROBATION)
        protected_size = int(_float32(_float32(size) * _float32(0.8)))
        self.protected = LinkedList(protected_size, ListType.PROTECTED)

    def insert(self, entry: Entry) -> None:
        """Add a new entry to the head of probation."""
        self.probation.push_front(entry)

    def access(self, entry: Entry) -> None:
        """Promote a probation entry, or refresh a protected one."""
        if entry.flag.probation:
            self.probation.remove(entry)
            self.protected.push_front(entry)
        elif entry.flag.protected:
            self.protected.move_to_front(entry)

    def remove(self, entry: Entry) -> None:
        """Remove the entry from whichever segment holds it."""
        if entry.flag.probation:
            self.probation.remove(entry)
        elif entry.flag.protected:
            self.protected.remove(entry)

    def update_cost(self, entry: Entry, delta: int) -> None:
        """Account a change in the entry's weight to its segment."""
        if entry.flag.probation:
            self.probation.length += delta
        elif entry.flag.protected:
            self.protected.length += delta

    def __len__(self) -> int:
        return self.probation.length + self.protected.length