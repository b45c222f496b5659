"""Intrusive doubly linked list of cache entries."""

from __future__ import annotations

from typing import BinaryIO, Iterator, Optional

from theine.entry import Entry, ListType
from theine.hasher import Hasher
from theine.persistence import DataBlock
from theine.sketch import CountMinSketch


class LinkedList:
    """Doubly linked list threaded through the entries themselves.

    Policy lists (window, probation, protected) use an entry's ``prev`` and
    ``next`` links and mark the entry's segment flag; the timer-wheel list
    uses ``wheel_prev`` and ``wheel_next``. ``length`` is the sum of the
    entries' policy weights, ``count`` the number of entries.
    """

    def __init__(self, capacity: int, list_type: int) -> None:
        self.capacity = capacity
        self.list_type = ListType(list_type)
        if self.list_type == ListType.WHEEL:
            self._prev_attr, self._next_attr = "wheel_prev", "wheel_next"
        else:
            self._prev_attr, self._next_attr = "prev", "next"
        self.root = Entry()
        self.root.flag.root = True
        self.length = 0
        self.count = 0
        self.reset()

    def _prev(self, entry: Entry) -> Optional[Entry]:
        return getattr(entry, self._prev_attr)

    def _next(self, entry: Entry) -> Optional[Entry]:
        return getattr(entry, self._next_attr)

    def _set_prev(self, entry: Entry, other: Optional[Entry]) -> None:
        setattr(entry, self._prev_attr, other)

    def _set_next(self, entry: Entry, other: Optional[Entry]) -> None:
        setattr(entry, self._next_attr, other)

    def reset(self) -> None:
        """Empty the list without touching the entries."""
        self._set_next(self.root, self.root)
        self._set_prev(self.root, self.root)
        self.length = 0
        self.count = 0

    def __iter__(self) -> Iterator[Entry]:
        entry = self.front()
        while entry is not None:
            following = entry.next_in(self.list_type)
            yield entry
            entry = following

    def __reversed__(self) -> Iterator[Entry]:
        entry = self.back()
        while entry is not None:
            preceding = entry.prev_in(self.list_type)
            yield entry
            entry = preceding

    def __contains__(self, entry: object) -> bool:
        return any(e is entry for e in self)

    def front(self) -> Optional[Entry]:
        """The first entry, or None if the list is empty."""
        entry = self._next(self.root)
        return None if entry is self.root else entry

    def back(self) -> Optional[Entry]:
        """The last entry, or None if the list is empty."""
        entry = self._prev(self.root)
        return None if entry is self.root else entry

    def _insert(self, entry: Entry, at: Entry) -> None:
        if self.list_type == ListType.PROTECTED:
            entry.flag.protected = True
        elif self.list_type == ListType.PROBATION:
            entry.flag.probation = True
        elif self.list_type == ListType.WINDOW:
            entry.flag.window = True
        following = self._next(at)
        self._set_prev(entry, at)
        self._set_next(entry, following)
        self._set_next(at, entry)
        self._set_prev(following, entry)
        self.length += entry.policy_weight
        self.count += 1

    def push_front(self, entry: Entry) -> None:
        """Insert ``entry`` at the head."""
        self._insert(entry, self.root)

    def push_back(self, entry: Entry) -> None:
        """Insert ``entry`` at the tail."""
        self._insert(entry, self._prev(self.root))

    def remove(self, entry: Entry) -> None:
        """Unlink ``entry``, which must be in this list."""
        preceding, following = self._prev(entry), self._next(entry)
        self._set_next(preceding, following)
        self._set_prev(following, preceding)
        self._set_next(entry, None)
        self._set_prev(entry, None)
        if self.list_type != ListType.WHEEL:
            entry.flag.probation = False
            entry.flag.protected = False
            entry.flag.window = False
        self.length -= entry.policy_weight
        self.count -= 1

    def _move(self, entry: Entry, at: Entry) -> None:
        if entry is at:
            return
        preceding, following = self._prev(entry), self._next(entry)
        self._set_next(preceding, following)
        self._set_prev(following, preceding)
        after = self._next(at)
        self._set_prev(entry, at)
        self._set_next(entry, after)
        self._set_next(at, entry)
        self._set_prev(after, entry)

    def move_to_front(self, entry: Entry) -> None:
        """Move ``entry`` to the head."""
        self._move(entry, self.root)

    def move_to_back(self, entry: Entry) -> None:
        """Move ``entry`` to the tail."""
        self._move(entry, self._prev(self.root))

    def move_before(self, entry: Entry, mark: Entry) -> None:
        """Move ``entry`` to just before ``mark``."""
        self._move(entry, self._prev(mark))

    def move_after(self, entry: Entry, mark: Entry) -> None:
        """Move ``entry`` to just after ``mark``."""
        self._move(entry, mark)

    def pop_tail(self) -> Optional[Entry]:
        """Remove and return the last entry, or None if the list is empty."""
        entry = self._prev(self.root)
        if entry is None or entry is self.root:
            return None
        self.remove(entry)
        return entry

    def display(self) -> str:
        """Keys from head to tail, joined with '/'."""
        return "/".join(str(entry.key) for entry in self)

    def display_reverse(self) -> str:
        """Keys from tail to head, joined with '/'."""
        return "/".join(str(entry.key) for entry in reversed(self))

    def persist(
        self,
        stream: BinaryIO,
        sketch: CountMinSketch,
        hasher: Hasher,
        block_type: int,
    ) -> None:
        """Write every entry, head first, with its estimated frequency."""
        block = DataBlock(block_type, stream)
        for entry in self:
            persisted = entry.to_persisted()
            persisted.frequency = sketch.estimate(hasher.hash(persisted.key))
            block.write(persisted)
        block.save()