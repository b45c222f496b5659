"""Cache entries, the persisted form of an entry and buffer records."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from theine.flag import Flag


class ListType(enum.IntEnum):
    """Which linked list a set of entry links belongs to."""

    PROBATION = 1
    PROTECTED = 2
    WHEEL = 3
    WINDOW = 4


class WriteCode(enum.IntEnum):
    """Kind of change carried by a write buffer record."""

    NEW = 0
    REMOVE = 1
    UPDATE = 2
    EVICT = 3
    WAIT = 4


_POLICY_LISTS = (ListType.PROBATION, ListType.PROTECTED, ListType.WINDOW)


class Entry:
    """A cached key/value pair with its policy and timer-wheel links."""

    __slots__ = (
        "key",
        "value",
        "weight",
        "policy_weight",
        "expire",
        "flag",
        "prev",
        "next",
        "wheel_prev",
        "wheel_next",
    )

    def __init__(self, key: Any = None, value: Any = None, cost: int = 0, expire: int = 0) -> None:
        self.key = key
        self.value = value
        self.weight = cost
        self.policy_weight = cost
        self.expire = expire if expire > 0 else 0
        self.flag = Flag()
        self.prev: Optional[Entry] = None
        self.next: Optional[Entry] = None
        self.wheel_prev: Optional[Entry] = None
        self.wheel_next: Optional[Entry] = None

    def _neighbour(self, list_type: int, forward: bool) -> Optional["Entry"]:
        if list_type == ListType.WHEEL:
            return self.wheel_next if forward else self.wheel_prev
        if list_type in _POLICY_LISTS:
            return self.next if forward else self.prev
        return None

    def next_in(self, list_type: int) -> Optional["Entry"]:
        """The following entry in the given list, or None at the end."""
        neighbour = self._neighbour(list_type, True)
        if neighbour is None or neighbour.flag.root:
            return None
        return neighbour

    def prev_in(self, list_type: int) -> Optional["Entry"]:
        """The preceding entry in the given list, or None at the start."""
        neighbour = self._neighbour(list_type, False)
        if neighbour is None or neighbour.flag.root:
            return None
        return neighbour

    def position(self) -> str:
        """Name of the policy segment this entry is in."""
        if self.flag.window:
            return "WINDOW"
        if self.flag.probation:
            return "PROBATION"
        if self.flag.protected:
            return "PROTECTED"
        if self.flag.removed:
            return "REMOVED"
        return "UNKNOWN"

    def to_persisted(self) -> "PersistedEntry":
        """A detached copy of this entry suitable for serialisation."""
        return PersistedEntry(
            key=self.key,
            value=self.value,
            weight=self.weight,
            policy_weight=self.policy_weight,
            expire=self.expire,
            flag=Flag(self.flag.flags),
        )

    def __repr__(self) -> str:
        return f"Entry(key={self.key!r}, value={self.value!r}, weight={self.weight})"


@dataclass
class PersistedEntry:
    """Serialisable snapshot of an entry, with its estimated frequency."""

    key: Any
    value: Any
    weight: int = 0
    policy_weight: int = 0
    expire: int = 0
    frequency: int = 0
    flag: Flag = field(default_factory=Flag)

    def to_entry(self) -> Entry:
        """Rebuild an unlinked entry from this snapshot."""
        entry = Entry(self.key, self.value)
        entry.weight = self.weight
        entry.policy_weight = self.policy_weight
        entry.expire = self.expire
        entry.flag = Flag(self.flag.flags)
        return entry


@dataclass
class ReadBufItem:
    """A recorded read of an entry."""

    entry: Optional[Entry]
    hash: int = 0


@dataclass
class WriteBufItem:
    """A recorded write to an entry, applied later to the policy."""

    entry: Optional[Entry]
    cost_change: int = 0
    code: WriteCode = WriteCode.NEW
    reschedule: bool = False
    from_nvm: bool = False
    hash: int = 0