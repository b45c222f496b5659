"""Bit flags describing where an entry currently lives in the policy."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class FlagBit(enum.IntFlag):
    """Individual bits stored in a :class:`Flag`."""

    ROOT = 1 << 0
    PROBATION = 1 << 1
    PROTECTED = 1 << 2
    REMOVED = 1 << 3
    FROM_NVM = 1 << 4
    DELETED = 1 << 5
    WINDOW = 1 << 6


@dataclass
class Flag:
    """A small set of boolean markers packed into one integer.

    All bits are read and written under the policy lock only, so keeping
    them together in one field is safe.
    """

    flags: int = 0

    def _get(self, bit: FlagBit) -> bool:
        return bool(self.flags & bit)

    def _set(self, bit: FlagBit, enabled: bool) -> None:
        if enabled:
            self.flags |= bit
        else:
            self.flags &= ~bit

    @property
    def root(self) -> bool:
        """Whether this entry is the sentinel of a linked list."""
        return self._get(FlagBit.ROOT)

    @root.setter
    def root(self, enabled: bool) -> None:
        self._set(FlagBit.ROOT, enabled)

    @property
    def probation(self) -> bool:
        """Whether this entry is in the probation segment."""
        return self._get(FlagBit.PROBATION)

    @probation.setter
    def probation(self, enabled: bool) -> None:
        self._set(FlagBit.PROBATION, enabled)

    @property
    def protected(self) -> bool:
        """Whether this entry is in the protected segment."""
        return self._get(FlagBit.PROTECTED)

    @protected.setter
    def protected(self, enabled: bool) -> None:
        self._set(FlagBit.PROTECTED, enabled)

    @property
    def window(self) -> bool:
        """Whether this entry is in the admission window."""
        return self._get(FlagBit.WINDOW)

    @window.setter
    def window(self, enabled: bool) -> None:
        self._set(FlagBit.WINDOW, enabled)

    @property
    def removed(self) -> bool:
        """Whether this entry has been removed from the main segments."""
        return self._get(FlagBit.REMOVED)

    @removed.setter
    def removed(self, enabled: bool) -> None:
        self._set(FlagBit.REMOVED, enabled)

    @property
    def from_nvm(self) -> bool:
        """Whether this entry was loaded from the secondary cache."""
        return self._get(FlagBit.FROM_NVM)

    @from_nvm.setter
    def from_nvm(self, enabled: bool) -> None:
        self._set(FlagBit.FROM_NVM, enabled)

    @property
    def deleted(self) -> bool:
        """Whether this entry was deleted explicitly through the API."""
        return self._get(FlagBit.DELETED)

    @deleted.setter
    def deleted(self, enabled: bool) -> None:
        self._set(FlagBit.DELETED, enabled)