"""Interface of a secondary cache tier and a simple in-memory one."""

from __future__ import annotations

import abc
import threading
from dataclasses import dataclass
from typing import Any, Dict, Generic, Hashable, Optional, Tuple, TypeVar

from theine.entry import Entry

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class SecondaryItem:
    """An entry queued for transfer to the secondary cache."""

    entry: Entry
    reason: Any
    shard: Any = None


class SecondaryCache(abc.ABC, Generic[K, V]):
    """A slower cache tier that receives entries evicted from memory."""

    @abc.abstractmethod
    def get(self, key: K) -> Optional[Tuple[V, int, int]]:
        """Return ``(value, cost, expire)`` for ``key``, or None if absent."""

    @abc.abstractmethod
    def set(self, key: K, value: V, cost: int, expire: int) -> None:
        """Store a value with its cost and expiry time."""

    @abc.abstractmethod
    def delete(self, key: K) -> None:
        """Remove ``key``; removing a missing key is not an error."""

    @abc.abstractmethod
    def handle_async_error(self, err: Optional[BaseException]) -> None:
        """Receive an error raised while writing in the background."""


class SimpleMapSecondary(SecondaryCache[K, V]):
    """A dictionary-backed secondary cache, mainly useful in tests.

    With ``err_mode`` on, :meth:`set` fails; background errors are counted
    in ``err_counter``.
    """

    def __init__(self) -> None:
        self._items: Dict[K, Tuple[V, int, int]] = {}
        self._lock = threading.Lock()
        self.err_mode = False
        self.err_counter = 0

    def get(self, key: K) -> Optional[Tuple[V, int, int]]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: K, value: V, cost: int, expire: int) -> None:
        with self._lock:
            if self.err_mode:
                raise RuntimeError("err")
            self._items[key] = (value, cost, expire)

    def delete(self, key: K) -> None:
        with self._lock:
            self._items.pop(key, None)

    def handle_async_error(self, err: Optional[BaseException]) -> None:
        if err is not None:
            with self._lock:
                self.err_counter += 1