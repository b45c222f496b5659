"""Suppression of duplicate concurrent calls for the same key."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _Call(Generic[V]):
    """An in-flight or completed call."""

    __slots__ = ("done", "value", "error")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: Optional[V] = None
        self.error: Optional[BaseException] = None


class Group(Generic[K, V]):
    """A namespace in which work is run with duplicate suppression.

    While a call for a key is running, other callers asking for the same
    key wait for it and receive its result instead of running their own.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: Dict[K, _Call[V]] = {}

    def do(self, key: K, fn: Callable[[], V]) -> V:
        """Run ``fn`` for ``key`` unless a call for it is already running.

        Every caller sharing a call gets the same value, or has the same
        exception raised if ``fn`` raised.
        """
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if leader:
                call = _Call()
                self._calls[key] = call

        if not leader:
            call.done.wait()
            if call.error is not None:
                raise call.error
            return call.value  # type: ignore[return-value]

        try:
            call.value = fn()
        except BaseException as exc:
            call.error = exc
            raise
        finally:
            with self._lock:
                if self._calls.get(key) is call:
                    del self._calls[key]
            call.done.set()
        return call.value