"""Reader-biased reader/writer lock."""

from __future__ import annotations

import contextlib
import os
import random
import threading
import time
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

# Slow-down guard: after a writer drained biased readers, reader bias stays
# off for this many times as long as the draining took.
_SLOWDOWN = 7


@dataclass
class ReaderToken:
    """Proof of a fast-path read lock; hand it back to :meth:`RBMutex.runlock`."""

    slot: int


class _RWLock:
    """Plain reader/writer lock; a waiting writer keeps new readers out."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def rlock(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def try_rlock(self) -> bool:
        with self._cond:
            if self._writer or self._waiting_writers:
                return False
            self._readers += 1
            return True

    def runlock(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("runlock of a mutex not locked for reading")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def lock(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def try_lock(self) -> bool:
        with self._cond:
            if self._writer or self._readers:
                return False
            self._writer = True
            return True

    def unlock(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("unlock of a mutex not locked for writing")
            self._writer = False
            self._cond.notify_all()


class RBMutex:
    """A reader/writer lock biased towards readers.

    While reader bias is on, readers only bump a counter in one of several
    slots. A writer turns the bias off, waits for the slots to drain and
    takes the underlying lock; bias comes back on for later readers once a
    short inhibition period has passed.
    """

    def __init__(self) -> None:
        slots = os.cpu_count() or 1
        count = 1 << (slots - 1).bit_length()
        self._slots = [0] * count
        self._mask = count - 1
        self._bias = True
        self._bias_lock = threading.Lock()
        self._inhibit_until = 0.0
        self._rw = _RWLock()

    def _fast_rlock(self) -> Optional[ReaderToken]:
        with self._bias_lock:
            if not self._bias:
                return None
            token = ReaderToken(random.getrandbits(32) & self._mask)
            self._slots[token.slot] += 1
            return token

    def _maybe_restore_bias(self) -> None:
        with self._bias_lock:
            if not self._bias and time.monotonic() > self._inhibit_until:
                self._bias = True

    def try_rlock(self) -> Tuple[bool, Optional[ReaderToken]]:
        """Try to lock for reading without blocking: ``(locked, token)``."""
        token = self._fast_rlock()
        if token is not None:
            return True, token
        if self._rw.try_rlock():
            self._maybe_restore_bias()
            return True, None
        return False, None

    def rlock(self) -> Optional[ReaderToken]:
        """Lock for reading; the returned token must go to :meth:`runlock`."""
        token = self._fast_rlock()
        if token is not None:
            return token
        self._rw.rlock()
        self._maybe_restore_bias()
        return None

    def runlock(self, token: Optional[ReaderToken]) -> None:
        """Undo one read lock, given the token it returned."""
        if token is None:
            self._rw.runlock()
            return
        with self._bias_lock:
            index = token.slot & self._mask
            if self._slots[index] <= 0:
                raise RuntimeError("invalid reader state detected")
            self._slots[index] -= 1

    def try_lock(self) -> bool:
        """Try to lock for writing without blocking."""
        if not self._rw.try_lock():
            return False
        with self._bias_lock:
            if self._bias:
                self._bias = False
                if any(self._slots):
                    # There is a reader; roll back.
                    self._bias = True
                    self._rw.unlock()
                    return False
        return True

    def lock(self) -> None:
        """Lock for writing, blocking until all readers and writers are gone."""
        self._rw.lock()
        with self._bias_lock:
            was_biased = self._bias
            self._bias = False
        if not was_biased:
            return
        start = time.monotonic()
        while True:
            with self._bias_lock:
                if not any(self._slots):
                    break
            time.sleep(0)
        now = time.monotonic()
        self._inhibit_until = now + (now - start) * _SLOWDOWN

    def unlock(self) -> None:
        """Release the write lock."""
        self._rw.unlock()

    @contextlib.contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the lock for reading for the duration of the block."""
        token = self.rlock()
        try:
            yield
        finally:
            self.runlock(token)

    @contextlib.contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the lock for writing for the duration of the block."""
        self.lock()
        try:
            yield
        finally:
            self.unlock()