"""Lossy ring buffer that batches recorded reads for the policy."""

from __future__ import annotations

import threading
import time
from typing import List, Optional

from theine.entry import ReadBufItem

CAPACITY = 16
_MASK = CAPACITY - 1


class ReadBuffer:
    """A small ring buffer of reads, handed to the policy in batches of 16.

    Producers never block. An item is dropped when the buffer is full or
    another producer is touching it at the same moment. The producer whose
    item fills the buffer receives the whole batch, provided the previous
    batch has been given back with :meth:`free`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._slots: List[Optional[ReadBufItem]] = [None] * CAPACITY
        self._head = 0
        self._tail = 0
        self._batch_available = True

    def add(self, item: ReadBufItem) -> Optional[List[ReadBufItem]]:
        """Record a read; return a full batch to process, or None.

        The item may be lost due to contention or a full buffer.
        """
        if not self._lock.acquire(blocking=False):
            return None
        try:
            head, tail = self._head, self._tail
            size = tail - head
            if size >= CAPACITY:
                return None
            self._slots[tail & _MASK] = ReadBufItem(item.entry, item.hash)
            self._tail = tail + 1
            if size != CAPACITY - 1:
                return None
            if not self._batch_available:
                return None
            self._batch_available = False
            batch: List[ReadBufItem] = []
            for _ in range(CAPACITY):
                index = head & _MASK
                published = self._slots[index]
                if published is not None:
                    batch.append(published)
                    self._slots[index] = None
                head += 1
            self._head = head
            return batch
        finally:
            self._lock.release()

    def items(self) -> List[ReadBufItem]:
        """The items currently held, without removing them."""
        with self._lock:
            return [item for item in self._slots if item is not None]

    def free(self) -> None:
        """Give back the batch returned by :meth:`add` once it is processed."""
        with self._lock:
            self._batch_available = True

    def clear(self) -> None:
        """Drop every held item and return to the initial state.

        Waits until any batch handed out has been given back.
        """
        while True:
            with self._lock:
                if self._batch_available:
                    self._slots = [None] * CAPACITY
                    self._head = 0
                    self._tail = 0
                    return
            time.sleep(0)