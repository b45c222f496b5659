"""Checksummed blocks of serialised items for saving and restoring a cache."""

from __future__ import annotations

import hashlib
import io
import pickle
import struct
from typing import Any, BinaryIO, Iterator, Optional

BLOCK_BUFFER_SIZE = 4 * 1024 * 1024

_HEADER = struct.Struct("<BBQQQ")


class ChecksumMismatch(ValueError):
    """A block's data does not match its stored checksum."""


def _checksum(data: bytes) -> int:
    return int.from_bytes(hashlib.blake2b(data, digest_size=8).digest(), "little")


class DataBlock:
    """A block of serialised items written to a stream as one unit.

    ``block_type`` tells what the block holds; ``secondary_type`` and
    ``index`` are free for the caller to use. Items are buffered until
    the buffer reaches :data:`BLOCK_BUFFER_SIZE` or :meth:`save` is called.
    """

    def __init__(self, block_type: int, stream: Optional[BinaryIO] = None) -> None:
        self.block_type = block_type
        self.secondary_type = 0
        self.checksum = 0
        self.index = 0
        self.data = b""
        self._stream = stream
        self._buffer = io.BytesIO()
        self._clean = True

    def write(self, item: Any) -> bool:
        """Buffer one item; return True if the block filled up and was flushed."""
        pickle.dump(item, self._buffer, protocol=pickle.HIGHEST_PROTOCOL)
        self._clean = False
        if self._buffer.tell() >= BLOCK_BUFFER_SIZE:
            self._flush()
            return True
        return False

    def save(self) -> None:
        """Write the buffered items as a block, unless nothing changed."""
        if self._clean:
            return
        self._flush()

    def mark_dirty(self) -> None:
        """Force the next :meth:`save` to write a block, even an empty one."""
        self._clean = False

    def _flush(self) -> None:
        if self._stream is None:
            raise ValueError("block has no stream to write to")
        self._clean = True
        self.data = self._buffer.getvalue()
        self.checksum = _checksum(self.data)
        self._stream.write(
            _HEADER.pack(
                self.block_type, self.secondary_type, self.checksum, self.index, len(self.data)
            )
        )
        self._stream.write(self.data)
        self._buffer = io.BytesIO()


def read_blocks(stream: BinaryIO) -> Iterator[DataBlock]:
    """Yield every block in ``stream``, verifying each checksum."""
    while True:
        header = stream.read(_HEADER.size)
        if not header:
            return
        if len(header) < _HEADER.size:
            raise ValueError("truncated block header")
        block_type, secondary_type, checksum, index, length = _HEADER.unpack(header)
        data = stream.read(length)
        if len(data) < length:
            raise ValueError("truncated block data")
        if _checksum(data) != checksum:
            raise ChecksumMismatch(f"checksum mismatch in block of type {block_type}")
        block = DataBlock(block_type)
        block.secondary_type = secondary_type
        block.checksum = checksum
        block.index = index
        block.data = data
        yield block


def decode_items(data: bytes) -> Iterator[Any]:
    """Yield the items serialised in a block's data."""
    buffer = io.BytesIO(data)
    while buffer.tell() < len(data):
        yield pickle.load(buffer)