import io

import pytest

from theine import persistence
from theine.entry import Entry
from theine.persistence import ChecksumMismatch, DataBlock, decode_items, read_blocks


def test_round_trip_single_block():
    stream = io.BytesIO()
    block = DataBlock(3, stream)
    items = [("a", 1), {"b": 2}, [3, 4]]
    for item in items:
        assert block.write(item) is False
    block.save()
    stream.seek(0)
    blocks = list(read_blocks(stream))
    assert len(blocks) == 1
    assert blocks[0].block_type == 3
    assert list(decode_items(blocks[0].data)) == items


def test_secondary_type_and_index_round_trip():
    stream = io.BytesIO()
    block = DataBlock(1, stream)
    block.secondary_type = 2
    block.index = 77
    block.write("x")
    block.save()
    stream.seek(0)
    (restored,) = read_blocks(stream)
    assert restored.secondary_type == 2
    assert restored.index == 77
    assert restored.checksum == block.checksum


def test_clean_block_writes_nothing():
    stream = io.BytesIO()
    DataBlock(1, stream).save()
    assert stream.getvalue() == b""


def test_mark_dirty_writes_empty_block():
    stream = io.BytesIO()
    block = DataBlock(1, stream)
    block.mark_dirty()
    block.save()
    stream.seek(0)
    blocks = list(read_blocks(stream))
    assert len(blocks) == 1
    assert blocks[0].data == b""
    assert list(decode_items(blocks[0].data)) == []


def test_save_twice_writes_once():
    stream = io.BytesIO()
    block = DataBlock(1, stream)
    block.write(1)
    block.save()
    size = len(stream.getvalue())
    block.save()
    assert len(stream.getvalue()) == size


def test_full_block_is_flushed(monkeypatch):
    monkeypatch.setattr(persistence, "BLOCK_BUFFER_SIZE", 1)
    stream = io.BytesIO()
    block = DataBlock(2, stream)
    assert block.write("first") is True
    assert block.write("second") is True
    block.save()
    stream.seek(0)
    blocks = list(read_blocks(stream))
    assert [b.block_type for b in blocks] == [2, 2]
    assert [list(decode_items(b.data)) for b in blocks] == [["first"], ["second"]]


def test_persisted_entries_round_trip():
    stream = io.BytesIO()
    block = DataBlock(4, stream)
    for i in range(10):
        block.write(Entry(i, str(i), i + 1).to_persisted())
    block.save()
    stream.seek(0)
    restored = [p.to_entry() for b in read_blocks(stream) for p in decode_items(b.data)]
    assert [(e.key, e.value, e.weight) for e in restored] == [
        (i, str(i), i + 1) for i in range(10)
    ]


def test_corrupted_data_raises():
    stream = io.BytesIO()
    block = DataBlock(1, stream)
    block.write("payload")
    block.save()
    raw = bytearray(stream.getvalue())
    raw[-2] ^= 0xFF
    with pytest.raises(ChecksumMismatch):
        list(read_blocks(io.BytesIO(bytes(raw))))


def test_truncated_stream_raises():
    stream = io.BytesIO()
    block = DataBlock(1, stream)
    block.write("payload")
    block.save()
    raw = stream.getvalue()
    with pytest.raises(ValueError):
        list(read_blocks(io.BytesIO(raw[:-1])))
    with pytest.raises(ValueError):
        list(read_blocks(io.BytesIO(raw[:5])))


def test_block_without_stream_cannot_save():
    block = DataBlock(1)
    block.write("x")
    with pytest.raises(ValueError):
        block.save()