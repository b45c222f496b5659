import pytest

from theine.entry import Entry, ListType, PersistedEntry, ReadBufItem, WriteBufItem, WriteCode
from theine.flag import Flag


def test_new_entry_sets_weights_and_expire():
    entry = Entry("k", "v", 7, 42)
    assert entry.key == "k"
    assert entry.value == "v"
    assert entry.weight == 7
    assert entry.policy_weight == 7
    assert entry.expire == 42


def test_non_positive_expire_is_not_stored():
    assert Entry("k", "v", 1, -5).expire == 0
    assert Entry("k", "v", 1, 0).expire == 0


@pytest.mark.parametrize(
    "attribute, expected",
    [
        ("window", "WINDOW"),
        ("probation", "PROBATION"),
        ("protected", "PROTECTED"),
        ("removed", "REMOVED"),
    ],
)
def test_position(attribute, expected):
    entry = Entry("k", "v", 1)
    assert entry.position() == "UNKNOWN"
    setattr(entry.flag, attribute, True)
    assert entry.position() == expected


def test_window_takes_precedence_in_position():
    entry = Entry("k", "v", 1)
    entry.flag.probation = True
    entry.flag.window = True
    assert entry.position() == "WINDOW"


def test_next_and_prev_skip_root():
    root = Entry()
    root.flag.root = True
    a, b = Entry("a"), Entry("b")
    a.next, b.prev = b, a
    b.next, a.prev = root, root
    for list_type in (ListType.PROBATION, ListType.PROTECTED, ListType.WINDOW):
        assert a.next_in(list_type) is b
        assert b.prev_in(list_type) is a
        assert b.next_in(list_type) is None
        assert a.prev_in(list_type) is None
    assert a.next_in(ListType.WHEEL) is None


def test_wheel_links_are_separate():
    a, b = Entry("a"), Entry("b")
    a.wheel_next = b
    b.wheel_prev = a
    assert a.next_in(ListType.WHEEL) is b
    assert b.prev_in(ListType.WHEEL) is a
    assert a.next_in(ListType.PROBATION) is None
    assert b.prev_in(ListType.PROBATION) is None


def test_persisted_round_trip():
    entry = Entry("key", [1, 2], 3, 99)
    entry.policy_weight = 4
    entry.flag.protected = True
    persisted = entry.to_persisted()
    assert persisted.key == "key"
    assert persisted.value == [1, 2]
    assert persisted.weight == 3
    assert persisted.policy_weight == 4
    assert persisted.expire == 99
    assert persisted.frequency == 0
    assert persisted.flag.protected

    restored = persisted.to_entry()
    assert restored.key == entry.key
    assert restored.value == entry.value
    assert restored.weight == 3
    assert restored.policy_weight == 4
    assert restored.expire == 99
    assert restored.flag.flags == entry.flag.flags
    assert restored.next is None and restored.prev is None


def test_persisted_flag_is_a_copy():
    entry = Entry("k", "v", 1)
    persisted = entry.to_persisted()
    persisted.flag.window = True
    assert not entry.flag.window
    restored = persisted.to_entry()
    persisted.flag.window = False
    assert restored.flag.window


def test_persisted_defaults():
    persisted = PersistedEntry("k", "v")
    assert persisted.flag == Flag()
    assert persisted.to_entry().weight == 0


def test_buffer_items():
    entry = Entry("k", "v", 1)
    read = ReadBufItem(entry, 5)
    assert read.entry is entry and read.hash == 5
    write = WriteBufItem(entry, cost_change=3, code=WriteCode.UPDATE)
    assert write.code is WriteCode.UPDATE
    assert write.cost_change == 3
    assert not write.reschedule and not write.from_nvm