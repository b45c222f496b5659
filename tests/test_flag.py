import pytest

from theine.flag import Flag, FlagBit


@pytest.mark.parametrize(
    "name", ["root", "probation", "protected", "removed", "from_nvm", "deleted", "window"]
)
def test_set_and_clear_each_flag(name):
    f = Flag()
    setattr(f, name, True)
    assert getattr(f, name) is True
    setattr(f, name, False)
    assert getattr(f, name) is False
    assert f.flags == 0


def test_combined_flags():
    f = Flag()
    f.root = True
    f.probation = True
    f.protected = False
    f.removed = True
    f.from_nvm = True

    assert f.root
    assert f.probation
    assert not f.protected
    assert f.removed
    assert f.from_nvm

    f.flags = 0

    assert not f.root
    assert not f.probation
    assert not f.protected
    assert not f.removed
    assert not f.from_nvm


def test_bits_are_independent():
    f = Flag()
    f.window = True
    f.deleted = True
    f.probation = True
    f.probation = False
    assert f.window
    assert f.deleted
    assert not f.probation
    assert f.flags == FlagBit.WINDOW | FlagBit.DELETED


def test_bit_positions():
    f = Flag()
    f.root = True
    assert f.flags == 1
    f.root = False
    f.window = True
    assert f.flags == 1 << 6