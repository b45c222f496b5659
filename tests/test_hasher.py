from dataclasses import dataclass

import pytest

from theine.hasher import Hasher


@dataclass(frozen=True)
class Foo:
    bar: str
    extra: int = 0


def test_string_key_is_stable():
    hasher = Hasher()
    h = hasher.hash(str(123456))
    for _ in range(10):
        assert hasher.hash(str(123456)) == h


def test_struct_key_is_stable():
    hasher1 = Hasher()
    hasher2 = Hasher(lambda k: k.bar)
    h1 = hasher1.hash(Foo(bar=str(123456)))
    h2 = hasher2.hash(Foo(bar=str(123456)))
    for _ in range(10):
        assert hasher1.hash(Foo(bar=str(123456))) == h1
        assert hasher2.hash(Foo(bar=str(123456))) == h2


def test_string_key_func_ignores_other_fields():
    hasher = Hasher(lambda k: k.bar)
    assert hasher.hash(Foo("a", 1)) == hasher.hash(Foo("a", 2))


def test_hash_is_unsigned_64_bit():
    hasher = Hasher()
    for key in [0, -1, "x", (1, 2), 2**80]:
        assert 0 <= hasher.hash(key) < 2**64


def test_distinct_small_ints_do_not_collide():
    hasher = Hasher()
    assert len({hasher.hash(i) for i in range(1000)}) == 1000


def test_unhashable_key_raises():
    with pytest.raises(TypeError):
        Hasher().hash([1, 2, 3])