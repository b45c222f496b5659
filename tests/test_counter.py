import threading

import pytest

from theine.counter import UnsignedCounter


def test_inc_and_add():
    counter = UnsignedCounter()
    counter.inc()
    counter.inc()
    counter.add(10)
    assert counter.value() == 12


def test_reset():
    counter = UnsignedCounter(4)
    counter.add(5)
    counter.reset()
    assert counter.value() == 0


def test_wraps_at_64_bits():
    counter = UnsignedCounter(1)
    counter.add((1 << 64) - 1)
    counter.inc()
    assert counter.value() == 0


def test_stripe_count_is_power_of_two():
    counter = UnsignedCounter(3)
    n = len(counter.stripes)
    assert n >= 3
    assert n & (n - 1) == 0


def test_invalid_stripes():
    with pytest.raises(ValueError):
        UnsignedCounter(0)


def test_concurrent_increments():
    counter = UnsignedCounter(8)
    threads_count = 8
    per_thread = 2000

    def work():
        for _ in range(per_thread):
            counter.inc()

    threads = [threading.Thread(target=work) for _ in range(threads_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.value() == threads_count * per_thread