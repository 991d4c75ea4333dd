import time

import pytest

from femtotest.stats import Stats, StatsStack, Stopwatch


def test_success_requires_no_errors_and_no_warnings():
    assert Stats().success
    assert Stats(passed=5).success
    assert not Stats(errors=1).success
    assert not Stats(warnings=1).success


def test_pop_merges_into_parent():
    stack = StatsStack()
    outer = stack.push("outer")
    inner = stack.push("inner")
    inner.passed = 2
    inner.errors = 1
    inner.elapsed_ms = 5.0

    assert stack.pop() is inner
    assert outer.passed == 2
    assert outer.errors == 1

    outer.warnings += 1
    stack.pop()

    root = stack.root
    assert (root.passed, root.errors, root.warnings, root.elapsed_ms) == (2, 1, 1, 5.0)
    assert stack.current is root


def test_root_cannot_be_popped():
    with pytest.raises(IndexError):
        StatsStack().pop()


def test_stopwatch_accumulates_across_intervals():
    sw = Stopwatch()
    assert sw.elapsed_ms == 0.0

    sw.start()
    time.sleep(0.01)
    sw.stop()
    first = sw.elapsed_ms

    time.sleep(0.01)
    assert sw.elapsed_ms == first

    sw.start()
    time.sleep(0.01)
    sw.stop()
    assert sw.elapsed_ms > first >= 10.0 * 0.5


def test_start_new_starts_timing():
    sw = Stopwatch.start_new()
    time.sleep(0.005)
    sw.stop()
    stopped = sw.elapsed_ms

    assert stopped > 0
    time.sleep(0.005)
    assert sw.elapsed_ms == stopped
