"""Tests for the clock helpers."""

import itertools

from idforge import Clock, ManualClock, system_clock
from idforge.core.clock import wait_until_after


def test_system_clock_is_milliseconds():
    now = system_clock()
    # Between 2020 and 2100
    assert 1_577_836_800_000 < now < 4_102_444_800_000


def test_clocks_satisfy_protocol():
    assert isinstance(system_clock, Clock)
    assert isinstance(ManualClock(0), Clock)


def test_manual_clock_only_moves_when_told():
    clock = ManualClock(100)
    assert clock() == 100
    assert clock() == 100
    clock.advance(5)
    assert clock() == 105
    clock.set(50)
    assert clock() == 50
    assert clock.reads == 4


def test_manual_clock_auto_advance():
    clock = ManualClock(100, auto_advance=1)
    assert [clock(), clock(), clock()] == [100, 101, 102]


def test_wait_until_after_returns_first_greater_reading():
    clock = ManualClock(10, auto_advance=1)
    assert wait_until_after(clock, last=12) == 13


def test_wait_until_after_gives_up_at_deadline():
    clock = ManualClock(10)
    monotonic = itertools.count(0.0, 0.5).__next__
    assert wait_until_after(clock, last=10, timeout=1.0, monotonic=monotonic) is None
