"""Millisecond wall-clock abstraction.

Generators take any zero-argument callable returning integer milliseconds,
so tests can drive time explicitly.

Usage:
    now = system_clock()
    generator = SnowflakeGenerator(0, 0, clock=ManualClock(1_700_000_000_000))
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of wall-clock time in integer milliseconds."""

    def __call__(self) -> int: ...


def system_clock() -> int:
    """Current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


class ManualClock:
    """Clock that only moves when told to.

    Each read can optionally advance time by `auto_advance` ms after returning,
    which is handy for exercising busy-wait loops.
    """

    def __init__(self, start: int, auto_advance: int = 0):
        self.now = start
        self.auto_advance = auto_advance
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        current = self.now
        self.now += self.auto_advance
        return current

    def advance(self, ms: int = 1) -> None:
        self.now += ms

    def set(self, ms: int) -> None:
        self.now = ms


def wait_until_after(
    clock: Clock,
    last: int,
    timeout: float | None = None,
    monotonic: Callable[[], float] = time.monotonic,
) -> int | None:
    """Poll clock until it strictly exceeds last.

    Args:
        clock: Millisecond clock to poll.
        last: Timestamp that must be passed.
        timeout: Seconds to keep polling; None polls forever.
        monotonic: Deadline source, independent of the polled clock.

    Returns:
        The first reading greater than last, or None if the timeout expired.
    """
    deadline = None if timeout is None else monotonic() + timeout
    current = clock()
    while current <= last:
        if deadline is not None and monotonic() >= deadline:
            return None
        current = clock()
    return current
