"""Tests for the Snowflake id generator.

Critical Invariants:
- decompose(next_id()) returns the configured partition and machine
- Ids increase strictly for a single caller
- Sequence exhaustion waits for the next millisecond instead of wrapping
- Clock regression is fatal and leaves state untouched
- Invalid widths and ids fail at construction
"""

import pytest

from idforge import (
    DEFAULT_EPOCH,
    ClockRegressionError,
    ClockTimeoutError,
    ConfigurationError,
    ManualClock,
    SnowflakeGenerator,
    SnowflakeLayout,
)

START_MS = 1_700_000_000_000


class SteppingClock:
    """Returns `start` for the first `hold` reads, then start + 1."""

    def __init__(self, start: int, hold: int):
        self.start = start
        self.hold = hold
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        return self.start if self.reads <= self.hold else self.start + 1


# Layout and construction


def test_default_layout():
    layout = SnowflakeLayout.derive()
    assert (layout.partition_bits, layout.machine_bits, layout.sequence_bits) == (4, 4, 10)
    assert layout.timestamp_shift == 18
    assert layout.timestamp_bits == 45


def test_sequence_capped_at_ceiling():
    layout = SnowflakeLayout.derive(partition_bits=0, machine_bits=0)
    assert layout.sequence_bits == 10


def test_sequence_below_floor_rejected():
    """CRITICAL: too many id bits must fail at construction, not at runtime."""
    with pytest.raises(ConfigurationError, match="sequence size"):
        SnowflakeGenerator(0, 0, partition_bits=8, machine_bits=8)


def test_partition_id_out_of_range_rejected():
    with pytest.raises(ConfigurationError, match="partition_id"):
        SnowflakeGenerator(32, 0, partition_bits=5)
    with pytest.raises(ConfigurationError, match="partition_id"):
        SnowflakeGenerator(-1, 0)


def test_machine_id_out_of_range_rejected():
    with pytest.raises(ConfigurationError, match="machine_id"):
        SnowflakeGenerator(0, 16)


def test_id_with_zero_bits_rejected():
    with pytest.raises(ConfigurationError, match="0 bits"):
        SnowflakeGenerator(0, 1, partition_bits=0)


def test_negative_bits_rejected():
    with pytest.raises(ConfigurationError):
        SnowflakeGenerator(0, 0, machine_bits=-1)


def test_unused_field_takes_no_bits(clock):
    generator = SnowflakeGenerator(None, 5, machine_bits=11, clock=clock)
    layout = generator.layout
    assert (layout.partition_bits, layout.machine_bits, layout.sequence_bits) == (0, 11, 10)
    assert generator.partition_id == 0


def test_two_argument_form_uses_default_widths():
    generator = SnowflakeGenerator(3, 7)
    assert generator.layout == SnowflakeLayout(4, 4, 10)
    assert generator.epoch == DEFAULT_EPOCH


# Generation


def test_same_millisecond_ids_are_consecutive(snowflake):
    """5 partition bits + 5 machine bits, same ms, no wrap: id2 == id1 + 1."""
    id1 = snowflake.next_id()
    id2 = snowflake.next_id()
    assert id2 == id1 + 1


def test_decompose_returns_configured_ids(snowflake, clock):
    for step in range(50):
        if step % 7 == 0:
            clock.advance()
        parts = snowflake.decompose(snowflake.next_id())
        assert parts.partition == 3
        assert parts.machine == 17
        assert parts.timestamp == clock.now


def test_ids_fit_in_63_bits(snowflake):
    assert 0 <= snowflake.next_id() < 1 << 63


def test_sequence_resets_when_clock_advances(snowflake, clock):
    snowflake.next_id()
    snowflake.next_id()
    clock.advance()
    assert snowflake.decompose(snowflake.next_id()).sequence == 0


def test_ids_strictly_increase():
    generator = SnowflakeGenerator(1, 1, clock=ManualClock(START_MS, auto_advance=1))
    ids = [generator.next_id() for _ in range(1000)]
    assert ids == sorted(set(ids))


def test_sequence_exhaustion_waits_for_next_millisecond():
    """CRITICAL: after 2**sequence_bits ids in one ms, the next id uses a later ms."""
    per_ms = 1 << 10
    clock = SteppingClock(START_MS, hold=per_ms + 1)
    generator = SnowflakeGenerator(1, 1, clock=clock)

    ids = [generator.next_id() for _ in range(per_ms)]
    assert [generator.decompose(i).sequence for i in ids] == list(range(per_ms))

    overflow = generator.next_id()
    parts = generator.decompose(overflow)
    assert parts.timestamp == START_MS + 1
    assert parts.sequence == 0
    assert overflow > ids[-1]


def test_sequence_exhaustion_times_out_without_duplicates(clock):
    generator = SnowflakeGenerator(1, 1, clock=clock, wait_timeout=0)
    issued = {generator.next_id() for _ in range(1 << 10)}

    with pytest.raises(ClockTimeoutError) as excinfo:
        generator.next_id()
    assert excinfo.value.timeout == 0
    # Still stuck in the same ms: still refused
    with pytest.raises(ClockTimeoutError):
        generator.next_id()

    clock.advance()
    fresh = generator.next_id()
    assert fresh not in issued
    assert fresh > max(issued)


def test_clock_regression_is_fatal(snowflake, clock):
    first = snowflake.next_id()
    clock.advance(-5)
    with pytest.raises(ClockRegressionError) as excinfo:
        snowflake.next_id()
    assert excinfo.value.last - excinfo.value.current == 5
    assert snowflake.last_timestamp == START_MS

    clock.advance(5)
    assert snowflake.next_id() > first


def test_clock_before_epoch_is_rejected():
    generator = SnowflakeGenerator(0, 0, clock=ManualClock(DEFAULT_EPOCH - 1))
    with pytest.raises(ClockRegressionError):
        generator.next_id()


def test_min_id_floor(clock):
    floor = 1 << 55
    generator = SnowflakeGenerator(2, 2, clock=clock, min_id=floor)
    new_id = generator.next_id()
    assert new_id >= floor
    parts = generator.decompose(new_id)
    assert parts.timestamp == START_MS
    assert (parts.partition, parts.machine) == (2, 2)


def test_negative_min_id_rejected(snowflake):
    with pytest.raises(ConfigurationError, match="min id"):
        snowflake.set_min_id(-1)


def test_min_id_past_timestamp_field_rejected_at_construction(clock):
    with pytest.raises(ConfigurationError, match="min id"):
        SnowflakeGenerator(0, 0, clock=clock, min_id=1 << 63)


def test_oversized_min_id_keeps_previous_floor(snowflake):
    snowflake.set_min_id(1 << 55)
    with pytest.raises(ConfigurationError, match="timestamp bits"):
        snowflake.set_min_id(1 << 63)
    assert snowflake.next_id() >= 1 << 55


def test_time_delta_overflow_rejected(clock):
    generator = SnowflakeGenerator(0, 0, clock=clock, min_id=(1 << 63) - 1)
    with pytest.raises(ConfigurationError, match="timestamp bits"):
        generator.next_id()


def test_distinct_machines_never_collide(clock):
    a = SnowflakeGenerator(0, 1, clock=clock)
    b = SnowflakeGenerator(0, 2, clock=clock)
    ids_a = {a.next_id() for _ in range(100)}
    ids_b = {b.next_id() for _ in range(100)}
    assert not ids_a & ids_b
