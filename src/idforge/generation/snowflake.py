"""Snowflake-style 63-bit identifier generator.

Bit layout, most significant first (sign bit unused):

    0 | time delta (ms since epoch) | partition | machine | sequence

Partition, machine and sequence share 22 low bits by default. The sequence
takes whatever the ids leave, capped at `sequence_ceiling` (10 bits, about
1M ids/s) and refused below `sequence_floor` (7 bits, about 128K ids/s).
Keep partition_bits + machine_bits <= 12 to stay above the floor.

Usage:
    generator = SnowflakeGenerator(partition_id=1, machine_id=3)
    new_id = generator.next_id()
    parts = generator.decompose(new_id)   # SnowflakeParts(timestamp, 1, 3, seq)

Threading:
    There is no internal lock. One generator must have one writer; give each
    worker its own machine_id or wrap with SerializedIdGenerator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from idforge.core.clock import Clock, system_clock, wait_until_after
from idforge.core.errors import ClockRegressionError, ClockTimeoutError, ConfigurationError

if TYPE_CHECKING:
    from idforge.config import SnowflakeSettings

logger = logging.getLogger(__name__)

DEFAULT_EPOCH = 1586765555888
"""2020-04-13T08:12:35.888Z in milliseconds."""

TOTAL_BITS = 63
LOW_BITS = 22
DEFAULT_FIELD_BITS = 4
DEFAULT_SEQUENCE_CEILING = 10
DEFAULT_SEQUENCE_FLOOR = 7


@dataclass(frozen=True, slots=True)
class SnowflakeLayout:
    """Field widths of a Snowflake id. Timestamp takes the remaining high bits."""

    partition_bits: int = DEFAULT_FIELD_BITS
    machine_bits: int = DEFAULT_FIELD_BITS
    sequence_bits: int = DEFAULT_SEQUENCE_CEILING

    def __post_init__(self) -> None:
        if min(self.partition_bits, self.machine_bits, self.sequence_bits) < 0:
            raise ConfigurationError(f"Negative field width in {self}")
        if self.timestamp_shift >= TOTAL_BITS:
            raise ConfigurationError(
                f"Low fields take {self.timestamp_shift} bits, leaving no room for time"
            )

    @classmethod
    def derive(
        cls,
        partition_bits: int = DEFAULT_FIELD_BITS,
        machine_bits: int = DEFAULT_FIELD_BITS,
        sequence_ceiling: int = DEFAULT_SEQUENCE_CEILING,
        sequence_floor: int = DEFAULT_SEQUENCE_FLOOR,
    ) -> SnowflakeLayout:
        """Derive sequence width from the id widths.

        Raises:
            ConfigurationError: If widths are negative or the sequence falls below the floor.
        """
        if partition_bits < 0 or machine_bits < 0:
            raise ConfigurationError(
                f"Field widths must be >= 0 (partition={partition_bits}, machine={machine_bits})"
            )
        sequence_bits = min(LOW_BITS - partition_bits - machine_bits, sequence_ceiling)
        if sequence_bits < sequence_floor:
            raise ConfigurationError(
                f"Invalid sequence size: {sequence_bits} bits, at least {sequence_floor} required. "
                f"Reduce partition_bits + machine_bits ({partition_bits + machine_bits})"
            )
        return cls(partition_bits, machine_bits, sequence_bits)

    @property
    def machine_shift(self) -> int:
        return self.sequence_bits

    @property
    def partition_shift(self) -> int:
        return self.sequence_bits + self.machine_bits

    @property
    def timestamp_shift(self) -> int:
        return self.sequence_bits + self.machine_bits + self.partition_bits

    @property
    def timestamp_bits(self) -> int:
        return TOTAL_BITS - self.timestamp_shift

    @property
    def max_partition(self) -> int:
        return (1 << self.partition_bits) - 1

    @property
    def max_machine(self) -> int:
        return (1 << self.machine_bits) - 1

    @property
    def max_sequence(self) -> int:
        return (1 << self.sequence_bits) - 1

    @property
    def max_time_delta(self) -> int:
        return (1 << self.timestamp_bits) - 1


@dataclass(frozen=True, slots=True)
class SnowflakeParts:
    """Fields recovered from an id. timestamp is absolute Unix milliseconds."""

    timestamp: int
    partition: int
    machine: int
    sequence: int


def _check_field(name: str, value: int | None, bits: int) -> int:
    """Validate an id against its width. None means the field is unused."""
    if bits < 0:
        raise ConfigurationError(f"{name}_bits must be >= 0, got {bits}")
    if value is None:
        return 0
    if bits == 0:
        raise ConfigurationError(f"Invalid '{name}_id' and '{name}_bits' setting: 0 bits for id {value}")
    limit = (1 << bits) - 1
    if value < 0 or value > limit:
        raise ConfigurationError(f"Argument '{name}_id' must be in [0, {limit}], got {value}")
    return bits


class SnowflakeGenerator:
    """Monotonic 63-bit id generator for one (partition, machine) pair.

    Ids are unique across generators with distinct (partition, machine, epoch)
    and strictly increasing for one single-threaded caller.

    Args:
        partition_id: Data center / partition id, or None for no partition field.
        machine_id: Machine id within the partition, or None for no machine field.
        partition_bits: Width of the partition field (ignored when partition_id is None).
        machine_bits: Width of the machine field (ignored when machine_id is None).
        epoch: Reference time in ms subtracted from the clock.
        sequence_ceiling: Largest sequence width used.
        sequence_floor: Smallest acceptable sequence width.
        clock: Millisecond clock; defaults to the system wall clock.
        wait_timeout: Seconds to wait for the next millisecond when a
            millisecond's sequence is exhausted. None waits forever.
        min_id: Floor for generated ids, see set_min_id.

    Raises:
        ConfigurationError: On any invalid width or id.
    """

    def __init__(
        self,
        partition_id: int | None = 0,
        machine_id: int | None = 0,
        *,
        partition_bits: int = DEFAULT_FIELD_BITS,
        machine_bits: int = DEFAULT_FIELD_BITS,
        epoch: int = DEFAULT_EPOCH,
        sequence_ceiling: int = DEFAULT_SEQUENCE_CEILING,
        sequence_floor: int = DEFAULT_SEQUENCE_FLOOR,
        clock: Clock | None = None,
        wait_timeout: float | None = None,
        min_id: int = 0,
    ):
        partition_bits = _check_field("partition", partition_id, partition_bits)
        machine_bits = _check_field("machine", machine_id, machine_bits)
        if wait_timeout is not None and wait_timeout < 0:
            raise ConfigurationError(f"wait_timeout must be >= 0, got {wait_timeout}")

        self._layout = SnowflakeLayout.derive(
            partition_bits, machine_bits, sequence_ceiling, sequence_floor
        )
        self._partition_id = partition_id or 0
        self._machine_id = machine_id or 0
        self._epoch = epoch
        self._clock = clock if clock is not None else system_clock
        self._wait_timeout = wait_timeout
        self._min_step = 0
        self.set_min_id(min_id)

        self._last_timestamp = -1
        self._sequence = 0

        logger.debug(
            "SnowflakeGenerator partition=%d machine=%d layout=%s epoch=%d",
            self._partition_id,
            self._machine_id,
            self._layout,
            self._epoch,
        )

    @classmethod
    def from_settings(cls, settings: SnowflakeSettings, **overrides: Any) -> SnowflakeGenerator:
        """Build a generator from SnowflakeSettings. Keyword overrides win (e.g. clock)."""
        kwargs = settings.model_dump()
        kwargs.update(overrides)
        partition_id = kwargs.pop("partition_id")
        machine_id = kwargs.pop("machine_id")
        return cls(partition_id, machine_id, **kwargs)

    @property
    def layout(self) -> SnowflakeLayout:
        return self._layout

    @property
    def partition_id(self) -> int:
        return self._partition_id

    @property
    def machine_id(self) -> int:
        return self._machine_id

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def last_timestamp(self) -> int:
        return self._last_timestamp

    @property
    def sequence(self) -> int:
        return self._sequence

    def set_min_id(self, min_id: int) -> None:
        """Make every future id at least roughly `min_id`.

        The floor is kept in timestamp units (min_id >> timestamp_shift) and added
        to every time delta, so only its high bits matter. decompose() removes it.

        Raises:
            ConfigurationError: If min_id is negative or its floor alone overflows the
                timestamp field.
        """
        if min_id < 0:
            raise ConfigurationError(f"Invalid min id: {min_id}")
        min_step = min_id >> self._layout.timestamp_shift
        if min_step > self._layout.max_time_delta:
            raise ConfigurationError(
                f"Invalid min id: {min_id} exceeds {self._layout.timestamp_bits} timestamp bits"
            )
        self._min_step = min_step

    def next_id(self) -> int:
        """Issue the next id.

        Raises:
            ClockRegressionError: If the clock reads earlier than the last id or the epoch.
            ClockTimeoutError: If the sequence is exhausted and the clock does not
                advance within wait_timeout.
            ConfigurationError: If the time delta no longer fits the timestamp field.
        """
        now = self._clock()
        last = self._last_timestamp
        if now < last:
            logger.warning("Clock moved backwards by %dms, refusing to generate id", last - now)
            raise ClockRegressionError(now, last)

        if now == last:
            sequence = (self._sequence + 1) & self._layout.max_sequence
            if sequence == 0:
                logger.debug("Sequence exhausted at %d, waiting for next millisecond", now)
                now = self._wait_next_millis(last)
        else:
            sequence = 0

        delta = self._time_delta(now)
        self._last_timestamp = now
        self._sequence = sequence
        return self._compose(delta, sequence)

    def decompose(self, snowflake_id: int) -> SnowflakeParts:
        """Split an id issued by this generator's layout back into its fields."""
        layout = self._layout
        return SnowflakeParts(
            timestamp=(snowflake_id >> layout.timestamp_shift) + self._epoch - self._min_step,
            partition=(snowflake_id >> layout.partition_shift) & layout.max_partition,
            machine=(snowflake_id >> layout.machine_shift) & layout.max_machine,
            sequence=snowflake_id & layout.max_sequence,
        )

    def _wait_next_millis(self, last: int) -> int:
        current = wait_until_after(self._clock, last, self._wait_timeout)
        if current is None:
            raise ClockTimeoutError(self._clock(), last, self._wait_timeout)
        return current

    def _time_delta(self, now: int) -> int:
        if now < self._epoch:
            logger.warning("Clock reads %d, before epoch %d", now, self._epoch)
            raise ClockRegressionError(now, self._epoch)
        delta = now - self._epoch + self._min_step
        if delta > self._layout.max_time_delta:
            raise ConfigurationError(
                f"Time delta {delta}ms exceeds {self._layout.timestamp_bits} timestamp bits; "
                f"choose a later epoch"
            )
        return delta

    def _compose(self, delta: int, sequence: int) -> int:
        layout = self._layout
        return (
            delta << layout.timestamp_shift
            | self._partition_id << layout.partition_shift
            | self._machine_id << layout.machine_shift
            | sequence
        )
