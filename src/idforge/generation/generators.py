"""Code generators: Snowflake ids rendered through an alphabet codec.

All generators implement the IdGenerator protocol:
- FixedLengthIdGenerator: always 12 symbols of unambiguous base 32.
- PrefixIdGenerator: one prefix symbol + at least 11 symbols of base 42.
- Base62IdGenerator: variable-width base 62.

Usage:
    orders = PrefixIdGenerator(instance_id=0, prefix="O")
    code = orders.next_code()          # e.g. "Oa8RJQh3bNXc"
    serial = orders.get_serial(code)
"""

from __future__ import annotations

from typing import Any

from idforge.core.alphabet import (
    BASE32_FIXED,
    BASE62,
    BASE62_PREFIXED,
    FixedWidthCodec,
    RadixCodec,
)
from idforge.core.errors import ConfigurationError
from idforge.generation.protocol import Codec
from idforge.generation.snowflake import SnowflakeGenerator, SnowflakeParts

INSTANCE_BITS = 11
"""Up to 2048 instances (applications or CPU cores)."""


class SnowflakeCodeGenerator:
    """Pairs a SnowflakeGenerator with a Codec.

    Inherits the generator's single-writer precondition.

    Args:
        snowflake: Source of serials.
        codec: Mapping between serials and codes.
    """

    def __init__(self, snowflake: SnowflakeGenerator, codec: Codec):
        self._snowflake = snowflake
        self._codec = codec

    @property
    def snowflake(self) -> SnowflakeGenerator:
        return self._snowflake

    @property
    def codec(self) -> Codec:
        return self._codec

    def next_code(self) -> str:
        return self.serial_to_code(self._snowflake.next_id())

    def next_serial(self) -> int:
        return self._snowflake.next_id()

    def get_serial(self, code: str) -> int | None:
        return self._codec.decode(code)

    def serial_to_code(self, serial: int) -> str:
        return self._codec.encode(serial)

    def decompose(self, code: str) -> SnowflakeParts | None:
        """Snowflake fields of a code, or None if the code is malformed."""
        serial = self.get_serial(code)
        if serial is None:
            return None
        return self._snowflake.decompose(serial)


class FixedLengthIdGenerator(SnowflakeCodeGenerator):
    """Constant 12-symbol codes over BASE32_FIXED (60 bits).

    No partition field; the instance id takes an 11-bit machine field and the
    sequence 10 bits, leaving 39 bits (about 17 years from the epoch) before
    serials outgrow 12 symbols.

    Args:
        instance_id: In [0, 2047].
        **snowflake_kwargs: Forwarded to SnowflakeGenerator (epoch, clock, ...).
    """

    CODE_LENGTH = 12

    def __init__(self, instance_id: int, **snowflake_kwargs: Any):
        snowflake = SnowflakeGenerator(
            None, instance_id, machine_bits=INSTANCE_BITS, **snowflake_kwargs
        )
        super().__init__(snowflake, FixedWidthCodec(BASE32_FIXED, self.CODE_LENGTH))


class PrefixIdGenerator(SnowflakeCodeGenerator):
    """Prefixed codes, 12 symbols while serials stay below radix ** code_length.

    The prefix is removed from BASE62_PREFIXED, which is then cut to
    `radix` symbols, dropping the least wanted ones. With an 11-symbol body and
    a one-symbol prefix, radix may go up to 48; higher radix lengthens the
    usable lifetime.

    Args:
        instance_id: In [0, 2047].
        prefix: One symbol identifying the kind of id (e.g. "T" for trades).
        radix: Number of digit symbols to use.
        code_length: Minimum body width, excluding the prefix.
        **snowflake_kwargs: Forwarded to SnowflakeGenerator.
    """

    def __init__(
        self,
        instance_id: int,
        prefix: str,
        *,
        radix: int = 42,
        code_length: int = 11,
        **snowflake_kwargs: Any,
    ):
        if len(prefix) != 1:
            raise ConfigurationError(f"Prefix must be a single symbol, got {prefix!r}")
        alphabet = BASE62_PREFIXED.without(prefix).truncated(radix)
        snowflake = SnowflakeGenerator(
            None, instance_id, machine_bits=INSTANCE_BITS, **snowflake_kwargs
        )
        super().__init__(snowflake, RadixCodec(alphabet, min_width=code_length, prefix=prefix))
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix


class Base62IdGenerator(SnowflakeCodeGenerator):
    """Variable-width base 62 codes (A-Za-z0-9) for partitioned Snowflake ids."""

    def __init__(self, partition_id: int = 0, machine_id: int = 0, **snowflake_kwargs: Any):
        snowflake = SnowflakeGenerator(partition_id, machine_id, **snowflake_kwargs)
        super().__init__(snowflake, RadixCodec(BASE62))
