"""Stateful id generation: Snowflake ids and the code generators built on them."""

from idforge.generation.generators import (
    Base62IdGenerator,
    FixedLengthIdGenerator,
    PrefixIdGenerator,
    SnowflakeCodeGenerator,
)
from idforge.generation.protocol import Codec, IdGenerator
from idforge.generation.serialized import SerializedIdGenerator
from idforge.generation.snowflake import (
    DEFAULT_EPOCH,
    SnowflakeGenerator,
    SnowflakeLayout,
    SnowflakeParts,
)

__all__ = [
    "IdGenerator",
    "Codec",
    "SnowflakeGenerator",
    "SnowflakeLayout",
    "SnowflakeParts",
    "DEFAULT_EPOCH",
    "SnowflakeCodeGenerator",
    "FixedLengthIdGenerator",
    "PrefixIdGenerator",
    "Base62IdGenerator",
    "SerializedIdGenerator",
]
