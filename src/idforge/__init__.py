"""idforge: unique ids and reversible short codes.

Usage:
    from idforge import SnowflakeGenerator, RadixCodec, BASE62, VerifiableCodec

    generator = SnowflakeGenerator(partition_id=1, machine_id=2)
    new_id = generator.next_id()
    short = RadixCodec(BASE62).encode(new_id)

    vouchers = VerifiableCodec()
    code = vouchers.create(activity_id=7, code_length=9)
    assert vouchers.verify(code, has_id_prefix=True)
"""

import logging

__version__ = "0.1.0"

# Self-verifying codes
from idforge.codes import SteerableCodec, VerifiableCodec

# Core primitives
from idforge.core import (
    BASE32_FIXED,
    BASE32_VERIFIABLE,
    BASE62,
    BASE62_PREFIXED,
    DIGITS_2_9,
    LETTERS_48,
    Alphabet,
    Clock,
    ClockRegressionError,
    ClockTimeoutError,
    ConfigurationError,
    FixedWidthCodec,
    IdForgeError,
    ManualClock,
    RadixCodec,
    system_clock,
)

# Generation
from idforge.generation import (
    DEFAULT_EPOCH,
    Base62IdGenerator,
    Codec,
    FixedLengthIdGenerator,
    IdGenerator,
    PrefixIdGenerator,
    SerializedIdGenerator,
    SnowflakeCodeGenerator,
    SnowflakeGenerator,
    SnowflakeLayout,
    SnowflakeParts,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Errors
    "IdForgeError",
    "ConfigurationError",
    "ClockRegressionError",
    "ClockTimeoutError",
    # Alphabets and codecs
    "Alphabet",
    "RadixCodec",
    "FixedWidthCodec",
    "BASE62",
    "BASE32_FIXED",
    "BASE32_VERIFIABLE",
    "BASE62_PREFIXED",
    "DIGITS_2_9",
    "LETTERS_48",
    # Clock
    "Clock",
    "ManualClock",
    "system_clock",
    # Generation
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
    # Codes
    "VerifiableCodec",
    "SteerableCodec",
]
