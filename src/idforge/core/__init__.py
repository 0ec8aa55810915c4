"""Core functionalities: stateless primitives.

Architecture Note:
    core/ holds pure building blocks with no runtime state mutation:
    alphabets, codecs, the clock protocol and the error hierarchy.
    For stateful services, see generation/. For self-checking codes, see codes/.
"""

from idforge.core.alphabet import (
    BASE32_FIXED,
    BASE32_VERIFIABLE,
    BASE62,
    BASE62_PREFIXED,
    DIGITS_2_9,
    LETTERS_48,
    MAX_BITS,
    Alphabet,
    FixedWidthCodec,
    RadixCodec,
    decode_fixed,
    encode_fixed,
)
from idforge.core.clock import Clock, ManualClock, system_clock, wait_until_after
from idforge.core.errors import (
    ClockRegressionError,
    ClockTimeoutError,
    ConfigurationError,
    IdForgeError,
)

__all__ = [
    # Errors
    "IdForgeError",
    "ConfigurationError",
    "ClockRegressionError",
    "ClockTimeoutError",
    # Alphabet
    "Alphabet",
    "BASE62",
    "BASE32_FIXED",
    "BASE32_VERIFIABLE",
    "BASE62_PREFIXED",
    "DIGITS_2_9",
    "LETTERS_48",
    # Codecs
    "RadixCodec",
    "FixedWidthCodec",
    "encode_fixed",
    "decode_fixed",
    "MAX_BITS",
    # Clock
    "Clock",
    "ManualClock",
    "system_clock",
    "wait_until_after",
]
