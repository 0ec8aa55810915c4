"""Alphabets and the positional codecs built on them."""

from idforge.core.alphabet.codec import (
    MAX_BITS,
    FixedWidthCodec,
    RadixCodec,
    decode_fixed,
    encode_fixed,
)
from idforge.core.alphabet.models import (
    BASE32_FIXED,
    BASE32_VERIFIABLE,
    BASE62,
    BASE62_PREFIXED,
    DIGITS_2_9,
    LETTERS_48,
    Alphabet,
)

__all__ = [
    "Alphabet",
    "RadixCodec",
    "FixedWidthCodec",
    "encode_fixed",
    "decode_fixed",
    "MAX_BITS",
    "BASE62",
    "BASE32_FIXED",
    "BASE32_VERIFIABLE",
    "BASE62_PREFIXED",
    "DIGITS_2_9",
    "LETTERS_48",
]
