"""Reversible integer <-> string codecs over an Alphabet.

Two forms:
- RadixCodec: variable width, any radix, optional sign and prefix.
- FixedWidthCodec: constant width, power-of-two radix, bit-shift arithmetic.

Decoding never raises on bad input. An unknown symbol, a missing prefix or a
wrong length yields None, and callers must check for it.

Usage:
    codec = RadixCodec(BASE62)
    codec.encode(125)        # "CB"
    codec.decode("CB")       # 125
    codec.decode("C#")       # None

    fixed = FixedWidthCodec(BASE32_FIXED, code_length=12)
    fixed.encode(0)          # "666666666666"
"""

from __future__ import annotations

from idforge.core.alphabet.models import Alphabet
from idforge.core.errors import ConfigurationError

MAX_BITS = 63


def encode_fixed(value: int, alphabet: Alphabet, width: int) -> str:
    """Map the low `width * bits_per_symbol` bits of value to exactly `width` symbols.

    Higher bits are dropped; range checking is the caller's job.
    """
    bits = alphabet.bits_per_symbol
    mask = alphabet.radix - 1
    out = []
    for _ in range(width):
        out.append(alphabet[value & mask])
        value >>= bits
    out.reverse()
    return "".join(out)


def decode_fixed(text: str, alphabet: Alphabet) -> int | None:
    """Inverse of encode_fixed. Returns None on any symbol outside the alphabet."""
    bits = alphabet.bits_per_symbol
    value = 0
    for symbol in text:
        digit = alphabet.index(symbol)
        if digit is None:
            return None
        value = (value << bits) | digit
    return value


def _check_prefix(prefix: str | None, sign: str | None = None) -> None:
    if prefix is None:
        return
    if len(prefix) != 1:
        raise ConfigurationError(f"Prefix must be a single symbol, got {prefix!r}")
    if prefix == sign:
        raise ConfigurationError(f"Prefix {prefix!r} collides with the sign marker")


class RadixCodec:
    """Variable-width positional codec for any radix >= 2.

    Negative values are written with a leading sign marker. When a prefix is
    given it is removed from the alphabet, so it can never be confused with
    a digit, and it is written after the sign and before the digits.

    Args:
        alphabet: Digit symbols, zero first.
        min_width: Pad the digits with the zero symbol up to this many symbols.
        prefix: Optional instance-specific leading symbol.
        sign: Marker for negative values. Must not be an alphabet symbol.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        *,
        min_width: int = 0,
        prefix: str | None = None,
        sign: str = "-",
    ):
        _check_prefix(prefix, sign)
        if prefix is not None:
            alphabet = alphabet.without(prefix)
        if alphabet.radix < 2:
            raise ConfigurationError("RadixCodec needs at least two symbols")
        if sign in alphabet:
            raise ConfigurationError(f"Sign marker {sign!r} is an alphabet symbol")
        if min_width < 0:
            raise ConfigurationError(f"min_width must be >= 0, got {min_width}")
        self._alphabet = alphabet
        self._min_width = min_width
        self._prefix = prefix
        self._sign = sign

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def prefix(self) -> str | None:
        return self._prefix

    def encode(self, value: int) -> str:
        """Encode value, most significant symbol first."""
        negative = value < 0
        value = -value if negative else value
        radix = self._alphabet.radix
        out = []
        while value > 0 or len(out) < self._min_width:
            value, rem = divmod(value, radix)
            out.append(self._alphabet[rem])
        if not out:
            out.append(self._alphabet[0])
        if self._prefix is not None:
            out.append(self._prefix)
        if negative:
            out.append(self._sign)
        out.reverse()
        return "".join(out)

    def decode(self, text: str) -> int | None:
        """Decode text back to an integer, or None if it is not a valid code."""
        sign = 1
        if text.startswith(self._sign):
            sign = -1
            text = text[len(self._sign) :]
        if self._prefix is not None:
            if not text.startswith(self._prefix):
                return None
            text = text[1:]
        if not text or len(text) < self._min_width:
            return None
        # Only the canonical form decodes: no padding beyond min_width, no negative zero
        if len(text) > max(self._min_width, 1) and text[0] == self._alphabet[0]:
            return None

        radix = self._alphabet.radix
        value = 0
        for symbol in text:
            digit = self._alphabet.index(symbol)
            if digit is None:
                return None
            value = value * radix + digit
        if sign < 0 and value == 0:
            return None
        return sign * value


class FixedWidthCodec:
    """Constant-width codec for power-of-two alphabets.

    Every encode runs exactly `code_length` mask-and-shift steps, so the
    output width never depends on the value.

    Args:
        alphabet: Power-of-two symbol table.
        code_length: Number of digit symbols in every code.
        prefix: Optional instance-specific leading symbol, excluded from the
            alphabet. The alphabet must still be a power of two afterwards.

    Raises:
        ConfigurationError: Non-power-of-two radix, or more than 63 bits of payload.
    """

    def __init__(self, alphabet: Alphabet, code_length: int, *, prefix: str | None = None):
        _check_prefix(prefix)
        if prefix is not None:
            alphabet = alphabet.without(prefix)
        if not alphabet.is_power_of_two:
            raise ConfigurationError(
                f"FixedWidthCodec requires a power-of-two radix, got {alphabet.radix}"
            )
        if code_length < 1:
            raise ConfigurationError(f"code_length must be >= 1, got {code_length}")
        total_bits = alphabet.bits_per_symbol * code_length
        if total_bits > MAX_BITS:
            raise ConfigurationError(
                f"{code_length} symbols of {alphabet.bits_per_symbol} bits exceed {MAX_BITS} bits"
            )
        self._alphabet = alphabet
        self._code_length = code_length
        self._prefix = prefix
        self._total_bits = total_bits

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def code_length(self) -> int:
        return self._code_length

    @property
    def max_value(self) -> int:
        """Largest encodable value: radix ** code_length - 1."""
        return (1 << self._total_bits) - 1

    def encode(self, value: int) -> str:
        """Encode value as exactly `code_length` symbols (plus prefix, if any).

        Raises:
            ValueError: If value is negative or needs more than `code_length` symbols.
        """
        if value < 0 or value > self.max_value:
            raise ValueError(f"Value {value} outside [0, {self.max_value}]")
        code = encode_fixed(value, self._alphabet, self._code_length)
        if self._prefix is not None:
            return self._prefix + code
        return code

    def decode(self, text: str) -> int | None:
        """Decode a code produced by encode, or None if it is malformed."""
        if self._prefix is not None:
            if not text.startswith(self._prefix):
                return None
            text = text[1:]
        if len(text) != self._code_length:
            return None
        return decode_fixed(text, self._alphabet)
