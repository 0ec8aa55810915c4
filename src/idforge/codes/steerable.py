"""Steerable codes: fixed-length strings with a chosen number of digits.

A code of `code_length` symbols holds `num_digits` digits at random
positions; the rest are letters. The letters, read as one little-endian
number in the letter alphabet, carry the bitmask of digit positions in their
low `code_length` bits. verify() rebuilds the bitmask both ways and compares,
so a code can be checked without stored state or a secret.

This proves internal consistency only; anyone who knows the scheme can
produce valid codes.

Usage:
    codec = SteerableCodec(num_digits=4, code_length=10)
    code = codec.get_code()     # e.g. "2X4Y67ezRP"
    codec.verify(code)          # True
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from idforge.core.alphabet import DIGITS_2_9, LETTERS_48, Alphabet
from idforge.core.errors import ConfigurationError

if TYPE_CHECKING:
    from idforge.config import SteerableSettings


class SteerableCodec:
    """Generates and checks steerable codes.

    The digit at position i is always digits[i % len(digits)].

    Args:
        num_digits: Number of digit symbols per code.
        code_length: Total symbols per code.
        digits: Digit alphabet; must not share symbols with letters.
        letters: Letter alphabet carrying the packed value.
        rng: Random source; a private random.SystemRandom by default.

    Raises:
        ConfigurationError: If num_digits is out of range, the alphabets overlap,
            or the letter positions cannot hold the bitmask plus random data.
    """

    def __init__(
        self,
        num_digits: int = 4,
        code_length: int = 10,
        *,
        digits: Alphabet = DIGITS_2_9,
        letters: Alphabet = LETTERS_48,
        rng: random.Random | None = None,
    ):
        if code_length < 1:
            raise ConfigurationError(f"code_length must be >= 1, got {code_length}")
        if not 0 <= num_digits <= code_length:
            raise ConfigurationError(
                f"num_digits must be in [0, {code_length}], got {num_digits}"
            )
        shared = set(digits.symbols) & set(letters.symbols)
        if shared:
            raise ConfigurationError(f"Digit and letter alphabets share {sorted(shared)}")

        letter_space = letters.radix ** (code_length - num_digits)
        # Random part sits above the bitmask; lowest bit of the range is cleared.
        max_random = (letter_space >> code_length) & ~1
        if max_random < 2:
            raise ConfigurationError(
                f"{code_length - num_digits} letters of radix {letters.radix} cannot carry "
                f"a {code_length}-bit position mask; use fewer digits or a longer code"
            )

        self._num_digits = num_digits
        self._code_length = code_length
        self._digits = digits
        self._letters = letters
        self._max_random = max_random
        self._position_mask = (1 << code_length) - 1
        self._rng = rng if rng is not None else random.SystemRandom()

    @classmethod
    def from_settings(
        cls, settings: SteerableSettings, rng: random.Random | None = None
    ) -> SteerableCodec:
        return cls(
            settings.num_digits,
            settings.code_length,
            digits=Alphabet(settings.digits),
            letters=Alphabet(settings.letters),
            rng=rng,
        )

    @property
    def num_digits(self) -> int:
        return self._num_digits

    @property
    def code_length(self) -> int:
        return self._code_length

    def get_code(self) -> str:
        """Generate one code."""
        length = self._code_length
        buf: list[str | None] = [None] * length
        positions = 0
        for _ in range(self._num_digits):
            index = self._rng.randrange(length)
            while buf[index] is not None:
                index = self._rng.randrange(length)
            buf[index] = self._digits[index % self._digits.radix]
            positions |= 1 << index

        value = self._rng.randrange(self._max_random) << length | positions
        radix = self._letters.radix
        for i in range(length):
            if buf[i] is None:
                value, rem = divmod(value, radix)
                buf[i] = self._letters[rem]
        return "".join(buf)  # type: ignore[arg-type]

    def verify(self, code: str) -> bool:
        """True iff the digit positions match the mask carried by the letters."""
        if not isinstance(code, str) or len(code) != self._code_length:
            return False
        positions = 0
        value = 0
        weight = 1
        radix = self._letters.radix
        for i, symbol in enumerate(code):
            if symbol in self._digits:
                positions |= 1 << i
                continue
            digit = self._letters.index(symbol)
            if digit is None:
                return False
            value += digit * weight
            weight *= radix
        return value & self._position_mask == positions
