"""Alphabet value object and the standard symbol tables.

Usage:
    alphabet = Alphabet("0123456789abcdef")
    alphabet.radix            # 16
    alphabet.bits_per_symbol  # 4
    alphabet.index("a")       # 10
"""

from __future__ import annotations

from dataclasses import dataclass, field

from idforge.core.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Alphabet:
    """Ordered set of unique symbols used for positional encoding.

    Immutable, so one instance can be shared by any number of codecs.
    """

    symbols: str
    _lookup: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.symbols:
            raise ConfigurationError("Alphabet must contain at least one symbol")
        lookup = {symbol: i for i, symbol in enumerate(self.symbols)}
        if len(lookup) != len(self.symbols):
            duplicates = sorted({s for s in self.symbols if self.symbols.count(s) > 1})
            raise ConfigurationError(f"Alphabet has duplicate symbols: {''.join(duplicates)!r}")
        object.__setattr__(self, "_lookup", lookup)

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, index: int) -> str:
        return self.symbols[index]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._lookup

    @property
    def radix(self) -> int:
        return len(self.symbols)

    @property
    def is_power_of_two(self) -> bool:
        radix = self.radix
        return radix > 1 and radix & (radix - 1) == 0

    @property
    def bits_per_symbol(self) -> int:
        """log2(radix) for power-of-two alphabets.

        Raises:
            ConfigurationError: If radix is not a power of two.
        """
        if not self.is_power_of_two:
            raise ConfigurationError(
                f"Radix {self.radix} is not a power of two; bit alignment is undefined"
            )
        return self.radix.bit_length() - 1

    def index(self, symbol: str) -> int | None:
        """Position of symbol, or None if it is not part of the alphabet."""
        return self._lookup.get(symbol)

    def without(self, symbol: str) -> Alphabet:
        """Copy of this alphabet with one symbol removed (if present)."""
        return Alphabet(self.symbols.replace(symbol, ""))

    def truncated(self, length: int) -> Alphabet:
        """Copy keeping only the first `length` symbols."""
        if length < 1 or length > self.radix:
            raise ConfigurationError(f"Cannot truncate alphabet of {self.radix} to {length}")
        return Alphabet(self.symbols[:length])


# A-Za-z0-9
BASE62 = Alphabet("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789")

# 32 symbols without the easily confused 0, 1, I and O
BASE32_FIXED = Alphabet("6Qab5RcG7dSe3HfT4ghW2jXk9mYn8FpE")

BASE32_VERIFIABLE = Alphabet("9768ZBTNUFPHVRXMDGQKSCEJWLYA5342")

# Least wanted symbols (0124IKMOPZijklmnopwz) sit at the end so truncation drops them first
BASE62_PREFIXED = Alphabet("8abcdefghJLNQRSTUVWXY35679ABCDEFGHqrstuvxy0124IKMOPZijklmnopwz")

DIGITS_2_9 = Alphabet("23456789")

LETTERS_48 = Alphabet("ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz")
