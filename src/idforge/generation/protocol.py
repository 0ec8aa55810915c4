"""Generator and codec protocols.

Any object with these methods can be used where an IdGenerator or Codec is
expected; no inheritance required.

Usage:
    def issue(generator: IdGenerator) -> str:
        return generator.next_code()
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Codec(Protocol):
    """Reversible int <-> str mapping. decode returns None for invalid text."""

    def encode(self, value: int) -> str:
        """Encode value as a string."""
        ...

    def decode(self, text: str) -> int | None:
        """Decode text, or None if it is not a valid code."""
        ...


@runtime_checkable
class IdGenerator(Protocol):
    """Issues serial numbers together with their string codes."""

    def next_code(self) -> str:
        """Issue a new serial and return its code."""
        ...

    def next_serial(self) -> int:
        """Issue a new serial."""
        ...

    def get_serial(self, code: str) -> int | None:
        """Serial encoded by code, or None if the code is malformed."""
        ...

    def serial_to_code(self, serial: int) -> str:
        """Code for an existing serial."""
        ...
