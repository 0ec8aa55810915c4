"""Exceptions shared by generators and codecs.

Decode failures and checksum mismatches are deliberately absent here:
decoders return None and verifiers return False instead of raising.
"""

from __future__ import annotations


class IdForgeError(Exception):
    """Base class for all idforge errors."""

    pass


class ConfigurationError(IdForgeError, ValueError):
    """Raised at construction time for invalid widths, ids or alphabets."""

    pass


class ClockRegressionError(IdForgeError):
    """Raised when the clock reads earlier than the last issued id (or the epoch)."""

    def __init__(self, current: int, last: int, message: str | None = None):
        super().__init__(
            message
            or f"Clock moved backwards: {current}ms is before {last}ms. Refusing to generate id"
        )
        self.current = current
        self.last = last


class ClockTimeoutError(ClockRegressionError):
    """Raised when waiting for the next millisecond exceeds the wait timeout."""

    def __init__(self, current: int, last: int, timeout: float | None):
        super().__init__(
            current,
            last,
            f"Clock did not advance past {last}ms within {timeout}s (current={current})",
        )
        self.timeout = timeout
