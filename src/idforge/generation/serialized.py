"""Lock wrapper for sharing one IdGenerator between threads.

Generators themselves never lock. Callers that need sharing wrap them here,
supplying their own lock if they already have one.

Usage:
    shared = SerializedIdGenerator(FixedLengthIdGenerator(instance_id=0))
    # safe from any thread
    code = shared.next_code()
"""

from __future__ import annotations

import threading
from typing import Any, Protocol

from idforge.generation.protocol import IdGenerator


class Lock(Protocol):
    """Context-manager lock (threading.Lock, RLock, ...)."""

    def __enter__(self) -> Any: ...

    def __exit__(self, *args: Any) -> Any: ...


class SerializedIdGenerator:
    """Serializes the stateful calls of an IdGenerator through one lock.

    get_serial and serial_to_code are pure and are not locked.

    Args:
        inner: Generator to protect.
        lock: Lock to use; a new threading.Lock by default.
    """

    def __init__(self, inner: IdGenerator, lock: Lock | None = None):
        self._inner = inner
        self._lock = lock if lock is not None else threading.Lock()

    @property
    def inner(self) -> IdGenerator:
        return self._inner

    def next_code(self) -> str:
        with self._lock:
            return self._inner.next_code()

    def next_serial(self) -> int:
        with self._lock:
            return self._inner.next_serial()

    def get_serial(self, code: str) -> int | None:
        return self._inner.get_serial(code)

    def serial_to_code(self, serial: int) -> str:
        return self._inner.serial_to_code(serial)
