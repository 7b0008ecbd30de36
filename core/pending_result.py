"""
Pending Result Cell

One-slot mailbox used by out-of-band producers (the source picker) to hand a
result to the command loop. The producer deposits, the loop takes.

take() never blocks: if the producer currently holds the lock the loop simply
tries again on its next iteration.
"""

import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class PendingResult(Generic[T]):
    """Single-slot cell; a newer deposit replaces an unconsumed one."""

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[T] = None

    def deposit(self, value: T) -> None:
        with self._lock:
            self._value = value

    def take(self) -> Optional[T]:
        """
        Remove and return the pending value without blocking.

        Returns:
            The deposited value, or None if empty or currently locked
        """
        if not self._lock.acquire(blocking=False):
            return None
        try:
            value, self._value = self._value, None
            return value
        finally:
            self._lock.release()

    def is_empty(self) -> bool:
        with self._lock:
            return self._value is None
