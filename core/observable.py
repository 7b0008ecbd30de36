"""
Observable Value

Thread-safe holder for one piece of shared state.

Each Observable owns its own lock (fine-grained, never one global lock).
Reads copy the value out under the lock, so callers never hold a reference
into shared mutable state. Writers can also feed one-directional status
channels: every subscriber gets its own queue.Queue receiving each new value.

Usage:
    status = Observable(UploadState.idle())
    channel = status.subscribe()

    status.set(UploadState.creating_file())   # producer thread
    latest = status.get()                      # any thread, copied out
    transition = channel.get(timeout=1.0)      # monitor thread
"""

import copy
import logging
import queue
import threading
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")


class Observable(Generic[T]):
    """
    Lock-guarded value with copy-out reads and subscriber channels.

    Access pattern is always lock -> copy -> unlock. No lock is held while
    subscribers consume their queues.
    """

    def __init__(self, initial: T, name: str = ""):
        self.logger = logging.getLogger(__name__)
        self.name = name
        self._lock = threading.Lock()
        self._value = initial
        self._subscribers: List[queue.Queue] = []

    def get(self) -> T:
        """Return a copy of the current value."""
        with self._lock:
            return copy.copy(self._value)

    def set(self, value: T) -> None:
        """Replace the value and notify subscribers."""
        with self._lock:
            self._value = value
            subscribers = list(self._subscribers)

        for channel in subscribers:
            channel.put(copy.copy(value))

    def update(self, func: Callable[[T], T]) -> T:
        """
        Atomically compute a new value from the old one.

        Returns:
            The new value
        """
        with self._lock:
            self._value = func(self._value)
            value = self._value
            subscribers = list(self._subscribers)

        for channel in subscribers:
            channel.put(copy.copy(value))
        return copy.copy(value)

    def subscribe(self) -> "queue.Queue[T]":
        """
        Open a status channel.

        Returns:
            Queue that receives every value set after this call
        """
        channel: queue.Queue = queue.Queue()
        with self._lock:
            self._subscribers.append(channel)
        return channel

    def unsubscribe(self, channel: "queue.Queue[T]") -> None:
        """Close a channel opened with subscribe()."""
        with self._lock:
            if channel in self._subscribers:
                self._subscribers.remove(channel)

    def __repr__(self) -> str:
        return f"Observable({self.name or '?'}={self.get()!r})"
