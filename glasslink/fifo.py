"""A thread-safe first-in first-out queue of pending requests."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class RequestQueue(Generic[T]):
    """Items leave in the order they were pushed; all operations are locked."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: deque[T] = deque(items)
        self._lock = threading.Lock()

    def push(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def shift(self) -> T:
        """Remove and return the oldest item; IndexError when empty."""
        with self._lock:
            if not self._items:
                raise IndexError("shift from an empty queue")
            return self._items.popleft()

    def peek(self) -> T:
        """Return the oldest item without removing it; IndexError when empty."""
        with self._lock:
            if not self._items:
                raise IndexError("peek into an empty queue")
            return self._items[0]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[T]:
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)