"""Thread-safe building blocks: a counter, a vector, a blocking queue, a barrier and a stack."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, List, Optional


class Counter:
    """An integer counter that can be incremented safely from many threads."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> None:
        """Add one to the counter."""
        with self._lock:
            self._value += 1

    def value(self) -> int:
        """Return the current count."""
        with self._lock:
            return self._value


class ThreadSafeVector:
    """A growable sequence whose appends and reads are guarded by a lock."""

    def __init__(self) -> None:
        self._data: List[Any] = []
        self._lock = threading.Lock()

    def append(self, value: Any) -> None:
        """Add a value at the end."""
        with self._lock:
            self._data.append(value)

    def __getitem__(self, index: int) -> Any:
        """Return the element at a non-negative index; raise IndexError otherwise."""
        with self._lock:
            if 0 <= index < len(self._data):
                return self._data[index]
        raise IndexError("Index out of range")

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class ThreadSafeQueue:
    """A FIFO queue whose ``get`` blocks until an item is available."""

    def __init__(self) -> None:
        self._items: Deque[Any] = deque()
        self._ready = threading.Condition()

    def put(self, item: Any) -> None:
        """Add an item and wake one waiting consumer."""
        with self._ready:
            self._items.append(item)
            self._ready.notify()

    def get(self, timeout: Optional[float] = None) -> Any:
        """Remove and return the oldest item, waiting for one if needed.

        Raises TimeoutError if ``timeout`` seconds pass with the queue still empty.
        """
        with self._ready:
            if not self._ready.wait_for(lambda: bool(self._items), timeout):
                raise TimeoutError("no item arrived before the timeout")
            return self._items.popleft()


class Barrier:
    """Blocks each caller of ``wait`` until ``count`` threads have called it."""

    def __init__(self, count: int) -> None:
        if count < 1:
            raise ValueError("barrier count must be at least 1")
        self._count = count
        self._waiting = 0
        self._generation = 0
        self._cond = threading.Condition()

    def wait(self) -> None:
        """Wait until the whole party has arrived; the barrier then resets."""
        with self._cond:
            generation = self._generation
            self._waiting += 1
            if self._waiting == self._count:
                self._waiting = 0
                self._generation += 1
                self._cond.notify_all()
            else:
                self._cond.wait_for(lambda: self._generation != generation)


class ConcurrentStack:
    """A LIFO stack that many threads may push to and pop from at once."""

    def __init__(self) -> None:
        self._items: List[Any] = []
        self._lock = threading.Lock()

    def push(self, value: Any) -> None:
        """Put a value on top of the stack."""
        with self._lock:
            self._items.append(value)

    def pop(self) -> Any:
        """Remove and return the top value; raise IndexError if the stack is empty."""
        with self._lock:
            if not self._items:
                raise IndexError("pop from empty stack")
            return self._items.pop()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)