"""Thread synchronisation primitives: atomic integers, latches and blocking queues."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, TypeVar

T = TypeVar("T")


def wait_for_seconds(condition: threading.Condition, seconds: float) -> bool:
    """Wait on ``condition`` for at most ``seconds``; return True if it timed out.

    The caller must hold the condition's lock, as with ``Condition.wait``.
    """
    return not condition.wait(seconds)


class AtomicInteger:
    """A signed integer of a fixed width, updated atomically with wrap-around."""

    def __init__(self, value: int = 0, bits: int = 64) -> None:
        if bits not in (32, 64):
            raise ValueError("bits must be 32 or 64")
        self._bits = bits
        self._lock = threading.Lock()
        self._value = self._wrap(value)

    def _wrap(self, value: int) -> int:
        modulus = 1 << self._bits
        value %= modulus
        if value >= modulus >> 1:
            value -= modulus
        return value

    def get(self) -> int:
        with self._lock:
            return self._value

    def get_and_add(self, x: int) -> int:
        """Add ``x`` and return the value before the addition."""
        with self._lock:
            old = self._value
            self._value = self._wrap(old + x)
            return old

    def add_and_get(self, x: int) -> int:
        """Add ``x`` and return the value after the addition."""
        with self._lock:
            self._value = self._wrap(self._value + x)
            return self._value

    def increment_and_get(self) -> int:
        return self.add_and_get(1)

    def decrement_and_get(self) -> int:
        return self.add_and_get(-1)

    def get_and_set(self, new_value: int) -> int:
        """Store ``new_value`` and return the previous value."""
        with self._lock:
            old = self._value
            self._value = self._wrap(new_value)
            return old

    def __repr__(self) -> str:
        return f"AtomicInteger({self.get()}, bits={self._bits})"


class CountDownLatch:
    """Lets threads wait until a counter has been counted down to zero."""

    def __init__(self, count: int) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._count = count

    def wait(self) -> None:
        """Block until the count reaches zero."""
        with self._condition:
            while self._count > 0:
                self._condition.wait()

    def count_down(self) -> None:
        with self._condition:
            self._count -= 1
            if self._count == 0:
                self._condition.notify_all()

    def count(self) -> int:
        with self._condition:
            return self._count


class BlockingQueue(Generic[T]):
    """An unbounded FIFO queue whose ``take`` blocks while it is empty."""

    def __init__(self) -> None:
        self._not_empty = threading.Condition(threading.Lock())
        self._queue: Deque[T] = deque()

    def put(self, item: T) -> None:
        with self._not_empty:
            self._queue.append(item)
            self._not_empty.notify()

    def take(self) -> T:
        """Remove and return the oldest item, waiting for one if needed."""
        with self._not_empty:
            while not self._queue:
                self._not_empty.wait()
            return self._queue.popleft()

    def drain(self) -> Deque[T]:
        """Remove and return every queued item at once, oldest first."""
        with self._not_empty:
            drained, self._queue = self._queue, deque()
        return drained

    def __len__(self) -> int:
        with self._not_empty:
            return len(self._queue)


class BoundedBlockingQueue(Generic[T]):
    """A FIFO queue of fixed capacity; ``put`` blocks when full, ``take`` when empty."""

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        lock = threading.Lock()
        self._not_empty = threading.Condition(lock)
        self._not_full = threading.Condition(lock)
        self._capacity = max_size
        self._queue: Deque[T] = deque()

    def put(self, item: T) -> None:
        with self._not_full:
            while len(self._queue) >= self._capacity:
                self._not_full.wait()
            self._queue.append(item)
            self._not_empty.notify()

    def take(self) -> T:
        with self._not_empty:
            while not self._queue:
                self._not_empty.wait()
            item = self._queue.popleft()
            self._not_full.notify()
            return item

    def empty(self) -> bool:
        with self._not_empty:
            return not self._queue

    def full(self) -> bool:
        with self._not_empty:
            return len(self._queue) >= self._capacity

    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._not_empty:
            return len(self._queue)