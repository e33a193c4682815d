"""A blocking FIFO queue and a thread id helper."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class ThreadsafeQueue(Generic[T]):
    """A FIFO queue that many threads can push to and pop from."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._ready = threading.Condition()

    def push(self, value: T) -> None:
        """Append a value and wake one waiting consumer."""
        with self._ready:
            self._items.append(value)
            self._ready.notify()

    def wait_and_pop(self, timeout: float | None = None) -> T:
        """Block until a value is available and return it.

        Raises TimeoutError if ``timeout`` seconds pass with the queue empty.
        """
        with self._ready:
            if not self._ready.wait_for(lambda: bool(self._items), timeout):
                raise TimeoutError("queue stayed empty")
            return self._items.popleft()

    def try_pop(self) -> T | None:
        """Return the front value, or None if the queue is empty."""
        with self._ready:
            return self._items.popleft() if self._items else None

    def empty(self) -> bool:
        """Whether the queue holds no values."""
        with self._ready:
            return not self._items


def id_to_str(ident: int | None = None) -> str:
    """Printable form of a thread id; the current thread's by default."""
    return str(threading.get_ident() if ident is None else ident)