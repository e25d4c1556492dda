"""Growable LIFO stack standing in for recursion over loop nesting."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class Stack(Generic[T]):
    """Explicit stack whose depth is bounded by memory, not the call stack.

    Shared by the builder (loops awaiting their ``]``), the emitter (loop
    headers whose close form is still pending) and the VM.
    """

    def __init__(self) -> None:
        self._items: list[T] = []

    def push(self, item: T) -> None:
        self._items.append(item)

    def pop(self) -> T:
        """Remove and return the top item. Raises ``IndexError`` when empty."""
        if not self._items:
            raise IndexError("pop from empty stack")
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[T]:
        """Iterate bottom to top."""
        return iter(self._items)
