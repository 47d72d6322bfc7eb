"""A singly linked list of values with insertion and removal at the front."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class _Node:
    __slots__ = ("item", "next")

    def __init__(self, item: Any, next_node: _Node | None = None) -> None:
        self.item = item
        self.next = next_node


class IntList:
    """Singly linked list; items are added to and taken from the front."""

    def __init__(self) -> None:
        self._first: _Node | None = None
        self._length = 0

    def prepend(self, value: Any) -> None:
        """Put ``value`` at the beginning of the list."""
        self._first = _Node(value, self._first)
        self._length += 1

    def remove(self) -> Any:
        """Take the first item off the list and return it.

        Raises IndexError if the list is empty.
        """
        if self._first is None:
            raise IndexError("remove from empty list")
        node = self._first
        self._first = node.next
        self._length -= 1
        return node.item

    def is_empty(self) -> bool:
        """Return True if the list holds no items."""
        return self._first is None

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Any]:
        node = self._first
        while node is not None:
            yield node.item
            node = node.next

    def __repr__(self) -> str:
        return f"IntList({list(self)!r})"