"""A bounded LIFO stack holding values of any type."""

from __future__ import annotations

import argparse
from typing import Any

from mipskit.stacks import StackEmptyError, StackFullError


def _successor(value: Any) -> Any:
    """Return the value after ``value``: the next character for strings."""
    if isinstance(value, str):
        return chr(ord(value) + 1)
    return value + 1


class BoundedStack:
    """Last-in-first-out stack with a fixed maximum number of elements."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("stack size must be at least 1")
        self._size = size
        self._items: list[Any] = []

    @property
    def size(self) -> int:
        """Maximum capacity of the stack."""
        return self._size

    def push(self, value: Any) -> None:
        """Put ``value`` on top of the stack; raise StackFullError on overflow."""
        if self.is_full():
            raise StackFullError("stack is full")
        self._items.append(value)

    def pop(self) -> Any:
        """Remove the top value and return it; raise StackEmptyError if empty."""
        if self.is_empty():
            raise StackEmptyError("stack is empty")
        return self._items.pop()

    def is_full(self) -> bool:
        """Return True if the stack has no more room."""
        return len(self._items) == self._size

    def is_empty(self) -> bool:
        """Return True if the stack has nothing on it."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def self_test(self, start: Any) -> list[Any]:
        """Fill the stack with successive values from ``start``, then empty it.

        Each push and pop is printed. Returns the popped values in order.
        """
        count = start
        while not self.is_full():
            print(f"pushing {count}")
            self.push(count)
            count = _successor(count)

        popped = []
        while not self.is_empty():
            value = self.pop()
            print(f"popping {value}")
            popped.append(value)
        return popped


def main(argv: list[str] | None = None) -> int:
    """Exercise the stack with integers and with characters."""
    parser = argparse.ArgumentParser(description="Run the bounded stack self tests.")
    parser.parse_args(argv)

    print("Testing stack of int")
    BoundedStack(10).self_test(17)

    print("Testing stack of char")
    BoundedStack(10).self_test("a")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())