"""LIFO stacks: a bounded array-backed one and an unbounded list-backed one."""

from __future__ import annotations

import argparse
from abc import ABC, abstractmethod
from typing import Any

from mipskit.intlist import IntList


class StackFullError(IndexError):
    """Raised when pushing onto a full stack."""


class StackEmptyError(IndexError):
    """Raised when popping from an empty stack."""


class Stack(ABC):
    """Abstract last-in-first-out stack."""

    @abstractmethod
    def push(self, value: Any) -> None:
        """Put ``value`` on top of the stack."""

    @abstractmethod
    def pop(self) -> Any:
        """Remove the top value and return it."""

    @abstractmethod
    def is_full(self) -> bool:
        """Return True if the stack has no more room."""

    @abstractmethod
    def is_empty(self) -> bool:
        """Return True if the stack has nothing on it."""

    def self_test(self, start: Any = 17, num_to_push: int | None = None) -> list[Any]:
        """Push successive values from ``start``, then pop them all, printing each.

        With ``num_to_push`` None the stack is filled until full, which a
        stack that never fills cannot do. Returns the popped values in order.
        """
        count = start
        if num_to_push is None:
            if not self._bounded():
                raise ValueError("num_to_push is required for an unbounded stack")
            while not self.is_full():
                print(f"pushing {count}")
                self.push(count)
                count += 1
        else:
            for _ in range(num_to_push):
                if self.is_full():
                    raise StackFullError("stack is full")
                print(f"pushing {count}")
                self.push(count)
                count += 1

        popped = []
        while not self.is_empty():
            value = self.pop()
            print(f"popping {value}")
            popped.append(value)
        return popped

    def _bounded(self) -> bool:
        return True


class ArrayStack(Stack):
    """Stack with a fixed maximum number of elements."""

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
        if self.is_full():
            raise StackFullError("stack is full")
        self._items.append(value)

    def pop(self) -> Any:
        if self.is_empty():
            raise StackEmptyError("stack is empty")
        return self._items.pop()

    def is_full(self) -> bool:
        return len(self._items) == self._size

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class ListStack(Stack):
    """Stack backed by a linked list; it never overflows."""

    def __init__(self) -> None:
        self._items = IntList()

    def push(self, value: Any) -> None:
        self._items.prepend(value)

    def pop(self) -> Any:
        if self.is_empty():
            raise StackEmptyError("stack is empty")
        return self._items.remove()

    def is_full(self) -> bool:
        return False

    def is_empty(self) -> bool:
        return self._items.is_empty()

    def __len__(self) -> int:
        return len(self._items)

    def _bounded(self) -> bool:
        return False


def main(argv: list[str] | None = None) -> int:
    """Exercise both stack implementations, printing each push and pop."""
    parser = argparse.ArgumentParser(description="Run the stack self tests.")
    parser.parse_args(argv)

    print("Testing ArrayStack")
    ArrayStack(10).self_test(17, 10)

    print("Testing ListStack")
    ListStack().self_test(17, 10)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())