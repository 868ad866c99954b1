"""Append-only sequence with a per-element cleanup callback."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class AllocationTracker(Generic[T]):
    __slots__ = ("_items", "_cleanup")

    def __init__(self, cleanup: Callable[[T], None] | None = None):
        self._items: list[T] = []
        self._cleanup = cleanup

    def append(self, item: T) -> None:
        self._items.append(item)

    def clear(self) -> None:
        """Run the cleanup callback on every element in insertion order, then empty."""
        items, self._items = self._items, []
        if self._cleanup is not None:
            for item in items:
                self._cleanup(item)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
