"""Evaluation-scoped memory manager.

Every value allocated while one top-level expression is evaluated is
registered here and released in bulk once the driver has consumed the result
(printed it, or let `set` / closure capture copy what must survive into the
environment). There is no reachability analysis: values that outlive an
evaluation are deep copies owned by the environment, never tracked nodes.

Release only after the result is fully consumed; releasing earlier leaves
the result dangling.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, TypeVar

from eta.memory.tracker import AllocationTracker
from eta.types.values import Value

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Optional[Value])


def _release(value: Value) -> None:
    if not value.released:
        value.release()


class MemoryManager:
    """A bulk-release arena, one generation per top-level evaluation."""

    def __init__(self):
        self._allocated: AllocationTracker[Value] = AllocationTracker(_release)
        self.generation = 0
        self.closed = False

    def _check_open(self) -> None:
        if self.closed:
            raise RuntimeError("Memory manager is closed")

    def track(self, value: V) -> V:
        """Register a single node; returns it so allocations can be written inline."""
        self._check_open()
        if value is not None:
            self._allocated.append(value)
        return value

    def track_recursive(self, root: V) -> V:
        """Register `root` and every node below it (pairs and closures)."""
        self._check_open()
        stack: list[Optional[Value]] = [root]
        while stack:
            node = stack.pop()
            if node is None:
                continue
            stack.extend(node.children())
            self._allocated.append(node)
        return root

    def release_all(self) -> int:
        """Release every tracked node in registration order and start a new generation."""
        count = len(self._allocated)
        self._allocated.clear()
        logger.debug("Released %d nodes from generation %d", count, self.generation)
        self.generation += 1
        return count

    def dispose(self) -> None:
        self.release_all()
        self.closed = True

    def __contains__(self, value: Value) -> bool:
        return any(v is value for v in self._allocated)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._allocated)

    def __len__(self) -> int:
        return len(self._allocated)
