"""Priority queue of items awaiting placement."""

from __future__ import annotations

import heapq
import itertools
from collections import Counter
from enum import Enum
from typing import Iterator

from pack_planner.models import Item


class DuplicatePolicy(str, Enum):
    """
    What happens when an item equal to a queued one is pushed.

    COLLAPSE: the new item is dropped, at most one entry per (volume, name).
    KEEP: both are queued; equal items drain in insertion order.
    """

    COLLAPSE = "collapse"
    KEEP = "keep"


class PriorityQueue:
    """
    Binary heap of items ordered by (-volume, name, insertion sequence).

    Iteration and snapshot() walk the items in dequeue order without
    consuming them.
    """

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE) -> None:
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)
        self._heap: list[tuple[tuple[float, str], int, Item]] = []
        self._keys: Counter[tuple[float, str]] = Counter()
        self._seq = itertools.count()

    def push(self, item: Item) -> bool:
        """
        Queue an item.

        Returns False when the item collapsed onto an equal queued item.
        """
        key = item.priority_key
        if self.duplicate_policy is DuplicatePolicy.COLLAPSE and self._keys[key]:
            return False
        heapq.heappush(self._heap, (key, next(self._seq), item))
        self._keys[key] += 1
        return True

    def pop(self) -> Item:
        """Remove and return the highest-priority item. Raises IndexError when empty."""
        if not self._heap:
            raise IndexError("pop from an empty PriorityQueue")
        key, _, item = heapq.heappop(self._heap)
        self._keys[key] -= 1
        if not self._keys[key]:
            del self._keys[key]
        return item

    def peek(self) -> Item:
        if not self._heap:
            raise IndexError("peek at an empty PriorityQueue")
        return self._heap[0][2]

    def snapshot(self) -> tuple[Item, ...]:
        return tuple(entry[2] for entry in sorted(self._heap))

    def __iter__(self) -> Iterator[Item]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, Item):
            return False
        return self._keys[item.priority_key] > 0
