"""A least-recently-used priority queue of cache keys."""

from __future__ import annotations

import itertools
from dataclasses import dataclass


@dataclass
class _Entry:
    key: str
    index: int
    access: int


class EvictionQueue:
    """Heap of keys ordered by last access; the least recently used pops first.

    Each entry knows its position in the heap so that it can be touched by index.
    """

    def __init__(self) -> None:
        self._heap: list[_Entry] = []
        self._clock = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def keys(self) -> list[str]:
        """Keys in their current heap order."""
        return [entry.key for entry in self._heap]

    def push(self, key: str) -> int:
        """Add ``key`` as just accessed; return the index it ended up at."""
        entry = _Entry(key, len(self._heap), next(self._clock))
        self._heap.append(entry)
        self._up(entry.index)
        return entry.index

    def pop(self) -> str:
        """Remove and return the least recently used key."""
        if not self._heap:
            raise IndexError("pop from empty eviction queue")
        last = len(self._heap) - 1
        self._swap(0, last)
        self._down(0, last)
        return self._heap.pop().key

    def touch(self, index: int) -> int:
        """Mark the entry at ``index`` as just accessed; return its new index."""
        entry = self._heap[index]
        entry.access = next(self._clock)
        if not self._down(index, len(self._heap)):
            self._up(index)
        return entry.index

    def _less(self, i: int, j: int) -> bool:
        return self._heap[i].access < self._heap[j].access

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        heap[i].index, heap[j].index = i, j

    def _up(self, j: int) -> None:
        while j > 0:
            parent = (j - 1) // 2
            if not self._less(j, parent):
                break
            self._swap(parent, j)
            j = parent

    def _down(self, start: int, size: int) -> bool:
        i = start
        while True:
            child = 2 * i + 1
            if child >= size:
                break
            right = child + 1
            if right < size and self._less(right, child):
                child = right
            if not self._less(child, i):
                break
            self._swap(i, child)
            i = child
        return i > start