"""
Min-priority queue used by every frontier.

Lower priority means "expand sooner", which matches degree-based
prioritisation: specific, low-degree nodes are explored before hubs.
"""

import heapq
import itertools
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class PriorityQueue(Generic[T]):
    """Binary-heap priority queue with FIFO ordering among equal priorities."""

    def __init__(self):
        self._heap: List[Tuple[float, int, T]] = []
        # Monotonic insertion counter keeps ties stable and avoids comparing items
        self._counter = itertools.count()

    def push(self, item: T, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self) -> Optional[T]:
        """Remove and return the lowest-priority item, or None when empty."""
        if not self._heap:
            return None
        _, _, item = heapq.heappop(self._heap)
        return item

    def peek_priority(self) -> Optional[float]:
        """Smallest priority currently queued, without removing it."""
        if not self._heap:
            return None
        return self._heap[0][0]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"PriorityQueue(size={len(self._heap)}, min={self.peek_priority()})"
