import heapq
import itertools


class PriorityQueue:
    """Min-priority queue over a binary heap.

    Entries with equal priority come out in insertion order. There is no
    decrease-key: callers insert again and skip stale entries on extraction.
    """

    def __init__(self):
        self._heap = []
        self._counter = itertools.count()

    def insert(self, item, priority) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def extract(self):
        """Pop the lowest-priority item; raises ``IndexError`` when empty."""
        if not self._heap:
            raise IndexError("extract from an empty priority queue")
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
