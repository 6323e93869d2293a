import collections
import heapq
from collections.abc import Iterable
from typing import Any


class LifoStack:
    """
    Last-in first-out adapter. Only the top element is reachable through
    `peek` and `pop`; `snapshot()` lists the elements in pop order without
    touching the stack.
    """
    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items: list[Any] = list(items)

    def push(self, item: Any) -> None:
        self._items.append(item)

    def pop(self) -> Any:
        if not self._items:
            raise IndexError("pop from an empty stack")
        return self._items.pop()

    def peek(self) -> Any:
        if not self._items:
            raise IndexError("peek at an empty stack")
        return self._items[-1]

    def snapshot(self) -> list[Any]:
        return self._items[::-1]

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LifoStack):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"LifoStack({self._items!r})"


class FifoQueue:
    """
    First-in first-out adapter: push at the back, pop from the front.
    """
    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items: collections.deque[Any] = collections.deque(items)

    def push(self, item: Any) -> None:
        self._items.append(item)

    def pop(self) -> Any:
        if not self._items:
            raise IndexError("pop from an empty queue")
        return self._items.popleft()

    def peek(self) -> Any:
        if not self._items:
            raise IndexError("peek at an empty queue")
        return self._items[0]

    def snapshot(self) -> list[Any]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FifoQueue):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"FifoQueue({list(self._items)!r})"


class PriorityQueue:
    """
    Binary-heap adapter that pops the smallest element first.

    Two queues are equal when they would pop the same sequence, whatever
    the internal heap layout.
    """
    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._heap: list[Any] = list(items)
        heapq.heapify(self._heap)

    def push(self, item: Any) -> None:
        heapq.heappush(self._heap, item)

    def pop(self) -> Any:
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        return heapq.heappop(self._heap)

    def peek(self) -> Any:
        if not self._heap:
            raise IndexError("peek at an empty priority queue")
        return self._heap[0]

    def snapshot(self) -> list[Any]:
        return sorted(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PriorityQueue):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __repr__(self) -> str:
        return f"PriorityQueue({self.snapshot()!r})"
