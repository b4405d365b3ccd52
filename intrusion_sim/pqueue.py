from typing import Any, Generic, TypeVar

from .heap import BinaryHeap, EmptyQueue, PriorityContainer, Tiebreak

T = TypeVar("T")

__all__ = ["EmptyQueue", "PriorityContainer", "PriorityQueue"]


class PriorityQueue(Generic[T]):
    """Thin facade over a `BinaryHeap`; copying a queue copies every entry it holds."""

    def __init__(self, tiebreak: Tiebreak, min_heap: bool = False) -> None:
        self.heap: BinaryHeap[T] = BinaryHeap(tiebreak, min_heap)

    def push(self, content: T, priority: float) -> None:
        self.heap.push(content, priority)

    def pop(self) -> PriorityContainer[T]:
        return self.heap.pop()

    def is_empty(self) -> bool:
        return self.heap.is_empty()

    def copy(self) -> "PriorityQueue[T]":
        other: PriorityQueue[T] = PriorityQueue.__new__(PriorityQueue)
        other.heap = self.heap.copy()
        return other

    def __copy__(self) -> "PriorityQueue[T]":
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> "PriorityQueue[T]":
        return self.copy()

    def __len__(self) -> int:
        return len(self.heap)

    def __bool__(self) -> bool:
        return bool(self.heap)
