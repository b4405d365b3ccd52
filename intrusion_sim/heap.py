from copy import deepcopy
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

# tiebreak(a, prio_a, b, prio_b) is true if `a` comes before `b` when prio_a == prio_b
Tiebreak = Callable[[T, float, T, float], bool]


class EmptyQueue(IndexError):
    """Raised when popping from an empty heap or queue."""


@dataclass(frozen=True)
class PriorityContainer(Generic[T]):
    """What a pop returns: the payload and the priority it was pushed with."""

    content: T
    priority: float


@dataclass
class HeapEntry(Generic[T]):
    content: T
    priority: float
    order: int  # insertion sequence number, last resort for ties


class BinaryHeap(Generic[T]):
    """Array-backed binary heap over (content, priority) pairs.

    By default the entry with the largest priority is on top; with `min_heap=True` the smallest one is. Equal
    priorities are ordered by the `tiebreak` predicate and, when it decides neither way, by insertion order, so that
    the pop order is a strict total order over everything ever pushed.
    """

    def __init__(self, tiebreak: Tiebreak, min_heap: bool = False) -> None:
        self.tiebreak: Tiebreak = tiebreak
        self.min_heap: bool = min_heap
        self.entries: list[HeapEntry[T]] = []
        self.pushed: int = 0  # used to number entries

    def higher(self, a: HeapEntry[T], b: HeapEntry[T]) -> bool:
        """True if `a` must be popped before `b`."""

        if a.priority != b.priority:
            return (a.priority < b.priority) if self.min_heap else (a.priority > b.priority)
        if self.tiebreak(a.content, a.priority, b.content, b.priority):
            return True
        if self.tiebreak(b.content, b.priority, a.content, a.priority):
            return False
        return a.order < b.order

    def push(self, content: T, priority: float) -> None:
        self.entries.append(HeapEntry(content, priority, self.pushed))
        self.pushed += 1
        self.sift_up(len(self.entries) - 1)

    def pop(self) -> PriorityContainer[T]:
        """Remove and return the highest entry."""

        if not self.entries:
            raise EmptyQueue("pop from an empty heap")
        root: HeapEntry[T] = self.entries[0]
        last: HeapEntry[T] = self.entries.pop()
        if self.entries:
            self.entries[0] = last
            self.sift_down(0)
        return PriorityContainer(root.content, root.priority)

    def sift_up(self, i: int) -> None:
        entries = self.entries
        while i > 0:
            parent: int = (i - 1) // 2
            if not self.higher(entries[i], entries[parent]):
                break
            entries[i], entries[parent] = entries[parent], entries[i]
            i = parent

    def sift_down(self, i: int) -> None:
        entries = self.entries
        n: int = len(entries)
        while True:
            left: int = 2 * i + 1
            if left >= n:
                return
            right: int = left + 1
            child: int = left
            if right < n and self.higher(entries[right], entries[left]):
                child = right
            if not self.higher(entries[child], entries[i]):
                return
            entries[i], entries[child] = entries[child], entries[i]
            i = child

    def is_empty(self) -> bool:
        return not self.entries

    def copy(self) -> "BinaryHeap[T]":
        """Return an independent heap holding deep copies of all entries."""

        other: BinaryHeap[T] = BinaryHeap(self.tiebreak, self.min_heap)
        other.entries = [
            HeapEntry(deepcopy(e.content), e.priority, e.order)
            for e in self.entries
        ]
        other.pushed = self.pushed
        return other

    __copy__ = copy

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)
