from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

from src.multiway_heap.arity import (D_DEFAULT, POWER_DEFAULT, Arity,
                                     DAryArity, PowerOf2Arity)
from src.multiway_heap.engine import SiftEngine
from src.multiway_heap.errors import Underflow
from src.multiway_heap.ordering import LessThan, Ordering
from src.multiway_heap.store import MIN_CAPACITY, HeapStore


K = TypeVar("K")


def render_levels(arity: Arity, entries: list[tuple[int, Any]]) -> str:
    """
    Render ``(slot, label)`` pairs one tree generation per line.

    Parameters
    ----------
    arity : Arity
        The arity used to find where each generation starts.
    entries : list[tuple[int, Any]]
        The occupied slots, in slot order, with the label to print.

    Returns
    -------
    str
        Lines of the form ``[0: a]``, ``[1: b, 2: c]``, ...
    """
    if not entries:
        return "[]"
    lines = []
    start = 0
    while start < len(entries):
        end = min(arity.first_child(start), len(entries))
        level = ", ".join(f"{slot}: {label}" for slot, label in entries[start:end])
        lines.append(f"[{level}]")
        start = end
    return "\n".join(lines)


class DWayHeap(Generic[K]):
    """
    Priority queue on a d-ary heap with an arbitrary branching factor.

    Keys are stored directly in the heap. The queue is max-oriented by
    default; ``peek`` and ``top`` then return the greatest key. Ordering is
    the keys' natural order unless a ``comparator`` returning ``a < b`` is
    given.

    Parameters
    ----------
    keys : Iterable[K], optional
        Keys to bulk-load. The heap is built bottom-up in linear time.
    branching_factor : int
        Number of children per node, at least 1, by default 6.
    is_max_heap : bool
        Pop the greatest key first if True, the least if False.
    comparator : Callable[[K, K], bool], optional
        Strict "less than" predicate replacing the natural ordering.
    initial_capacity : int
        Starting physical capacity of an empty heap, by default 1.

    Notes
    -----
    Not thread-safe. A branching factor of 1 is accepted and still correct,
    but every sift costs O(N).
    """

    def __init__(
        self,
        keys: Optional[Iterable[K]] = None,
        branching_factor: int = D_DEFAULT,
        is_max_heap: bool = True,
        comparator: Optional[LessThan] = None,
        initial_capacity: int = MIN_CAPACITY
    ) -> None:
        self._setup(
            DAryArity(branching_factor), keys, is_max_heap, comparator,
            initial_capacity
        )

    def _setup(
        self,
        arity: Arity,
        keys: Optional[Iterable[K]],
        is_max_heap: bool,
        comparator: Optional[LessThan],
        initial_capacity: int
    ) -> None:
        self._is_max_heap = bool(is_max_heap)
        self._comparator = comparator
        self._engine = SiftEngine(
            arity, Ordering(comparator, reverse=not is_max_heap)
        )
        if keys is None:
            self._store = HeapStore(initial_capacity)
        else:
            self._store = HeapStore.from_iterable(keys)
            self._engine.heapify(self._store)

    @classmethod
    def max_heap(cls, keys: Optional[Iterable[K]] = None, *args, **kwargs):
        """Create a heap that pops its greatest key first."""
        return cls(keys, *args, is_max_heap=True, **kwargs)

    @classmethod
    def min_heap(cls, keys: Optional[Iterable[K]] = None, *args, **kwargs):
        """Create a heap that pops its least key first."""
        return cls(keys, *args, is_max_heap=False, **kwargs)

    @property
    def branching_factor(self) -> int:
        return self._engine.arity.branching_factor

    @property
    def is_max_heap(self) -> bool:
        return self._is_max_heap

    @property
    def comparator(self) -> Optional[LessThan]:
        return self._comparator

    def __len__(self) -> int:
        return self._store.size()

    def size(self) -> int:
        return self._store.size()

    def capacity(self) -> int:
        return self._store.capacity()

    def is_empty(self) -> bool:
        return self._store.size() == 0

    def peek(self) -> K:
        """
        Return the extreme key without removing it.

        Raises
        ------
        Underflow
            If the heap is empty.
        """
        if self.is_empty():
            raise Underflow()
        return self._store.key_at(0)

    def insert(self, key: K) -> None:
        """Add ``key`` to the heap in O(log_d N) amortized time."""
        slot = self._store.append(key)
        self._engine.swim(self._store, slot)

    def top(self) -> K:
        """
        Remove and return the extreme key.

        Raises
        ------
        Underflow
            If the heap is empty.
        """
        if self.is_empty():
            raise Underflow()
        store = self._store
        extreme = store.key_at(0)
        last = store.remove_last()
        if store.size() > 0:
            store.set(0, last)
            self._engine.sink(store, 0)
        return extreme

    def copy(self) -> "DWayHeap[K]":
        """Shallow copy sharing arity, orientation and comparator."""
        heap = self.__class__.__new__(self.__class__)
        heap._is_max_heap = self._is_max_heap
        heap._comparator = self._comparator
        heap._engine = self._engine
        heap._store = self._store.copy()
        return heap

    def __iter__(self) -> Iterator[K]:
        """
        Yield the keys in extreme-first order without modifying the heap.

        Each iteration copies the whole heap and drains the copy, so it
        costs O(N log_d N).
        """
        scratch = self.copy()
        while not scratch.is_empty():
            yield scratch.top()

    def pretty(self) -> str:
        """Render the heap array one tree generation per line."""
        return render_levels(self._engine.arity, list(enumerate(self._store)))

    def _validate(self) -> bool:
        """Check the heap order invariant over every slot."""
        return self._engine.is_heap(self._store)

    def __repr__(self) -> str:
        kind = "max" if self._is_max_heap else "min"
        return (
            f"{self.__class__.__name__}(size={len(self)}, "
            f"branching_factor={self.branching_factor}, {kind})"
        )


class PowerOf2Heap(DWayHeap[K]):
    """
    Priority queue on a d-ary heap whose branching factor is ``2**power``.

    Identical contract to ``DWayHeap``; parent and child slots are computed
    with shifts.

    Parameters
    ----------
    keys : Iterable[K], optional
        Keys to bulk-load.
    power : int
        Exponent of the branching factor, by default 3 (an 8-way heap).
        A power of 0 gives a one-child chain.
    is_max_heap : bool
        Pop the greatest key first if True, the least if False.
    comparator : Callable[[K, K], bool], optional
        Strict "less than" predicate replacing the natural ordering.
    initial_capacity : int
        Starting physical capacity of an empty heap, by default 1.
    """

    def __init__(
        self,
        keys: Optional[Iterable[K]] = None,
        power: int = POWER_DEFAULT,
        is_max_heap: bool = True,
        comparator: Optional[LessThan] = None,
        initial_capacity: int = MIN_CAPACITY
    ) -> None:
        self._setup(
            PowerOf2Arity(power), keys, is_max_heap, comparator,
            initial_capacity
        )

    @property
    def power(self) -> int:
        return self._engine.arity.power
