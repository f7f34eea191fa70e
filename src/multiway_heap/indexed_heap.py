import operator
from typing import Any, Generic, Iterator, Optional, TypeVar

from src.multiway_heap.arity import D_DEFAULT, DAryArity
from src.multiway_heap.dway_heap import render_levels
from src.multiway_heap.engine import SiftEngine
from src.multiway_heap.errors import (DuplicateHandle, HandleOutOfRange,
                                      InvalidKeyDirection, NotPresent,
                                      Underflow)
from src.multiway_heap.ordering import LessThan, Ordering
from src.multiway_heap.store import IndexedHeapStore


K = TypeVar("K")


class IndexedDWayHeap(Generic[K]):
    """
    Indexed priority queue on a d-ary heap.

    Each key is associated with a caller-chosen integer handle in
    ``[0, capacity)``, which stays valid while the key moves around the heap.
    This allows the key of a given handle to be read, changed or deleted in
    O(log_d N), which is what Dijkstra- and Prim-style graph algorithms need.

    Parameters
    ----------
    capacity : int
        Size of the handle universe; valid handles are ``0 .. capacity-1``.
    branching_factor : int
        Number of children per node, at least 1, by default 6.
    is_max_heap : bool
        Keep the greatest key at the top if True, the least if False.
    comparator : Callable[[K, K], bool], optional
        Strict "less than" predicate replacing the natural ordering.
    """

    def __init__(
        self,
        capacity: int,
        branching_factor: int = D_DEFAULT,
        is_max_heap: bool = True,
        comparator: Optional[LessThan] = None
    ) -> None:
        self._is_max_heap = bool(is_max_heap)
        self._comparator = comparator
        self._ordering = Ordering(comparator)
        self._engine = SiftEngine(
            DAryArity(branching_factor),
            Ordering(comparator, reverse=not is_max_heap)
        )
        self._store = IndexedHeapStore(capacity)

    @classmethod
    def max_heap(cls, capacity: int, *args, **kwargs):
        """Create an indexed heap with the greatest key at the top."""
        return cls(capacity, *args, is_max_heap=True, **kwargs)

    @classmethod
    def min_heap(cls, capacity: int, *args, **kwargs):
        """Create an indexed heap with the least key at the top."""
        return cls(capacity, *args, is_max_heap=False, **kwargs)

    @property
    def branching_factor(self) -> int:
        return self._engine.arity.branching_factor

    @property
    def is_max_heap(self) -> bool:
        return self._is_max_heap

    @property
    def capacity(self) -> int:
        return self._store.capacity()

    def __len__(self) -> int:
        return self._store.size()

    def size(self) -> int:
        return self._store.size()

    def is_empty(self) -> bool:
        return self._store.size() == 0

    def _check_handle(self, handle: int) -> int:
        """Return ``handle`` as an int, raising TypeError for non-integers."""
        handle = operator.index(handle)
        if not 0 <= handle < self._store.capacity():
            raise HandleOutOfRange(handle, self._store.capacity())
        return handle

    def _check_present(self, handle: int) -> int:
        handle = self._check_handle(handle)
        if not self._store.contains(handle):
            raise NotPresent(handle)
        return handle

    def contains(self, handle: int) -> bool:
        """
        Return whether ``handle`` currently has a key.

        Raises
        ------
        HandleOutOfRange
            If ``handle`` is outside ``[0, capacity)``.
        """
        handle = self._check_handle(handle)
        return self._store.contains(handle)

    def __contains__(self, handle: object) -> bool:
        try:
            handle = operator.index(handle)
        except TypeError:
            return False
        return (
            0 <= handle < self._store.capacity()
            and self._store.contains(handle)
        )

    def insert(self, handle: int, key: K) -> None:
        """
        Associate ``key`` with an absent ``handle``.

        Raises
        ------
        HandleOutOfRange
            If ``handle`` is outside ``[0, capacity)``.
        DuplicateHandle
            If ``handle`` already has a key.
        TypeError
            If ``handle`` is not an integer.
        """
        handle = self._check_handle(handle)
        if self._store.contains(handle):
            raise DuplicateHandle(handle)
        slot = self._store.append(handle, key)
        self._engine.swim(self._store, slot)

    def peek_handle(self) -> int:
        """Return the handle of the extreme key."""
        if self.is_empty():
            raise Underflow()
        return self._store.handle_at(0)

    def peek_key(self) -> K:
        """Return the extreme key."""
        if self.is_empty():
            raise Underflow()
        return self._store.key_at(0)

    def top(self) -> int:
        """
        Remove the extreme key and return its handle.

        Read the key beforehand with ``peek_key`` if it is needed.

        Raises
        ------
        Underflow
            If the heap is empty.
        """
        if self.is_empty():
            raise Underflow()
        store = self._store
        last = store.size() - 1
        store.swap(0, last)
        handle = store.remove_last()
        if store.size() > 0:
            self._engine.sink(store, 0)
        return handle

    def key_of(self, handle: int) -> K:
        """
        Return the key associated with ``handle``.

        Raises
        ------
        HandleOutOfRange
            If ``handle`` is outside ``[0, capacity)``.
        NotPresent
            If ``handle`` has no key.
        """
        handle = self._check_present(handle)
        return self._store.key_of(handle)

    def change_key(self, handle: int, key: K) -> None:
        """Replace the key of ``handle`` with a key of either direction."""
        handle = self._check_present(handle)
        self._store.set_key(handle, key)
        self._engine.restore(self._store, self._store.slot_of(handle))

    def increase_key(self, handle: int, key: K) -> None:
        """
        Replace the key of ``handle`` with a strictly greater key.

        Raises
        ------
        InvalidKeyDirection
            If ``key`` is not strictly greater than the current key.
        """
        handle = self._check_present(handle)
        if not self._ordering.less(self._store.key_of(handle), key):
            raise InvalidKeyDirection(
                "increase_key() argument must strictly increase the key"
            )
        self._store.set_key(handle, key)
        slot = self._store.slot_of(handle)
        if self._is_max_heap:
            self._engine.swim(self._store, slot)
        else:
            self._engine.sink(self._store, slot)

    def decrease_key(self, handle: int, key: K) -> None:
        """
        Replace the key of ``handle`` with a strictly smaller key.

        Raises
        ------
        InvalidKeyDirection
            If ``key`` is not strictly less than the current key.
        """
        handle = self._check_present(handle)
        if not self._ordering.less(key, self._store.key_of(handle)):
            raise InvalidKeyDirection(
                "decrease_key() argument must strictly decrease the key"
            )
        self._store.set_key(handle, key)
        slot = self._store.slot_of(handle)
        if self._is_max_heap:
            self._engine.sink(self._store, slot)
        else:
            self._engine.swim(self._store, slot)

    def delete(self, handle: int) -> None:
        """
        Remove ``handle`` and its key from the heap.

        Raises
        ------
        HandleOutOfRange
            If ``handle`` is outside ``[0, capacity)``.
        NotPresent
            If ``handle`` has no key.
        """
        handle = self._check_present(handle)
        store = self._store
        slot = store.slot_of(handle)
        store.swap(slot, store.size() - 1)
        store.remove_last()
        if slot < store.size():
            # the moved key may belong above or below the vacated slot
            self._engine.swim(store, slot)
            self._engine.sink(store, slot)

    def copy(self) -> "IndexedDWayHeap[K]":
        heap = self.__class__.__new__(self.__class__)
        heap._is_max_heap = self._is_max_heap
        heap._comparator = self._comparator
        heap._ordering = self._ordering
        heap._engine = self._engine
        heap._store = self._store.copy()
        return heap

    def __iter__(self) -> Iterator[int]:
        """
        Yield the handles in extreme-first order without modifying the heap.

        Each iteration copies the heap and drains the copy, O(N log_d N).
        """
        scratch = self.copy()
        while not scratch.is_empty():
            yield scratch.top()

    def pretty(self) -> str:
        """Render ``handle=key`` entries one tree generation per line."""
        entries: list[tuple[int, Any]] = [
            (slot, f"{handle}={self._store.key_of(handle)}")
            for slot, handle in enumerate(self._store.handles())
        ]
        return render_levels(self._engine.arity, entries)

    def _validate(self) -> bool:
        """Check heap order and that the handle maps are exact inverses."""
        store = self._store
        for slot, handle in enumerate(store.handles()):
            if store.slot_of(handle) != slot:
                return False
        present = sum(
            store.contains(handle) for handle in range(store.capacity())
        )
        return present == store.size() and self._engine.is_heap(store)

    def __repr__(self) -> str:
        kind = "max" if self._is_max_heap else "min"
        return (
            f"{self.__class__.__name__}(size={len(self)}, "
            f"capacity={self.capacity}, "
            f"branching_factor={self.branching_factor}, {kind})"
        )
