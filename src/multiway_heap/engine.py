import logging
from typing import Any, Protocol

from src.multiway_heap.arity import Arity
from src.multiway_heap.ordering import Ordering


logger = logging.getLogger(__name__)


class SlotStore(Protocol):
    """What the engine needs from a store: keys by slot and slot swaps."""

    def size(self) -> int:
        ...

    def key_at(self, slot: int) -> Any:
        ...

    def swap(self, a: int, b: int) -> None:
        ...


class SiftEngine:
    """
    Sift-up / sift-down for a d-ary heap held in a ``SlotStore``.

    The engine keeps the greatest key under ``ordering`` at slot 0. A
    min-oriented heap hands it a reversed ordering. It is the only code that
    reorders slots, and is shared by every heap flavour.

    Parameters
    ----------
    arity : Arity
        Parent/child index arithmetic.
    ordering : Ordering
        Strict "less than" over keys.
    """

    __slots__ = ("arity", "ordering")

    def __init__(self, arity: Arity, ordering: Ordering) -> None:
        self.arity = arity
        self.ordering = ordering

    def _less(self, store: SlotStore, i: int, j: int) -> bool:
        return self.ordering.less(store.key_at(i), store.key_at(j))

    def swim(self, store: SlotStore, k: int) -> int:
        """
        Move the key at slot ``k`` toward the root until its parent is not
        less than it.

        Returns
        -------
        int
            The slot where the key came to rest.
        """
        parent = self.arity.parent
        while k > 0:
            p = parent(k)
            if not self._less(store, p, k):
                break
            store.swap(k, p)
            k = p
        return k

    def sink(self, store: SlotStore, k: int) -> int:
        """
        Move the key at slot ``k`` toward the leaves, each step swapping it
        with its greatest child, until no child is greater.

        Among equal children the leftmost one wins.

        Returns
        -------
        int
            The slot where the key came to rest.
        """
        arity = self.arity
        size = store.size()
        child = arity.first_child(k)
        while child < size:
            last = arity.last_child(k, size)
            for sibling in range(child + 1, last + 1):
                if self._less(store, child, sibling):
                    child = sibling
            if not self._less(store, k, child):
                break
            store.swap(k, child)
            k = child
            child = arity.first_child(k)
        return k

    def restore(self, store: SlotStore, k: int) -> int:
        """Sift in whichever direction the key at ``k`` needs to move."""
        moved = self.swim(store, k)
        if moved == k:
            moved = self.sink(store, k)
        return moved

    def heapify(self, store: SlotStore) -> None:
        """Bottom-up heap construction in O(N)."""
        size = store.size()
        logger.debug("Heapifying %d keys with %r", size, self.arity)
        for k in range(self.arity.last_parent(size), -1, -1):
            self.sink(store, k)

    def is_heap(self, store: SlotStore) -> bool:
        """Check heap order over every occupied slot. Debug use only."""
        parent = self.arity.parent
        for i in range(1, store.size()):
            if self._less(store, parent(i), i):
                return False
        return True
