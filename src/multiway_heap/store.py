import logging
from typing import Any, Iterable, Iterator

import numpy as np


logger = logging.getLogger(__name__)

MIN_CAPACITY = 1


class HeapStore:
    """
    Resizable array of keys backing an opaque-handle heap.

    Keys live in a numpy ``object`` array whose length is the physical
    capacity. Capacity doubles when an append finds the array full and halves
    once the logical size falls to a quarter of it or less; it never goes below
    ``MIN_CAPACITY`` nor below the logical size. Resizing copies slots in
    order, so heap order is unaffected.

    Parameters
    ----------
    initial_capacity : int
        The starting physical capacity, by default 1.
    """

    __slots__ = ("_keys", "_size")

    def __init__(self, initial_capacity: int = MIN_CAPACITY) -> None:
        if initial_capacity < MIN_CAPACITY:
            raise ValueError(
                f"Initial capacity must be >= {MIN_CAPACITY}, "
                f"got {initial_capacity}"
            )
        self._keys = np.empty(initial_capacity, dtype=object)
        self._size = 0

    @classmethod
    def from_iterable(cls, keys: Iterable[Any]) -> "HeapStore":
        """Copy keys verbatim, in order, into a store sized to fit them."""
        keys = list(keys)
        store = cls(max(len(keys), MIN_CAPACITY))
        for slot, key in enumerate(keys):
            # element-wise so sequence keys are stored as single objects
            store._keys[slot] = key
        store._size = len(keys)
        return store

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        """Yield the keys in slot order."""
        for slot in range(self._size):
            yield self._keys[slot]

    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return len(self._keys)

    def key_at(self, slot: int) -> Any:
        return self._keys[slot]

    def set(self, slot: int, key: Any) -> None:
        self._keys[slot] = key

    def swap(self, a: int, b: int) -> None:
        keys = self._keys
        keys[a], keys[b] = keys[b], keys[a]

    def append(self, key: Any) -> int:
        """Store ``key`` in the first free slot and return that slot."""
        if self._size >= len(self._keys):
            self._resize(len(self._keys) << 1)
        slot = self._size
        self._keys[slot] = key
        self._size += 1
        return slot

    def remove_last(self) -> Any:
        """Drop the key in the last occupied slot and return it."""
        if self._size == 0:
            raise IndexError("Remove from empty heap store")
        self._size -= 1
        key = self._keys[self._size]
        self._keys[self._size] = None
        if 0 < self._size <= len(self._keys) >> 2:
            self._resize(len(self._keys) >> 1)
        return key

    def copy(self) -> "HeapStore":
        """Shallow copy holding the same keys in the same slots."""
        store = HeapStore(len(self._keys))
        store._keys[:self._size] = self._keys[:self._size]
        store._size = self._size
        return store

    def _resize(self, capacity: int) -> None:
        capacity = max(capacity, self._size, MIN_CAPACITY)
        logger.debug(
            "Resizing heap store from %d to %d slots (size %d)",
            len(self._keys), capacity, self._size
        )
        keys = np.empty(capacity, dtype=object)
        keys[:self._size] = self._keys[:self._size]
        self._keys = keys


ABSENT = -1


class IndexedHeapStore:
    """
    Fixed-size storage for an indexed heap over handles ``0 .. capacity-1``.

    Slots hold handles rather than keys. ``_handle_at[slot]`` and
    ``_slot_of[handle]`` are exact inverses over the occupied slots, and a
    handle is present iff ``_slot_of[handle] != ABSENT``. ``_key_of[handle]``
    holds the key of every present handle.
    """

    __slots__ = ("_handle_at", "_slot_of", "_key_of", "_size")

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity must be >= 0, got {capacity}")
        self._handle_at = np.full(capacity, ABSENT, dtype=np.intp)
        self._slot_of = np.full(capacity, ABSENT, dtype=np.intp)
        self._key_of = np.empty(capacity, dtype=object)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return len(self._slot_of)

    def handle_at(self, slot: int) -> int:
        return int(self._handle_at[slot])

    def slot_of(self, handle: int) -> int:
        return int(self._slot_of[handle])

    def contains(self, handle: int) -> bool:
        return bool(self._slot_of[handle] != ABSENT)

    def key_of(self, handle: int) -> Any:
        return self._key_of[handle]

    def key_at(self, slot: int) -> Any:
        return self._key_of[self._handle_at[slot]]

    def set_key(self, handle: int, key: Any) -> None:
        self._key_of[handle] = key

    def swap(self, a: int, b: int) -> None:
        handle_at = self._handle_at
        handle_at[a], handle_at[b] = handle_at[b], handle_at[a]
        self._slot_of[handle_at[a]] = a
        self._slot_of[handle_at[b]] = b

    def append(self, handle: int, key: Any) -> int:
        """Place an absent ``handle`` in the first free slot."""
        slot = self._size
        self._handle_at[slot] = handle
        self._slot_of[handle] = slot
        self._key_of[handle] = key
        self._size += 1
        return slot

    def remove_last(self) -> int:
        """Vacate the last occupied slot and return the handle it held."""
        if self._size == 0:
            raise IndexError("Remove from empty heap store")
        self._size -= 1
        handle = int(self._handle_at[self._size])
        self._handle_at[self._size] = ABSENT
        self._slot_of[handle] = ABSENT
        self._key_of[handle] = None
        return handle

    def handles(self) -> Iterator[int]:
        """Yield the present handles in slot order."""
        for slot in range(self._size):
            yield int(self._handle_at[slot])

    def copy(self) -> "IndexedHeapStore":
        store = IndexedHeapStore(len(self._slot_of))
        store._handle_at[:] = self._handle_at
        store._slot_of[:] = self._slot_of
        store._key_of[:] = self._key_of
        store._size = self._size
        return store
