from itertools import islice
from typing import Any, Union

from src.multiway_heap.dway_heap import DWayHeap
from src.multiway_heap.indexed_heap import IndexedDWayHeap


def get_topk(heap: Union[DWayHeap, IndexedDWayHeap], k: int) -> list[Any]:
    """
    Function to get the top-K entries from a heap without modifying it.

    For a max heap the K greatest keys are retrieved, for a min heap the K
    least, in extreme-first order. For an indexed heap the handles of those
    keys are retrieved instead.

    Parameters
    ----------
    heap : DWayHeap | IndexedDWayHeap
        A heap of any arity or orientation.
    k : int
        The number of 'top-K' entries to retrieve.

    Returns
    -------
    list[Any]
        The 'top-K' keys (or handles), at most ``len(heap)`` of them.
    """
    if k <= 0:
        return []
    if heap.is_empty():
        return []
    return list(islice(heap, k))
