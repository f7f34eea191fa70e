import numpy as np
import pytest

from src.multiway_heap.errors import (DuplicateHandle, HandleOutOfRange,
                                      InvalidKeyDirection, NotPresent,
                                      Underflow)
from src.multiway_heap.indexed_heap import IndexedDWayHeap


WORDS = ["it", "was", "the", "best", "of", "times", "it", "was", "the",
         "worst"]


def shortest_paths(edges, n, source):
    """Dijkstra over ``(u, v, w)`` edges using decrease-key."""
    adjacency = [[] for _ in range(n)]
    for u, v, w in edges:
        adjacency[u].append((v, w))

    dist = [float("inf")] * n
    dist[source] = 0
    queue = IndexedDWayHeap.min_heap(n, 2)
    queue.insert(source, 0)
    while not queue.is_empty():
        u = queue.top()
        for v, w in adjacency[u]:
            if dist[u] + w < dist[v]:
                dist[v] = dist[u] + w
                if queue.contains(v):
                    queue.decrease_key(v, dist[v])
                else:
                    queue.insert(v, dist[v])
    return dist


class TestIndexedDWayHeap:
    def test_empty_heap(self):
        heap = IndexedDWayHeap(4)
        assert len(heap) == 0
        assert heap.is_empty()
        assert heap.capacity == 4
        assert heap.branching_factor == 6

        with pytest.raises(Underflow):
            heap.peek_handle()
        with pytest.raises(Underflow):
            heap.peek_key()
        with pytest.raises(Underflow):
            heap.top()

    def test_words_scenario(self):
        heap = IndexedDWayHeap(4)
        for handle, word in enumerate(["it", "was", "the", "best"]):
            heap.insert(handle, word)

        assert heap.peek_handle() == 1
        assert heap.peek_key() == "was"
        assert heap.top() == 1
        assert not heap.contains(1)

        heap.delete(0)
        assert not heap.contains(0)
        assert heap.size() == 2
        assert heap.peek_handle() == 2
        assert heap._validate()

    def test_insert_then_key_of(self):
        heap = IndexedDWayHeap(8, 3)
        heap.insert(5, 42)
        assert heap.key_of(5) == 42
        assert heap.contains(5)
        assert 5 in heap
        assert 4 not in heap

    def test_delete_then_contains(self):
        heap = IndexedDWayHeap(8, 3)
        for handle in range(8):
            heap.insert(handle, handle * 10)
        heap.delete(3)
        assert not heap.contains(3)
        assert len(heap) == 7
        assert heap._validate()

        # deleting the root
        heap.delete(heap.peek_handle())
        assert heap._validate()

        heap.insert(3, 1000)
        assert heap.peek_handle() == 3

    def test_delete_only_entry(self):
        heap = IndexedDWayHeap(2)
        heap.insert(1, "x")
        heap.delete(1)
        assert heap.is_empty()
        assert not heap.contains(1)

    def test_iteration_order(self):
        heap = IndexedDWayHeap(len(WORDS))
        for handle, word in enumerate(WORDS):
            heap.insert(handle, word)

        handles = list(heap)
        assert sorted(handles) == list(range(len(WORDS)))
        assert [WORDS[h] for h in handles] == sorted(WORDS, reverse=True)
        assert len(heap) == len(WORDS)
        assert heap._validate()

    def test_drain_min_heap(self):
        heap = IndexedDWayHeap.min_heap(len(WORDS), 4)
        for handle, word in enumerate(WORDS):
            heap.insert(handle, word)

        drained = []
        while not heap.is_empty():
            drained.append(WORDS[heap.top()])
        assert drained == sorted(WORDS)

    def test_increase_and_decrease_max_heap(self):
        heap = IndexedDWayHeap.max_heap(3, 2)
        heap.insert(0, 5)
        heap.insert(1, 3)
        heap.insert(2, 8)
        assert heap.peek_handle() == 2

        heap.increase_key(1, 10)
        assert heap.peek_handle() == 1
        assert heap._validate()

        heap.decrease_key(1, 1)
        assert heap.peek_handle() == 2
        assert heap.key_of(1) == 1
        assert heap._validate()

    def test_increase_and_decrease_min_heap(self):
        heap = IndexedDWayHeap.min_heap(3, 2)
        heap.insert(0, 5)
        heap.insert(1, 3)
        heap.insert(2, 8)
        assert heap.peek_handle() == 1

        heap.decrease_key(2, 1)
        assert heap.peek_handle() == 2
        assert heap._validate()

        heap.increase_key(2, 20)
        assert heap.peek_handle() == 1
        assert heap._validate()

    def test_invalid_key_direction(self):
        heap = IndexedDWayHeap(2)
        heap.insert(0, 5)
        heap.insert(1, 8)

        with pytest.raises(InvalidKeyDirection):
            heap.decrease_key(1, 9)
        with pytest.raises(InvalidKeyDirection):
            heap.decrease_key(1, 8)
        with pytest.raises(InvalidKeyDirection):
            heap.increase_key(0, 5)
        with pytest.raises(ValueError):
            heap.increase_key(0, 1)

        assert heap.key_of(1) == 8
        assert heap.key_of(0) == 5
        assert heap.peek_handle() == 1

    def test_change_key_both_directions(self):
        heap = IndexedDWayHeap(6, 2)
        for handle, key in enumerate([50, 40, 30, 20, 10, 5]):
            heap.insert(handle, key)

        heap.change_key(5, 100)
        assert heap.peek_handle() == 5
        assert heap._validate()

        heap.change_key(5, 0)
        assert heap.peek_handle() == 0
        assert heap._validate()

        heap.change_key(3, 20)
        assert heap._validate()

    def test_handle_out_of_range(self):
        heap = IndexedDWayHeap(4)
        with pytest.raises(HandleOutOfRange):
            heap.insert(4, "x")
        with pytest.raises(HandleOutOfRange):
            heap.insert(-1, "x")
        with pytest.raises(IndexError):
            heap.contains(4)
        for method in (heap.key_of, heap.delete):
            with pytest.raises(HandleOutOfRange):
                method(10)
        for method in (heap.change_key, heap.increase_key, heap.decrease_key):
            with pytest.raises(HandleOutOfRange):
                method(10, 1)
        assert heap.is_empty()
        assert 4 not in heap

    def test_duplicate_handle(self):
        heap = IndexedDWayHeap(4)
        heap.insert(2, "a")
        with pytest.raises(DuplicateHandle):
            heap.insert(2, "b")
        assert heap.key_of(2) == "a"
        assert len(heap) == 1

    def test_not_present(self):
        heap = IndexedDWayHeap(4)
        heap.insert(0, 1)
        for method in (heap.key_of, heap.delete):
            with pytest.raises(NotPresent):
                method(3)
        for method in (heap.change_key, heap.increase_key, heap.decrease_key):
            with pytest.raises(NotPresent):
                method(3, 1)
        with pytest.raises(KeyError):
            heap.key_of(3)
        assert len(heap) == 1

    def test_comparator(self):
        heap = IndexedDWayHeap(3, comparator=lambda a, b: a[1] < b[1])
        heap.insert(0, ("a", 3))
        heap.insert(1, ("b", 7))
        heap.insert(2, ("c", 1))
        assert heap.peek_key() == ("b", 7)
        heap.increase_key(2, ("c", 9))
        assert heap.peek_handle() == 2

    def test_numpy_integer_handles(self):
        heap = IndexedDWayHeap(4)
        heap.insert(np.int64(2), "x")
        assert np.int64(2) in heap
        assert 2 in heap
        assert heap.contains(np.int32(2))
        assert heap.key_of(np.intp(2)) == "x"
        assert heap.peek_handle() == 2

        heap.insert(2 + np.int64(1), "y")
        heap.delete(np.int64(3))
        assert np.int64(3) not in heap
        assert heap._validate()

    def test_non_integer_handles(self):
        heap = IndexedDWayHeap(4)
        heap.insert(1, "x")
        assert 1.0 not in heap
        assert "1" not in heap
        assert None not in heap

        with pytest.raises(TypeError):
            heap.insert(1.0, "y")
        with pytest.raises(TypeError):
            heap.contains(1.5)
        with pytest.raises(TypeError):
            heap.key_of("1")
        with pytest.raises(TypeError):
            heap.change_key(1.0, "z")
        assert len(heap) == 1
        assert heap.key_of(1) == "x"

    def test_zero_capacity(self):
        heap = IndexedDWayHeap(0)
        assert heap.is_empty()
        with pytest.raises(HandleOutOfRange):
            heap.insert(0, 1)
        with pytest.raises(ValueError):
            IndexedDWayHeap(-1)

    def test_pretty(self):
        heap = IndexedDWayHeap(3, 2)
        heap.insert(0, "a")
        heap.insert(1, "c")
        heap.insert(2, "b")
        assert heap.pretty() == "[0: 1=c]\n[1: 0=a, 2: 2=b]"

    @pytest.mark.parametrize("branching_factor", [1, 2, 3, 6, 16])
    @pytest.mark.parametrize("is_max_heap", [True, False])
    def test_random_operations(self, branching_factor, is_max_heap):
        np.random.seed(branching_factor)
        capacity = 64
        heap = IndexedDWayHeap(capacity, branching_factor, is_max_heap)
        reference = {}
        extreme = max if is_max_heap else min

        for _ in range(1000):
            handle = int(np.random.randint(0, capacity))
            key = int(np.random.randint(0, 1000))
            op = np.random.randint(0, 4)

            if handle not in reference:
                heap.insert(handle, key)
                reference[handle] = key
            elif op == 0:
                heap.delete(handle)
                del reference[handle]
            elif op == 1:
                heap.change_key(handle, key)
                reference[handle] = key
            elif op == 2 and key != reference[handle]:
                if key > reference[handle]:
                    heap.increase_key(handle, key)
                else:
                    heap.decrease_key(handle, key)
                reference[handle] = key
            elif reference:
                top_key = heap.peek_key()
                assert top_key == extreme(reference.values())
                top = heap.top()
                assert reference.pop(top) == top_key

            assert len(heap) == len(reference)
            if reference:
                assert heap.peek_key() == extreme(reference.values())
                assert heap.key_of(heap.peek_handle()) == heap.peek_key()

        assert heap._validate()
        for handle in range(capacity):
            assert heap.contains(handle) == (handle in reference)


class TestShortestPaths:
    def test_decrease_key_driven_dijkstra(self):
        edges = [
            (0, 1, 4), (0, 2, 1), (2, 1, 2), (1, 3, 1),
            (2, 3, 5), (3, 4, 3), (4, 5, 1), (2, 5, 20),
        ]
        assert shortest_paths(edges, 6, 0) == [0, 3, 1, 4, 7, 8]
