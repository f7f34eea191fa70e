import logging

import numpy as np

from src import IndexedDWayHeap, PowerOf2Heap, get_topk


logging.basicConfig(level=logging.INFO)

words = ["it", "was", "the", "best", "of", "times", "it", "was", "the",
         "worst"]

# Sort a shuffled array with every power-of-two arity
rng = np.random.default_rng(0)
keys = rng.permutation(1 << 10).tolist()
for power in range(0, 6):
    heap = PowerOf2Heap(keys, power=power)
    result = [heap.top() for _ in range(len(keys))]
    print(f"{heap.branching_factor}-heap sorted: {result[:5]} ...")

# Create an indexed max heap keyed by word
print("Creating indexed heap...")
pq = IndexedDWayHeap(len(words))
for handle, word in enumerate(words):
    pq.insert(handle, word)

print(f"Heap size: {len(pq)}")
print(f"Top 3 handles: {get_topk(pq, 3)}")
print(pq.pretty())

while not pq.is_empty():
    handle = pq.top()
    print(handle, words[handle])
