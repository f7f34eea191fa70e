from src.multiway_heap.arity import (D_DEFAULT, POWER_DEFAULT, DAryArity,
                                     PowerOf2Arity)
from src.multiway_heap.dway_heap import DWayHeap, PowerOf2Heap
from src.multiway_heap.errors import (DuplicateHandle, HandleOutOfRange,
                                      HeapError, InvalidKeyDirection,
                                      NotPresent, Underflow)
from src.multiway_heap.indexed_heap import IndexedDWayHeap
from src.multiway_heap.ordering import Ordering
from src.multiway_heap.topk import get_topk
