# connectn/engine/transposition.py
from collections import OrderedDict
from typing import Hashable, Optional


class TranspositionTable:
    """
    Score cache for the minimax search.
    Unbounded by default; with max_size set, the least recently used entry is evicted.
    """

    def __init__(self, max_size: Optional[int] = None):
        self.table = OrderedDict()
        self.max_size = max_size
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable):
        if key in self.table:
            self.hits += 1
            if self.max_size is not None:
                self.table.move_to_end(key)
            return self.table[key]
        self.misses += 1
        return None

    def put(self, key: Hashable, score: int):
        self.table[key] = score
        if self.max_size is not None:
            self.table.move_to_end(key)
            while len(self.table) > self.max_size:
                self.table.popitem(last=False)

    def reset(self):
        self.table.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self):
        return len(self.table)

    def __contains__(self, key):
        return key in self.table
