"""
Symmetric sparse matrix with adjacency lists.

Workspace W of the edge-pushing sweep. Entries are indexed by tape node and
stored once in canonical (min, max) order; adjacency sets give the non-zero
neighbours of a node in O(degree) instead of O(n).
"""

import numpy as np
from typing import Dict, Tuple, List, Set, Iterator
from collections import defaultdict


class SymmSparseAdjList:
    """
    Symmetric sparse matrix with O(1) neighbour lookup.

    Maintains two data structures:
    1. map: Dict[(i,j), val] - canonical storage (upper triangle)
    2. adj: Dict[i, Set[j]] - adjacency sets, adj[i] holds i itself when W(i,i) != 0

    Args:
        n: matrix dimension
        tolerance: entries whose magnitude drops to or below this value after
            an update are removed (0.0 removes exact cancellations only)
    """

    def __init__(self, n: int, tolerance: float = 0.0):
        self.n = n
        self.tolerance = tolerance
        self.map: Dict[Tuple[int, int], complex] = {}
        self.adj: Dict[int, Set[int]] = defaultdict(set)

    @staticmethod
    def _key(i: int, j: int) -> Tuple[int, int]:
        return (i, j) if i <= j else (j, i)

    def _unlink(self, i: int, j: int) -> None:
        self.adj[i].discard(j)
        self.adj[j].discard(i)
        if not self.adj[i]:
            del self.adj[i]
        if j != i and not self.adj[j]:
            del self.adj[j]

    def add(self, i: int, j: int, val) -> None:
        """Accumulate `val` into W(i,j) (and W(j,i)). Zero updates are skipped."""
        if val == 0:
            return

        key = self._key(i, j)
        if key in self.map:
            new = self.map[key] + val
            if abs(new) <= self.tolerance:
                del self.map[key]
                self._unlink(i, j)
            else:
                self.map[key] = new
        else:
            self.map[key] = val
            self.adj[i].add(j)
            if i != j:
                self.adj[j].add(i)

    def get(self, i: int, j: int):
        return self.map.get(self._key(i, j), 0.0)

    def get_neighbors(self, i: int) -> List[Tuple[int, complex]]:
        """
        All (j, W(i,j)) with W(i,j) != 0, as a list, so the caller may update
        W while iterating over it.
        """
        if i not in self.adj:
            return []
        return [(j, self.map[self._key(i, j)]) for j in self.adj[i]]

    def clear_row_col(self, idx: int) -> None:
        """Remove row and column idx."""
        if idx not in self.adj:
            return

        for j in list(self.adj[idx]):
            del self.map[self._key(idx, j)]
            if j != idx:
                self.adj[j].discard(idx)
                if not self.adj[j]:
                    del self.adj[j]
        del self.adj[idx]

    def to_dense(self, size: int = None, dtype=np.float64) -> np.ndarray:
        """
        Dense symmetric copy of the leading `size` x `size` block
        (the whole matrix when size is None).
        """
        size = self.n if size is None else size
        dense = np.zeros((size, size), dtype=dtype)
        for (i, j), val in self.map.items():
            if j < size:
                dense[i, j] = val
                dense[j, i] = val
        return dense

    def items(self) -> Iterator[Tuple[Tuple[int, int], complex]]:
        """Iterator over ((i,j), value) with i <= j."""
        return iter(self.map.items())

    def nnz(self) -> int:
        """Number of non-zero entries, counting both halves."""
        return sum(1 if i == j else 2 for (i, j) in self.map)

    def sparsity(self) -> float:
        """Share of zero entries, in percent."""
        return 100.0 * (1.0 - self.nnz() / (self.n * self.n))
