# aad/core/arena.py
"""
Contiguous node storage for the tape.

Every node has the same fixed layout, so the arena keeps one numpy array per
field group and grows all of them together (amortised O(1) append):

    weights[i]   = (weight0, weight1)
    parents[i]   = (parent0, parent1)
    curvature[i] = (d2/dp0², d2/dp0dp1, d2/dp1²)    # HessianArena only

The backward sweeps read `.tolist()` snapshots of these arrays: indexing
Python lists element-by-element is much cheaper than indexing numpy scalars.
"""

from __future__ import annotations
from typing import Iterator, Optional, Sequence

import numpy as np

from .node import Node, HessianNode


class NodeArena:
    """Growable array-of-structs holding first-order nodes."""

    second_order = False

    def __init__(self, dtype=np.float64, capacity: int = 64, growth_factor: float = 2.0):
        self.dtype = np.dtype(dtype)
        self.growth_factor = growth_factor
        self._count = 0
        self._weights = np.zeros((capacity, 2), dtype=self.dtype)
        self._parents = np.zeros((capacity, 2), dtype=np.int64)

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return self._weights.shape[0]

    # ---------------------------- appending ---------------------------- #
    def append(self, w0, w1, p0: int, p1: int,
               curvature: Optional[Sequence] = None) -> int:
        """Append one node and return its index. `curvature` is ignored here."""
        i = self._count
        if i == self.capacity:
            self._grow()
        self._weights[i, 0] = w0
        self._weights[i, 1] = w1
        self._parents[i, 0] = p0
        self._parents[i, 1] = p1
        self._count = i + 1
        return i

    def append_root(self) -> int:
        i = self._count
        return self.append(0.0, 0.0, i, i, (0.0, 0.0, 0.0))

    def _grow(self) -> None:
        new_cap = max(self.capacity + 1, int(self.capacity * self.growth_factor))
        self._weights = _resized(self._weights, new_cap)
        self._parents = _resized(self._parents, new_cap)

    # ----------------------------- reading ----------------------------- #
    @property
    def weights(self) -> np.ndarray:
        return self._weights[:self._count]

    @property
    def parents(self) -> np.ndarray:
        return self._parents[:self._count]

    def node(self, i: int) -> Node:
        if not 0 <= i < self._count:
            raise IndexError(i)
        w0, w1 = self._weights[i]
        p0, p1 = self._parents[i]
        return Node(w0, w1, int(p0), int(p1))

    def __iter__(self) -> Iterator[Node]:
        for i in range(self._count):
            yield self.node(i)


class HessianArena(NodeArena):
    """NodeArena that also stores the three local second partials per node."""

    second_order = True

    def __init__(self, dtype=np.float64, capacity: int = 64, growth_factor: float = 2.0):
        super().__init__(dtype, capacity, growth_factor)
        self._curvature = np.zeros((capacity, 3), dtype=self.dtype)

    def append(self, w0, w1, p0: int, p1: int,
               curvature: Optional[Sequence] = None) -> int:
        i = super().append(w0, w1, p0, p1)
        if curvature is not None:
            self._curvature[i] = curvature
        return i

    def _grow(self) -> None:
        super()._grow()
        self._curvature = _resized(self._curvature, self.capacity)

    @property
    def curvature(self) -> np.ndarray:
        return self._curvature[:self._count]

    def node(self, i: int) -> HessianNode:
        base = super().node(i)
        c00, c01, c11 = self._curvature[i]
        return HessianNode(base.weight0, base.weight1, base.parent0, base.parent1,
                           c00, c01, c11)


def _resized(arr: np.ndarray, rows: int) -> np.ndarray:
    out = np.zeros((rows,) + arr.shape[1:], dtype=arr.dtype)
    out[:arr.shape[0]] = arr
    return out
