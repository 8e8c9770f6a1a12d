"""
Hessian computation by edge-pushing.
From "A new framework for the computation of Hessians" (Gower & Mello).

Implementations:
- algo4_adjlist: Algorithm 4 with adjacency lists (O(degree) neighbour lookup)

Data structures:
- SymmSparseAdjList: symmetric sparse matrix with adjacency sets
"""

from .algo4_adjlist import algo4_adjlist
from .symm_sparse_adjlist import SymmSparseAdjList

__all__ = [
    'algo4_adjlist',
    'SymmSparseAdjList'
]
