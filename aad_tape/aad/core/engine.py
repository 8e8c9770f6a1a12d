# aad/core/engine.py
"""
First-order reverse accumulation.

One backward scan from the seed node down to the last root:

    adjoint[parent0] += adjoint[i] * weight0
    adjoint[parent1] += adjoint[i] * weight1

Roots are never visited, and a unary node's degenerate second edge has zero
weight, so the loop needs no other special case.
"""
from __future__ import annotations

import logging
import operator

import numpy as np

from .errors import NoRootNodesError, NodeIndexError
from .var import Variable

log = logging.getLogger(__name__)


def resolve_start(tape, index=None) -> int:
    """
    Validate a tape for accumulation and return the node to seed.

    `index` may be a node index or a Variable; None means the last node.
    An explicit index must name a recorded operation, i.e.
    variable_count <= index < node_count.
    """
    n_roots = tape.variable_count
    if n_roots == 0:
        raise NoRootNodesError(tape.kind)
    n_nodes = tape.node_count
    if index is None:
        return n_nodes - 1
    if isinstance(index, Variable):
        index = index.index
    index = operator.index(index)
    if not n_roots <= index < n_nodes:
        raise NodeIndexError(index, n_roots, n_nodes)
    return index


def reverse(tape, seed=1.0, index=None) -> np.ndarray:
    """
    Gradient of node `index` (default: last node) w.r.t. every root.

    Args:
        tape: a GradientTape (or subclass).
        seed: adjoint planted at the start node.
        index: optional stop index for a partial backward pass.

    Returns:
        1-D array of length `tape.variable_count`, roots in creation order.
    """
    start = resolve_start(tape, index)
    n_roots = tape.variable_count
    dtype = tape.dtype

    # Python lists are much faster to index than numpy scalars
    weights = tape.arena.weights[:start + 1].tolist()
    parents = tape.arena.parents[:start + 1].tolist()

    adj = [dtype.type(0).item()] * (start + 1)
    adj[start] = dtype.type(seed).item()

    for i in range(start, n_roots - 1, -1):
        a = adj[i]
        w0, w1 = weights[i]
        p0, p1 = parents[i]
        adj[p0] += a * w0
        adj[p1] += a * w1

    log.debug("reverse: %d nodes scanned from index %d", start + 1 - n_roots, start)
    return np.array(adj[:n_roots], dtype=dtype)
