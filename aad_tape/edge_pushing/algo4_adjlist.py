"""
Algorithm 4 (edge-pushing, component-wise form) over a HessianTape.

Reference: Gower & Mello, "A new framework for the computation of Hessians"
(Optimization Methods & Software, 2012).

For every node i, from the seed node down to the last root:

1. Pushing:  distribute the second-order "edges" W(p, i) onto the
   predecessors of i, then clear row/column i.
2. Creating: W += v̄ᵢ · Φ''ᵢ (local second partials of node i).
3. Adjoint:  v̄ⱼ += v̄ᵢ · ∂φᵢ/∂vⱼ for every predecessor j.

W is a SymmSparseAdjList over node indices, so the neighbours of i come
from its adjacency set in O(degree). When the sweep stops, the leading
variable_count x variable_count block of W is the Hessian and v̄ restricted
to the roots is the gradient.
"""

import logging
import warnings
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..aad.core.engine import resolve_start
from .symm_sparse_adjlist import SymmSparseAdjList

log = logging.getLogger(__name__)


def algo4_adjlist(tape, seed=1.0, index=None, want_gradient: bool = True,
                  want_hessian: bool = True
                  ) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
    """
    Gradient and/or Hessian of node `index` (default: the last node) w.r.t.
    the roots of a HessianTape, from a single reverse sweep.

    Args:
        tape: HessianTape (its arena must carry curvature)
        seed: adjoint planted at the start node
        index: optional stop index for a partial backward pass
        want_gradient / want_hessian: which results to return

    Returns:
        (gradient, hessian); an entry is None when it was not requested.
    """
    start = resolve_start(tape, index)
    n_roots = tape.variable_count
    dtype = tape.dtype
    cfg = tape.config

    n_ops = start + 1 - n_roots
    if want_hessian and n_ops > cfg.dense_hessian_warn_nodes:
        warnings.warn(
            f"Edge-pushing over {n_ops:,} nodes: the workspace may grow large; "
            f"consider a partial accumulation or a smaller tape.",
            RuntimeWarning,
        )

    weights = tape.arena.weights[:start + 1].tolist()
    parents = tape.arena.parents[:start + 1].tolist()
    curvature = tape.arena.curvature[:start + 1].tolist()

    W = SymmSparseAdjList(start + 1, tolerance=cfg.prune_tolerance)
    vbar = [dtype.type(0).item()] * (start + 1)
    vbar[start] = dtype.type(seed).item()

    for i in range(start, n_roots - 1, -1):
        w0, w1 = weights[i]
        p0, p1 = parents[i]
        d1 = _first_derivatives(i, p0, p1, w0, w1)
        preds = sorted(d1)

        # PUSHING STAGE
        if want_hessian:
            _pushing_stage(W, i, preds, d1)

        vb = vbar[i]

        # CREATING STAGE
        if want_hessian and vb != 0:
            _creating_stage(W, i, p0, p1, curvature[i], vb)

        # ADJOINT STAGE
        for j in preds:
            vbar[j] += vb * d1[j]

    log.debug("algo4_adjlist: %d nodes, %d workspace entries left", n_ops, len(W.map))

    gradient = np.array(vbar[:n_roots], dtype=dtype) if want_gradient else None
    hessian = W.to_dense(n_roots, dtype=dtype) if want_hessian else None
    return gradient, hessian


def _first_derivatives(i: int, p0: int, p1: int, w0, w1) -> Dict[int, complex]:
    """Local partials keyed by predecessor; x*x style duplicates are merged."""
    if p1 == i:
        return {p0: w0}
    if p0 == p1:
        return {p0: w0 + w1}
    return {p0: w0, p1: w1}


def _pushing_stage(W: SymmSparseAdjList, i: int, preds: List[int],
                   d1: Dict[int, complex]) -> None:
    """
    Push every non-zero W(p, i) onto the predecessors of i:

      p == i:  W(j, k) += d1[j] * d1[k] * W(i, i)     for j <= k in preds
      p != i:  W(p, p) += 2 * d1[p] * W(p, i)         if p is a predecessor
               W(p, j) += d1[j] * W(p, i)             otherwise
    """
    for p, w_pi in W.get_neighbors(i):
        if p == i:
            for a, j in enumerate(preds):
                dj = d1[j]
                if dj == 0:
                    continue
                for k in preds[a:]:
                    dk = d1[k]
                    if dk != 0:
                        W.add(j, k, dj * dk * w_pi)
        else:
            for j in preds:
                dj = d1[j]
                if dj == 0:
                    continue
                if j == p:
                    W.add(p, p, 2.0 * dj * w_pi)
                else:
                    W.add(p, j, dj * w_pi)

    W.clear_row_col(i)


def _creating_stage(W: SymmSparseAdjList, i: int, p0: int, p1: int,
                    c, vbar) -> None:
    """W += v̄ᵢ Φ''ᵢ, with c = (∂²/∂p0², ∂²/∂p0∂p1, ∂²/∂p1²)."""
    c00, c01, c11 = c
    W.add(p0, p0, vbar * c00)
    if p1 == i:
        return  # unary node: the second parent is a placeholder
    W.add(p1, p1, vbar * c11)
    if p0 == p1:
        W.add(p0, p0, 2.0 * vbar * c01)
    else:
        W.add(p0, p1, vbar * c01)
