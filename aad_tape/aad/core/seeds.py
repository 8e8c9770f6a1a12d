# aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at an output node and let gradients grow
# backwards through the tape. Every helper records `f` on a fresh, isolated
# tape: f(tape, x) receives the tape and the input Variable(s), and returns
# the output Variable(s). Inside f, Variable operators and `ops.*` functions
# record on that same tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Sequence, Tuple, Union

import numpy as np

from .var import Variable
from .tape import GradientTape, HessianTape, use_tape


def value(x: Any) -> Any:
    """Return the forward value of a Variable; pass plain numbers through unchanged."""
    return x.value if isinstance(x, Variable) else x


def _record(tape_cls, f, x0, dtype=None):
    """Create one root per entry of x0 (or a single root for a scalar), run f."""
    tape = tape_cls(dtype=dtype)
    scalar = np.ndim(x0) == 0
    with use_tape(tape):
        if scalar:
            xs = tape.create_variable(x0)
        else:
            xs = [tape.create_variable(v) for v in np.asarray(x0).ravel()]
        y = f(tape, xs)
    return tape, y, scalar


def _check_output(y, name: str) -> Variable:
    if not isinstance(y, Variable):
        raise TypeError(f"{name}: f must return a Variable recorded on the tape, "
                        f"got {type(y).__name__}")
    return y


def _gradient_of(tape: GradientTape, y: Variable) -> np.ndarray:
    """Gradient of one output; an output that is itself a root gives a unit row."""
    n = tape.variable_count
    if y.index < n:
        row = np.zeros(n, dtype=tape.dtype)
        row[y.index] = 1
        return row
    return tape.reverse_accumulate(index=y.index)


def _both_of(tape: HessianTape, y: Variable) -> Tuple[np.ndarray, np.ndarray]:
    n = tape.variable_count
    if y.index < n:
        return _gradient_of(tape, y), np.zeros((n, n), dtype=tape.dtype)
    return tape.reverse_accumulate_both(index=y.index)


# ----------------------------- first order ----------------------------- #
def grad(f: Callable, x0: Union[float, Sequence[float]], dtype=None):
    """
    Gradient of a scalar-output function y = f(tape, x) at x0.

    A scalar x0 gives a scalar derivative; a sequence gives an ndarray of
    partials in input order. One reverse pass in all cases.
    """
    tape, y, scalar = _record(GradientTape, f, x0, dtype)
    g = _gradient_of(tape, _check_output(y, "grad"))
    return g[0] if scalar else g


def grads(f: Callable[[GradientTape, Dict[str, Variable]], Variable],
          inputs: Dict[str, Any], dtype=None) -> Dict[str, Any]:
    """
    Gradient of y = f(tape, vars) w.r.t. ALL inputs (dict form), from ONE
    reverse pass.

    Example
    -------
    grads(lambda t, v: v["x"] * v["x"] + 3 * v["y"], {"x": 2.0, "y": 4.0})
    -> {"x": 4.0, "y": 3.0}
    """
    tape = GradientTape(dtype=dtype)
    with use_tape(tape):
        vars_ad = {k: tape.create_variable(v) for k, v in inputs.items()}
        y = f(tape, vars_ad)
    g = _gradient_of(tape, _check_output(y, "grads"))
    return {k: g[v.index] for k, v in vars_ad.items()}


def jacobian(f: Callable, x0: Sequence[float], dtype=None) -> np.ndarray:
    """
    Jacobian (m x n) of a vector-valued f(tape, xs) -> [y_1, ..., y_m].

    Each row is a partial accumulation stopped at that output's node.
    """
    tape, ys, _ = _record(GradientTape, f, x0, dtype)
    rows = [_gradient_of(tape, _check_output(y, "jacobian")) for y in ys]
    return np.vstack(rows)


def jvp(f: Callable, x0: Sequence[float], v: Sequence[float], dtype=None) -> np.ndarray:
    """Jacobian-vector product J·v."""
    return jacobian(f, x0, dtype) @ np.asarray(v)


def vjp(v: Sequence[float], f: Callable, x0: Sequence[float], dtype=None) -> np.ndarray:
    """Vector-Jacobian product vᵀ·J."""
    return np.asarray(v) @ jacobian(f, x0, dtype)


def directional_derivative(f: Callable, x0: Sequence[float], v: Sequence[float],
                           dtype=None):
    """∇f(x0)·v for a scalar-output f."""
    return grad(f, list(x0), dtype) @ np.asarray(v)


def divergence(f: Callable, x0: Sequence[float], dtype=None):
    """Trace of the (square) Jacobian of a vector field."""
    J = jacobian(f, x0, dtype)
    if J.shape[0] != J.shape[1]:
        raise ValueError(f"divergence needs a square Jacobian, got shape {J.shape}")
    return np.trace(J)


def curl(f: Callable, x0: Sequence[float], dtype=None) -> np.ndarray:
    """Curl of a vector field F: R³ -> R³."""
    J = jacobian(f, x0, dtype)
    if J.shape != (3, 3):
        raise ValueError(f"curl needs a field R^3 -> R^3, got Jacobian shape {J.shape}")
    return np.array([
        J[2, 1] - J[1, 2],
        J[0, 2] - J[2, 0],
        J[1, 0] - J[0, 1],
    ])


# ----------------------------- second order ----------------------------- #
def grad_and_hessian(f: Callable, x0: Sequence[float], dtype=None):
    """(gradient, Hessian) of a scalar-output f from one edge-pushing sweep."""
    tape, y, _ = _record(HessianTape, f, list(np.ravel(x0)), dtype)
    return _both_of(tape, _check_output(y, "grad_and_hessian"))


def hessian(f: Callable, x0: Sequence[float], dtype=None) -> np.ndarray:
    """Hessian (n x n) of a scalar-output f at x0."""
    return grad_and_hessian(f, x0, dtype)[1]


def hvp(f: Callable, x0: Sequence[float], v: Sequence[float], dtype=None) -> np.ndarray:
    """
    Hessian-vector product H·v.

    The full Hessian comes out of the sweep anyway, so this is a dense product.
    """
    return hessian(f, x0, dtype) @ np.asarray(v)


def laplacian(f: Callable, x0: Sequence[float], dtype=None):
    """Trace of the Hessian."""
    return np.trace(hessian(f, x0, dtype))
