# aad/ops/primitive.py
"""
Rule tables for tape primitives.

A primitive knows how to compute its forward value and its *local* first and
second partial derivatives at the recorded point. The tape decides which of
them are needed: a GradientTape only evaluates the first partials, a
HessianTape evaluates both, and a constant operand never gets a partial.
"""

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class UnaryPrimitive:
    """
    f(a)           -> forward value
    df(a, out)     -> ∂out/∂a
    d2f(a, out)    -> ∂²out/∂a²
    """
    tag: str
    f: Callable
    df: Callable
    d2f: Callable
    real_only: bool = False


@dataclass(frozen=True)
class BinaryPrimitive:
    """
    f(a, b)                 -> forward value
    dfdx / dfdy(a, b, out)  -> first partials w.r.t. a and b
    d2fdx2 / d2fdxdy / d2fdy2(a, b, out) -> second partials
    """
    tag: str
    f: Callable
    dfdx: Callable
    dfdy: Callable
    d2fdx2: Callable
    d2fdxdy: Callable
    d2fdy2: Callable
    real_only: bool = False


def _zero(*_):
    return 0.0


def _active():
    from ..core import tape as tape_mod  # local import to avoid cycles
    return tape_mod.active_tape()
