# aad/core/tape.py
"""
Gradient and Hessian tapes.

A tape records a scalar computation as an append-only list of fixed-size
nodes. Roots (the independent variables) occupy indices [0, variable_count);
every recorded operation appends one node whose parents are strictly older
nodes, so append order is already a topological order.

    tape = GradientTape()
    x = tape.create_variable(1.23)
    y = tape.create_variable(0.66)
    f = tape.divide(tape.cos(x), tape.add(x, y))
    grad = tape.reverse_accumulate()        # -> array([df/dx, df/dy])

Variables also support Python operators, recorded on the *active* tape:

    with use_tape(tape):
        f = ops.cos(x) / (x + y)
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import numpy as np

from . import engine, graph_utils
from .arena import NodeArena, HessianArena
from .config import DEFAULT_CONFIG, TapeConfig
from .errors import AutoDiffError, NoActiveTapeError
from .node import Node
from .var import Variable
from ..ops.primitive import BinaryPrimitive, UnaryPrimitive, _zero
from ..ops import arithmetic as A
from ..ops import transcendental as T
from ..ops import trigonometric as G
from ..ops import special as S

log = logging.getLogger(__name__)


class GradientTape:
    """
    Tape for first-order reverse accumulation.

    Args:
        capacity: number of node slots to pre-allocate.
        is_tracking: when False, operations compute values but record nothing.
        dtype: numpy scalar type of values and weights (float64 or complex128).
        config: TapeConfig supplying the defaults for the arguments above.
    """

    arena_class = NodeArena
    kind = "gradient"

    def __init__(self, capacity: Optional[int] = None, is_tracking: bool = True,
                 dtype=None, config: Optional[TapeConfig] = None):
        self.config = (config or DEFAULT_CONFIG).with_overrides(
            dtype=dtype, initial_capacity=capacity)
        self._dtype = np.dtype(self.config.dtype)
        self._arena = self.arena_class(self._dtype, self.config.initial_capacity,
                                       self.config.growth_factor)
        self._variable_count = 0
        self.is_tracking = is_tracking

    def __repr__(self):
        return (f"{type(self).__name__}(nodes={self.node_count}, "
                f"variables={self.variable_count}, dtype={self._dtype})")

    # ---------------------------- properties ---------------------------- #
    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def arena(self) -> NodeArena:
        return self._arena

    @property
    def node_count(self) -> int:
        return len(self._arena)

    @property
    def variable_count(self) -> int:
        return self._variable_count

    def node(self, i: int) -> Node:
        return self._arena.node(i)

    @property
    def nodes(self) -> Iterator[Node]:
        return iter(self._arena)

    # ---------------------------- variables ----------------------------- #
    def create_variable(self, seed) -> Variable:
        """Append a root node and return it as a Variable holding `seed`."""
        if self.node_count != self._variable_count:
            raise AutoDiffError(
                "Variables must be created before any operation is recorded.")
        index = self._arena.append_root()
        self._variable_count += 1
        return Variable(index, self._cast(seed))

    def _cast(self, v):
        return self._dtype.type(v)

    # --------------------------- recording core ------------------------- #
    def _check_real(self, tag: str) -> None:
        if self._dtype.kind == "c":
            raise TypeError(f"'{tag}' is only defined for real tapes, not {self._dtype}")

    def _unary(self, prim: UnaryPrimitive, x) -> Variable:
        if not isinstance(x, Variable):
            raise TypeError(f"'{prim.tag}' expects a Variable, got {type(x).__name__}")
        if prim.real_only:
            self._check_real(prim.tag)
        a = x.value
        out = self._cast(prim.f(a))
        if not self.is_tracking:
            return Variable(self.node_count, out)

        i = self.node_count
        curvature = None
        if self._arena.second_order:
            curvature = (prim.d2f(a, out), 0.0, 0.0)
        index = self._arena.append(prim.df(a, out), 0.0, x.index, i, curvature)
        return Variable(index, out)

    def _binary(self, prim: BinaryPrimitive, x, y) -> Variable:
        x_is_var = isinstance(x, Variable)
        y_is_var = isinstance(y, Variable)
        if not (x_is_var or y_is_var):
            raise TypeError(f"'{prim.tag}' needs at least one Variable operand")
        if prim.real_only:
            self._check_real(prim.tag)
        a = x.value if x_is_var else self._cast(x)
        b = y.value if y_is_var else self._cast(y)
        out = self._cast(prim.f(a, b))
        if not self.is_tracking:
            return Variable(self.node_count, out)

        i = self.node_count
        second = self._arena.second_order
        curvature = None
        if x_is_var and y_is_var:
            w0, w1 = prim.dfdx(a, b, out), prim.dfdy(a, b, out)
            p0, p1 = x.index, y.index
            if second:
                curvature = (prim.d2fdx2(a, b, out), prim.d2fdxdy(a, b, out),
                             prim.d2fdy2(a, b, out))
        elif x_is_var:
            # constant y: degenerate unary node on x
            w0, w1, p0, p1 = prim.dfdx(a, b, out), 0.0, x.index, i
            if second:
                curvature = (prim.d2fdx2(a, b, out), 0.0, 0.0)
        else:
            w0, w1, p0, p1 = prim.dfdy(a, b, out), 0.0, y.index, i
            if second:
                curvature = (prim.d2fdy2(a, b, out), 0.0, 0.0)
        index = self._arena.append(w0, w1, p0, p1, curvature)
        return Variable(index, out)

    # ---------------------------- arithmetic ---------------------------- #
    def add(self, x, y):
        return self._binary(A.ADD, x, y)

    def subtract(self, x, y):
        return self._binary(A.SUBTRACT, x, y)

    def multiply(self, x, y):
        return self._binary(A.MULTIPLY, x, y)

    def divide(self, x, y):
        return self._binary(A.DIVIDE, x, y)

    def modulo(self, x, y):
        return self._binary(A.MODULO, x, y)

    def pow(self, x, y):
        return self._binary(A.POW, x, y)

    def negate(self, x):
        return self._unary(A.NEGATE, x)

    # -------------------- exponentials / logs / roots -------------------- #
    def exp(self, x):
        return self._unary(T.EXP, x)

    def exp2(self, x):
        return self._unary(T.EXP2, x)

    def exp10(self, x):
        return self._unary(T.EXP10, x)

    def ln(self, x):
        return self._unary(T.LN, x)

    def log(self, x, base):
        return self._binary(T.LOG, x, base)

    def log2(self, x):
        return self._unary(T.LOG2, x)

    def log10(self, x):
        return self._unary(T.LOG10, x)

    def sqrt(self, x):
        return self._unary(T.SQRT, x)

    def cbrt(self, x):
        return self._unary(T.CBRT, x)

    def root(self, x, n):
        return self._binary(T.ROOT, x, n)

    # --------------------- trigonometric / hyperbolic --------------------- #
    def sin(self, x):
        return self._unary(G.SIN, x)

    def cos(self, x):
        return self._unary(G.COS, x)

    def tan(self, x):
        return self._unary(G.TAN, x)

    def asin(self, x):
        return self._unary(G.ASIN, x)

    def acos(self, x):
        return self._unary(G.ACOS, x)

    def atan(self, x):
        return self._unary(G.ATAN, x)

    def atan2(self, y, x):
        return self._binary(G.ATAN2, y, x)

    def sinh(self, x):
        return self._unary(G.SINH, x)

    def cosh(self, x):
        return self._unary(G.COSH, x)

    def tanh(self, x):
        return self._unary(G.TANH, x)

    def asinh(self, x):
        return self._unary(G.ASINH, x)

    def acosh(self, x):
        return self._unary(G.ACOSH, x)

    def atanh(self, x):
        return self._unary(G.ATANH, x)

    # ------------------------------ special ------------------------------ #
    def erf(self, x):
        return self._unary(S.ERF, x)

    def norm_cdf(self, x):
        return self._unary(S.NORM_CDF, x)

    # ------------------------------ custom ------------------------------- #
    def custom_unary(self, x, f: Callable, dfx: Callable,
                     dfxx: Optional[Callable] = None) -> Variable:
        """
        Record y = f(x) with a caller-supplied derivative `dfx(x)`.

        `dfxx(x)` (the second derivative) is required on a HessianTape.
        """
        if dfxx is None:
            if self._arena.second_order:
                raise TypeError("custom_unary on a Hessian tape requires dfxx")
            dfxx = _zero
        prim = UnaryPrimitive(
            "custom",
            f=f,
            df=lambda a, out: dfx(a),
            d2f=lambda a, out: dfxx(a),
        )
        return self._unary(prim, x)

    def custom_binary(self, x, y, f: Callable, dfx: Callable, dfy: Callable,
                      dfxx: Optional[Callable] = None,
                      dfxy: Optional[Callable] = None,
                      dfyy: Optional[Callable] = None) -> Variable:
        """
        Record z = f(x, y) with caller-supplied partials `dfx(x, y)` and
        `dfy(x, y)`. On a HessianTape the three second partials are required.
        """
        second = (dfxx, dfxy, dfyy)
        if any(d is None for d in second):
            if self._arena.second_order:
                raise TypeError("custom_binary on a Hessian tape requires dfxx, dfxy and dfyy")
            dfxx = dfxy = dfyy = _zero
        prim = BinaryPrimitive(
            "custom",
            f=f,
            dfdx=lambda a, b, out: dfx(a, b),
            dfdy=lambda a, b, out: dfy(a, b),
            d2fdx2=lambda a, b, out: dfxx(a, b),
            d2fdxdy=lambda a, b, out: dfxy(a, b),
            d2fdy2=lambda a, b, out: dfyy(a, b),
        )
        return self._binary(prim, x, y)

    # --------------------------- accumulation ---------------------------- #
    def reverse_accumulate(self, seed=1.0, index=None) -> np.ndarray:
        """
        Gradient of node `index` (default: the last node) w.r.t. every root.

        Raises:
            NoRootNodesError: the tape has no variables.
            NodeIndexError: `index` is not a recorded operation.
        """
        return engine.reverse(self, seed, index)

    # ---------------------------- diagnostics ---------------------------- #
    def log_nodes(self, logger: Optional[logging.Logger] = None,
                  cancel_event=None, limit: Optional[int] = None) -> None:
        """Log up to `limit` nodes at INFO level; see graph_utils.log_nodes."""
        graph_utils.log_nodes(self, logger=logger, cancel_event=cancel_event,
                              limit=limit)


class HessianTape(GradientTape):
    """
    Tape that also records local second partials, so one edge-pushing sweep
    yields the Hessian (and the gradient) w.r.t. every root.
    """

    arena_class = HessianArena
    kind = "hessian"

    def reverse_accumulate_hessian(self, seed=1.0, index=None) -> np.ndarray:
        from ...edge_pushing import algo4_adjlist
        _, hessian = algo4_adjlist(self, seed, index, want_gradient=False)
        return hessian

    def reverse_accumulate_both(self, seed=1.0, index=None):
        """Return (gradient, hessian) from a single backward traversal."""
        from ...edge_pushing import algo4_adjlist
        return algo4_adjlist(self, seed, index)


# ------------------------------------------------------------------------- #
# Active tape: the target of Variable operators and the functional ops.
# ------------------------------------------------------------------------- #
_active_tape: Optional[GradientTape] = None


def active_tape() -> GradientTape:
    if _active_tape is None:
        raise NoActiveTapeError()
    return _active_tape


@contextmanager
def use_tape(tape: Optional[GradientTape] = None):
    """
    Make `tape` (a fresh GradientTape if omitted) the active tape:

        with use_tape(HessianTape()) as tape:
            x = tape.create_variable(1.23)
            y = ops.sin(x) * ops.ln(x) / ops.exp(-x)
            g, h = tape.reverse_accumulate_both()

    The previously active tape is restored on exit.
    """
    global _active_tape
    prev = _active_tape
    try:
        _active_tape = tape if tape is not None else GradientTape()
        yield _active_tape
    finally:
        _active_tape = prev
