# aad/core/__init__.py

"""
Core public API of the tape.

Exports:
    Variable         : {index, value} handle returned by every recording call.
    GradientTape     : Records operations; first-order reverse accumulation.
    HessianTape      : GradientTape that also yields Hessians (edge-pushing).
    use_tape         : Context manager selecting the tape used by operators.
    active_tape      : The tape selected by `use_tape`.
    reverse          : Single first-order reverse pass over a tape.
    grad, grads, hessian, jacobian, ... : one-call derivative helpers.
"""

from .errors import (
    AutoDiffError, NoRootNodesError, NodeIndexError,
    NoActiveTapeError, OperationCancelledError,
)
from .config import TapeConfig, DEFAULT_CONFIG
from .node import Node, HessianNode
from .var import Variable
from .tape import GradientTape, HessianTape, use_tape, active_tape
from .engine import reverse
from .seeds import (
    value, grad, grads, jacobian, jvp, vjp, directional_derivative,
    divergence, curl, grad_and_hessian, hessian, hvp, laplacian,
)
from .graph_utils import get_graph_stats, print_graph_summary

__all__ = [
    "AutoDiffError", "NoRootNodesError", "NodeIndexError",
    "NoActiveTapeError", "OperationCancelledError",
    "TapeConfig", "DEFAULT_CONFIG",
    "Node", "HessianNode", "Variable",
    "GradientTape", "HessianTape", "use_tape", "active_tape",
    "reverse",
    "value", "grad", "grads", "jacobian", "jvp", "vjp", "directional_derivative",
    "divergence", "curl", "grad_and_hessian", "hessian", "hvp", "laplacian",
    "get_graph_stats", "print_graph_summary",
]
