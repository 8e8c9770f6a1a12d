# aad/ops/__init__.py
"""
Primitive rules and their functional forms.

The UPPER_CASE objects are the rule tables consumed by the tapes; the
lower-case functions record on the active tape, so users can do:

    with use_tape(tape):
        y = ops.sin(x) * ops.ln(x) / ops.exp(-x)
"""

from .primitive import UnaryPrimitive, BinaryPrimitive
from .arithmetic import add, subtract, multiply, divide, modulo, pow, negate
from .transcendental import exp, exp2, exp10, ln, log, log2, log10, sqrt, cbrt, root
from .trigonometric import (
    sin, cos, tan, asin, acos, atan, atan2,
    sinh, cosh, tanh, asinh, acosh, atanh,
)
from .special import erf, norm_cdf

__all__ = [
    "UnaryPrimitive", "BinaryPrimitive",
    "add", "subtract", "multiply", "divide", "modulo", "pow", "negate",
    "exp", "exp2", "exp10", "ln", "log", "log2", "log10", "sqrt", "cbrt", "root",
    "sin", "cos", "tan", "asin", "acos", "atan", "atan2",
    "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
    "erf", "norm_cdf",
]
