# aad/ops/arithmetic.py
import numpy as np

from .primitive import BinaryPrimitive, UnaryPrimitive, _zero, _active

ADD = BinaryPrimitive(
    "add",
    f=lambda a, b: a + b,
    dfdx=lambda a, b, out: 1.0,
    dfdy=lambda a, b, out: 1.0,
    d2fdx2=_zero, d2fdxdy=_zero, d2fdy2=_zero,
)

SUBTRACT = BinaryPrimitive(
    "subtract",
    f=lambda a, b: a - b,
    dfdx=lambda a, b, out: 1.0,
    dfdy=lambda a, b, out: -1.0,
    d2fdx2=_zero, d2fdxdy=_zero, d2fdy2=_zero,
)

MULTIPLY = BinaryPrimitive(
    "multiply",
    f=lambda a, b: a * b,
    dfdx=lambda a, b, out: b,
    dfdy=lambda a, b, out: a,
    d2fdx2=_zero,
    d2fdxdy=lambda a, b, out: 1.0,
    d2fdy2=_zero,
)

DIVIDE = BinaryPrimitive(
    "divide",
    f=lambda a, b: a / b,
    dfdx=lambda a, b, out: 1.0 / b,
    dfdy=lambda a, b, out: -a / (b * b),
    d2fdx2=_zero,
    d2fdxdy=lambda a, b, out: -1.0 / (b * b),
    d2fdy2=lambda a, b, out: 2.0 * a / (b * b * b),
)

# The partial w.r.t. the divisor is x * floor(x / y), not -floor(x / y).
# Curvature is taken as zero. The remainder is truncated (sign of x).
MODULO = BinaryPrimitive(
    "modulo",
    f=lambda a, b: np.fmod(a, b),
    dfdx=lambda a, b, out: 1.0,
    dfdy=lambda a, b, out: a * np.floor(a / b),
    d2fdx2=_zero, d2fdxdy=_zero, d2fdy2=_zero,
    real_only=True,
)

# y = x^n  (x > 0 whenever n is a non-integer Variable)
POW = BinaryPrimitive(
    "pow",
    f=lambda a, b: np.power(a, b),
    dfdx=lambda a, b, out: b * np.power(a, b - 1.0),
    dfdy=lambda a, b, out: np.log(a) * out,
    d2fdx2=lambda a, b, out: (b - 1.0) * b * np.power(a, b - 2.0),
    d2fdxdy=lambda a, b, out: (1.0 + np.log(a) * b) * np.power(a, b - 1.0),
    d2fdy2=lambda a, b, out: np.log(a) * np.log(a) * out,
)

NEGATE = UnaryPrimitive(
    "negate",
    f=lambda a: -a,
    df=lambda a, out: -1.0,
    d2f=_zero,
)


# Functional forms recording on the active tape (see use_tape)
def add(x, y):
    return _active().add(x, y)


def subtract(x, y):
    return _active().subtract(x, y)


def multiply(x, y):
    return _active().multiply(x, y)


def divide(x, y):
    return _active().divide(x, y)


def modulo(x, y):
    return _active().modulo(x, y)


def pow(x, y):
    return _active().pow(x, y)


def negate(x):
    return _active().negate(x)
