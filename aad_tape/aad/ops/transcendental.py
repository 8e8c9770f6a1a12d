# aad/ops/transcendental.py
import numpy as np

from ..core.constants import LN2, LN10
from .primitive import BinaryPrimitive, UnaryPrimitive, _active


def _cbrt(a):
    # np.cbrt has no complex loop
    return np.cbrt(a) if np.isrealobj(a) else np.power(a, 1.0 / 3.0)


# ---------------------------- exponentials ---------------------------- #
EXP = UnaryPrimitive(
    "exp",
    f=np.exp,
    df=lambda a, out: out,
    d2f=lambda a, out: out,
)

EXP2 = UnaryPrimitive(
    "exp2",
    f=np.exp2,
    df=lambda a, out: LN2 * out,
    d2f=lambda a, out: LN2 * LN2 * out,
)

EXP10 = UnaryPrimitive(
    "exp10",
    f=lambda a: np.power(10.0, a),
    df=lambda a, out: LN10 * out,
    d2f=lambda a, out: LN10 * LN10 * out,
)

# ----------------------------- logarithms ----------------------------- #
LN = UnaryPrimitive(
    "ln",
    f=np.log,
    df=lambda a, out: 1.0 / a,
    d2f=lambda a, out: -1.0 / (a * a),
)

LOG2 = UnaryPrimitive(
    "log2",
    f=np.log2,
    df=lambda a, out: 1.0 / (LN2 * a),
    d2f=lambda a, out: -1.0 / (LN2 * a * a),
)

LOG10 = UnaryPrimitive(
    "log10",
    f=np.log10,
    df=lambda a, out: 1.0 / (LN10 * a),
    d2f=lambda a, out: -1.0 / (LN10 * a * a),
)

# log_b(x) = ln x / ln b ; operands are (x, b)
LOG = BinaryPrimitive(
    "log",
    f=lambda a, b: np.log(a) / np.log(b),
    dfdx=lambda a, b, out: 1.0 / (a * np.log(b)),
    dfdy=lambda a, b, out: -np.log(a) / (b * np.log(b) * np.log(b)),
    d2fdx2=lambda a, b, out: -1.0 / (a * a * np.log(b)),
    d2fdxdy=lambda a, b, out: -1.0 / (a * b * np.log(b) * np.log(b)),
    d2fdy2=lambda a, b, out: np.log(a) * (2.0 + np.log(b)) / (b * b * np.log(b) ** 3),
)

# -------------------------------- roots -------------------------------- #
SQRT = UnaryPrimitive(
    "sqrt",
    f=np.sqrt,
    df=lambda a, out: 0.5 / out,
    d2f=lambda a, out: -0.25 / (a * out),
)

CBRT = UnaryPrimitive(
    "cbrt",
    f=_cbrt,
    df=lambda a, out: 1.0 / (3.0 * out * out),
    d2f=lambda a, out: -2.0 / (9.0 * out * out * a),
)

# n-th root x^(1/n) ; operands are (x, n)
ROOT = BinaryPrimitive(
    "root",
    f=lambda a, b: np.power(a, 1.0 / b),
    dfdx=lambda a, b, out: out / (b * a),
    dfdy=lambda a, b, out: -np.log(a) * out / (b * b),
    d2fdx2=lambda a, b, out: (1.0 / (b * b) - 1.0 / b) * out / (a * a),
    d2fdxdy=lambda a, b, out: -out * (np.log(a) / b + 1.0) / (a * b * b),
    d2fdy2=lambda a, b, out: np.log(a) * out * (2.0 / b + np.log(a) / (b * b)) / (b * b),
)


def exp(x):
    return _active().exp(x)


def exp2(x):
    return _active().exp2(x)


def exp10(x):
    return _active().exp10(x)


def ln(x):
    return _active().ln(x)


def log(x, base):
    return _active().log(x, base)


def log2(x):
    return _active().log2(x)


def log10(x):
    return _active().log10(x)


def sqrt(x):
    return _active().sqrt(x)


def cbrt(x):
    return _active().cbrt(x)


def root(x, n):
    return _active().root(x, n)
