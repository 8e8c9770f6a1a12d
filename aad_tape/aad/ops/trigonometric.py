# aad/ops/trigonometric.py
import numpy as np

from .primitive import BinaryPrimitive, UnaryPrimitive, _active

# ---------------------------- trigonometric ---------------------------- #
SIN = UnaryPrimitive(
    "sin",
    f=np.sin,
    df=lambda a, out: np.cos(a),
    d2f=lambda a, out: -out,
)

COS = UnaryPrimitive(
    "cos",
    f=np.cos,
    df=lambda a, out: -np.sin(a),
    d2f=lambda a, out: -out,
)

# d/dx tan = sec², d²/dx² tan = 2 sec² tan
TAN = UnaryPrimitive(
    "tan",
    f=np.tan,
    df=lambda a, out: 1.0 / (np.cos(a) * np.cos(a)),
    d2f=lambda a, out: 2.0 * out / (np.cos(a) * np.cos(a)),
)

ASIN = UnaryPrimitive(
    "asin",
    f=np.arcsin,
    df=lambda a, out: 1.0 / np.sqrt(1.0 - a * a),
    d2f=lambda a, out: a * np.power(1.0 - a * a, -1.5),
)

ACOS = UnaryPrimitive(
    "acos",
    f=np.arccos,
    df=lambda a, out: -1.0 / np.sqrt(1.0 - a * a),
    d2f=lambda a, out: -a * np.power(1.0 - a * a, -1.5),
)

ATAN = UnaryPrimitive(
    "atan",
    f=np.arctan,
    df=lambda a, out: 1.0 / (1.0 + a * a),
    d2f=lambda a, out: -2.0 * a / ((1.0 + a * a) * (1.0 + a * a)),
)

# atan2(y, x) ; operands are (y, x), r² = x² + y²
ATAN2 = BinaryPrimitive(
    "atan2",
    f=np.arctan2,
    dfdx=lambda a, b, out: b / (b * b + a * a),
    dfdy=lambda a, b, out: -a / (b * b + a * a),
    d2fdx2=lambda a, b, out: -2.0 * a * b / (a * a + b * b) ** 2,
    d2fdxdy=lambda a, b, out: (a * a - b * b) / (a * a + b * b) ** 2,
    d2fdy2=lambda a, b, out: 2.0 * a * b / (a * a + b * b) ** 2,
    real_only=True,
)

# ------------------------------ hyperbolic ------------------------------ #
SINH = UnaryPrimitive(
    "sinh",
    f=np.sinh,
    df=lambda a, out: np.cosh(a),
    d2f=lambda a, out: out,
)

COSH = UnaryPrimitive(
    "cosh",
    f=np.cosh,
    df=lambda a, out: np.sinh(a),
    d2f=lambda a, out: out,
)

TANH = UnaryPrimitive(
    "tanh",
    f=np.tanh,
    df=lambda a, out: 1.0 / (np.cosh(a) * np.cosh(a)),
    d2f=lambda a, out: -2.0 * out / (np.cosh(a) * np.cosh(a)),
)

ASINH = UnaryPrimitive(
    "asinh",
    f=np.arcsinh,
    df=lambda a, out: 1.0 / np.sqrt(a * a + 1.0),
    d2f=lambda a, out: -a * np.power(1.0 + a * a, -1.5),
)

ACOSH = UnaryPrimitive(
    "acosh",
    f=np.arccosh,
    df=lambda a, out: 1.0 / (np.sqrt(a - 1.0) * np.sqrt(a + 1.0)),
    d2f=lambda a, out: -a * np.power(a - 1.0, -1.5) * np.power(a + 1.0, -1.5),
)

ATANH = UnaryPrimitive(
    "atanh",
    f=np.arctanh,
    df=lambda a, out: 1.0 / (1.0 - a * a),
    d2f=lambda a, out: 2.0 * a / ((1.0 - a * a) * (1.0 - a * a)),
)


def sin(x):
    return _active().sin(x)


def cos(x):
    return _active().cos(x)


def tan(x):
    return _active().tan(x)


def asin(x):
    return _active().asin(x)


def acos(x):
    return _active().acos(x)


def atan(x):
    return _active().atan(x)


def atan2(y, x):
    return _active().atan2(y, x)


def sinh(x):
    return _active().sinh(x)


def cosh(x):
    return _active().cosh(x)


def tanh(x):
    return _active().tanh(x)


def asinh(x):
    return _active().asinh(x)


def acosh(x):
    return _active().acosh(x)


def atanh(x):
    return _active().atanh(x)
