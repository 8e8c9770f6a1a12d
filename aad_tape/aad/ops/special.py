# aad/ops/special.py
import numpy as np
from scipy.special import erf as scipy_erf

from ..core.constants import SQRT_TWO_PI, TWO_OVER_SQRT_PI
from .primitive import UnaryPrimitive, _active


def norm_pdf(x):
    return np.exp(-0.5 * x * x) / SQRT_TWO_PI


def _norm_cdf(x):
    return 0.5 * (1.0 + scipy_erf(x / np.sqrt(2.0)))


# d/dx erf(x) = (2/√π) e^(-x²)
ERF = UnaryPrimitive(
    "erf",
    f=scipy_erf,
    df=lambda a, out: TWO_OVER_SQRT_PI * np.exp(-a * a),
    d2f=lambda a, out: -2.0 * a * TWO_OVER_SQRT_PI * np.exp(-a * a),
)

# Standard normal CDF Φ(x); Φ' = φ, Φ'' = -x φ
NORM_CDF = UnaryPrimitive(
    "norm_cdf",
    f=_norm_cdf,
    df=lambda a, out: norm_pdf(a),
    d2f=lambda a, out: -a * norm_pdf(a),
)


def erf(x):
    return _active().erf(x)


def norm_cdf(x):
    return _active().norm_cdf(x)
