# aad/core/constants.py
# Mathematical constants shared by the primitive rules (computed once at import).
import numpy as np

LN2 = np.log(2.0)
LN10 = np.log(10.0)
SQRT_TWO_PI = np.sqrt(2.0 * np.pi)
TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)
