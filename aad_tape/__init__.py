"""
aad_tape: reverse-mode automatic differentiation on an append-only tape,
with gradients by reverse accumulation and Hessians by edge-pushing.
"""

from .aad import *  # noqa: F401,F403
from .aad import __all__

__version__ = "0.1.0"
