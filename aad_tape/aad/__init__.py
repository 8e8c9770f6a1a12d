# aad/__init__.py
# Tape-based automatic adjoint differentiation

from .core.var import Variable
from .core.tape import GradientTape, HessianTape, use_tape, active_tape
from .core.config import TapeConfig, DEFAULT_CONFIG
from .core.errors import (
    AutoDiffError,
    NoRootNodesError,
    NodeIndexError,
    NoActiveTapeError,
    OperationCancelledError,
)
from .core.engine import reverse

# Functional primitives (ops.sin(x), ops.exp(x), ...)
from . import ops

__all__ = [
    # Core
    'Variable',
    'GradientTape',
    'HessianTape',
    'use_tape',
    'active_tape',
    'TapeConfig',
    'DEFAULT_CONFIG',
    # Errors
    'AutoDiffError',
    'NoRootNodesError',
    'NodeIndexError',
    'NoActiveTapeError',
    'OperationCancelledError',
    # Engine
    'reverse',
    'ops',
]
