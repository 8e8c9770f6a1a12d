# aad/core/config.py
"""
Tape configuration.

Shared defaults for every tape. Pass a `TapeConfig` to a tape constructor to
override them for that tape only.
"""

from dataclasses import dataclass, replace
from typing import Any

import numpy as np


@dataclass(frozen=True)
class TapeConfig:
    """
    Attributes
    ----------
    dtype : numpy dtype
        Scalar type of values and weights (float64 or complex128).
    initial_capacity : int
        Number of node slots allocated up front by the arena.
    growth_factor : float
        Capacity multiplier applied when the arena is full.
    log_limit : int
        Default maximum number of nodes emitted by `log_nodes`.
    prune_tolerance : float
        Entries of the edge-pushing workspace whose magnitude falls to or
        below this value after an update are dropped (0.0 = exact cancellation only).
    dense_hessian_warn_nodes : int
        Emit a warning when a Hessian sweep runs over more nodes than this.
    """
    dtype: Any = np.float64
    initial_capacity: int = 64
    growth_factor: float = 2.0
    log_limit: int = 100
    prune_tolerance: float = 0.0
    dense_hessian_warn_nodes: int = 1_000_000

    def __post_init__(self):
        if self.initial_capacity < 1:
            raise ValueError("initial_capacity must be at least 1")
        if self.growth_factor <= 1.0:
            raise ValueError("growth_factor must be greater than 1")
        if self.log_limit < 0:
            raise ValueError("log_limit must be non-negative")
        dt = np.dtype(self.dtype)
        if dt.kind not in ("f", "c"):
            raise TypeError(f"dtype must be a real or complex floating type, got {dt}")

    def with_overrides(self, **changes) -> "TapeConfig":
        """Return a copy with the given fields replaced; `None` values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes) if changes else self


DEFAULT_CONFIG = TapeConfig()
