# aad/core/errors.py
"""
Exceptions raised by the tape and the accumulators.

All of them signal programmer error (empty tape, bad index, operator used
outside `use_tape`), so none is meant to be retried.
"""


class AutoDiffError(Exception):
    """Base class for every error raised by the AAD tape."""


class NoRootNodesError(AutoDiffError):
    """Accumulation was requested on a tape without any created variables."""

    def __init__(self, kind: str = "gradient"):
        super().__init__(f"The {kind} tape contains no root nodes.")


class NodeIndexError(AutoDiffError, IndexError):
    """A partial accumulation was started from a node that is not on the tape."""

    def __init__(self, index: int, lo: int, hi: int):
        self.index = index
        super().__init__(
            f"Node index {index} is out of range; expected {lo} <= index < {hi}."
        )


class NoActiveTapeError(AutoDiffError):
    """A Variable operator or functional op was used outside `use_tape(...)`."""

    def __init__(self):
        super().__init__(
            "No active tape. Wrap the computation in `with use_tape(tape): ...` "
            "or call the recording methods on the tape directly."
        )


class OperationCancelledError(AutoDiffError):
    """A cancellable diagnostic (e.g. `log_nodes`) was cancelled by the caller."""
