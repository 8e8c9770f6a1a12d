# aad/core/var.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Variable:
    """
    Handle returned by every recording operation on a tape.

    Attributes
    ----------
    index : int
        Index of the node that produced this value. For values computed while
        the tape was not tracking, the index is only a placeholder and must not
        be used to start an accumulation.
    value : scalar
        Forward (primal) value.

    A Variable is only meaningful for the tape that created it. The arithmetic
    operators below record on the *active* tape (see `use_tape`).
    """
    index: int
    value: Any

    def __repr__(self):
        return f"Variable(index={self.index}, value={self.value!r})"

    def __str__(self):
        return str(self.value)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        return _active().add(self, other)

    def __radd__(self, other):
        return _active().add(other, self)

    def __sub__(self, other):
        return _active().subtract(self, other)

    def __rsub__(self, other):
        return _active().subtract(other, self)

    def __mul__(self, other):
        return _active().multiply(self, other)

    def __rmul__(self, other):
        return _active().multiply(other, self)

    def __truediv__(self, other):
        return _active().divide(self, other)

    def __rtruediv__(self, other):
        return _active().divide(other, self)

    def __mod__(self, other):
        return _active().modulo(self, other)

    def __rmod__(self, other):
        return _active().modulo(other, self)

    def __pow__(self, other):
        return _active().pow(self, other)

    def __rpow__(self, other):
        return _active().pow(other, self)

    def __neg__(self):
        return _active().negate(self)

    def __pos__(self):
        return self


def _active():
    from . import tape as tape_mod  # local import to avoid cycles
    return tape_mod.active_tape()
