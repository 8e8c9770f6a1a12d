# aad/core/node.py
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Node:
    """
    One node on the tape produced by a primitive operation.

    Attributes
    ----------
    weight0 : scalar
        ∂out/∂parent0.
    weight1 : scalar
        ∂out/∂parent1 (zero for unary nodes).
    parent0 : int
        Index of the first operand's node.
    parent1 : int
        Index of the second operand's node. Unary nodes point at themselves.

    Root nodes (created by `create_variable`) point both parents at their own
    index with zero weights: nothing propagates past them.
    """
    weight0: Any
    weight1: Any
    parent0: int
    parent1: int

    def is_root(self, index: int) -> bool:
        return self.parent0 == index and self.parent1 == index

    def is_unary(self, index: int) -> bool:
        return self.parent1 == index and self.parent0 != index


@dataclass(frozen=True)
class HessianNode(Node):
    """Node plus the local second partials used by edge-pushing."""
    curvature00: Any = 0.0    # ∂²out/∂parent0²
    curvature01: Any = 0.0    # ∂²out/∂parent0∂parent1
    curvature11: Any = 0.0    # ∂²out/∂parent1²
