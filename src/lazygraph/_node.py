"""Node records stored in a graph arena."""

from dataclasses import dataclass, field
from enum import StrEnum, auto

import numpy as np


class OpKind(StrEnum):
    """The operation a node performs."""

    INPUT = auto()  # Leaf whose value is assigned by the caller
    ADD = auto()
    MUL = auto()
    POW = auto()
    SIN = auto()


@dataclass(frozen=True, slots=True)
class Input:
    """Leaf node whose value is supplied externally."""

    name: str

    kind = OpKind.INPUT

    @property
    def operands(self) -> tuple[int, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class Add:
    lhs: int
    rhs: int

    kind = OpKind.ADD

    @property
    def operands(self) -> tuple[int, ...]:
        return (self.lhs, self.rhs)


@dataclass(frozen=True, slots=True)
class Mul:
    lhs: int
    rhs: int

    kind = OpKind.MUL

    @property
    def operands(self) -> tuple[int, ...]:
        return (self.lhs, self.rhs)


@dataclass(frozen=True, slots=True)
class Pow:
    base: int
    exponent: int

    kind = OpKind.POW

    @property
    def operands(self) -> tuple[int, ...]:
        return (self.base, self.exponent)


@dataclass(frozen=True, slots=True)
class Sin:
    operand: int

    kind = OpKind.SIN

    @property
    def operands(self) -> tuple[int, ...]:
        return (self.operand,)


Operation = Input | Add | Mul | Pow | Sin


@dataclass(slots=True)
class Node:
    """One vertex of the computation graph.

    Operands and dependents are indices into the owning graph's node list,
    so nodes never hold references to each other.

    Attributes:
        operation: What the node computes, with operand indices.
        dependents: Indices of nodes that use this node as an operand, in the
            order they were constructed. A node that uses this one twice
            (e.g. ``mul(x, x)``) appears twice.
        cache: Last computed (or, for inputs, assigned) value. ``None`` when
            the value is not known.

    """

    operation: Operation
    dependents: list[int] = field(default_factory=list)
    cache: np.float32 | None = None
