"""Exceptions raised by lazygraph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._node import OpKind


class GraphError(Exception):
    """Base class for usage errors on a computation graph."""


class UnsetInputError(GraphError):
    """An input node was read before a value was assigned to it."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Input '{name}' has no value; assign one with set() before compute()")


class NotAnInputError(GraphError):
    """A value was assigned to a node that is not an input."""

    def __init__(self, kind: OpKind) -> None:
        self.kind = kind
        super().__init__(f"Cannot set the value of a '{kind}' node; only input nodes accept values")


class GraphMismatchError(GraphError):
    """Operands of one operator belong to different graphs."""


class InputFileError(GraphError):
    """An input values file could not be read or does not match the graph."""
