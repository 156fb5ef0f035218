"""Graph arena, handles and the construction API."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._engine import assign_input, evaluate
from ._errors import GraphMismatchError
from ._node import Add, Input, Mul, Node, OpKind, Pow, Sin

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy as np

    from ._node import Operation

logger = logging.getLogger(__name__)


class Graph:
    """Arena owning every node of one computation graph.

    Nodes are appended and never removed. An operator node can only refer to
    nodes that already exist, so the operand edges cannot form a cycle.
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"<Graph with {len(self._nodes)} nodes>"

    def _append(self, operation: Operation) -> Handle:
        index = len(self._nodes)
        self._nodes.append(Node(operation))
        for operand in operation.operands:
            self._nodes[operand].dependents.append(index)
        logger.debug("Created %s node %d", operation.kind, index)
        return Handle(self, index)

    def _index_of(self, handle: object) -> int:
        if not isinstance(handle, Handle):
            msg = f"Expected a Handle, got {type(handle).__name__}"
            raise TypeError(msg)
        if handle.graph is not self:
            msg = f"{handle!r} belongs to a different graph"
            raise GraphMismatchError(msg)
        return handle.index

    def create_input(self, name: str) -> Handle:
        """Create an input node whose value is assigned with ``set``."""
        return self._append(Input(name))

    def add(self, a: Handle, b: Handle) -> Handle:
        """Create a node computing ``a + b``."""
        return self._append(Add(self._index_of(a), self._index_of(b)))

    def mul(self, a: Handle, b: Handle) -> Handle:
        """Create a node computing ``a * b``."""
        return self._append(Mul(self._index_of(a), self._index_of(b)))

    def pow(self, base: Handle, exponent: Handle) -> Handle:
        """Create a node computing ``base ** exponent``."""
        return self._append(Pow(self._index_of(base), self._index_of(exponent)))

    pow_f32 = pow

    def sin(self, a: Handle) -> Handle:
        """Create a node computing the sine of ``a`` (radians)."""
        return self._append(Sin(self._index_of(a)))

    def handles(self) -> tuple[Handle, ...]:
        """All nodes of the graph, in construction order."""
        return tuple(Handle(self, i) for i in range(len(self._nodes)))

    def inputs(self) -> tuple[Handle, ...]:
        """All input nodes of the graph, in construction order."""
        return tuple(
            Handle(self, i) for i, node in enumerate(self._nodes) if isinstance(node.operation, Input)
        )

    def find_inputs(self, name: str) -> tuple[Handle, ...]:
        """Input nodes carrying the given name.

        Input names are labels, not keys: several inputs may share one.
        """
        return tuple(h for h in self.inputs() if h.name == name)


@dataclass(frozen=True, slots=True)
class Handle:
    """Reference to one node of a graph.

    Handles are cheap to copy and compare equal when they refer to the same
    node of the same graph.
    """

    graph: Graph
    index: int

    @property
    def _node(self) -> Node:
        return self.graph._nodes[self.index]  # noqa: SLF001

    @property
    def kind(self) -> OpKind:
        return self._node.operation.kind

    @property
    def name(self) -> str | None:
        """Input name, or ``None`` for operator nodes."""
        operation = self._node.operation
        return operation.name if isinstance(operation, Input) else None

    @property
    def operands(self) -> tuple[Handle, ...]:
        return tuple(Handle(self.graph, i) for i in self._node.operation.operands)

    @property
    def dependents(self) -> tuple[Handle, ...]:
        return tuple(Handle(self.graph, i) for i in self._node.dependents)

    @property
    def cached(self) -> np.float32 | None:
        """The cached value, or ``None`` if not computed since the last change."""
        return self._node.cache

    @property
    def is_cached(self) -> bool:
        return self._node.cache is not None

    def compute(self) -> np.float32:
        """Evaluate the node, reusing every cached value below it.

        Raises:
            UnsetInputError: If an input this node depends on has no value.

        """
        return evaluate(self.graph._nodes, self.index)  # noqa: SLF001

    def set(self, value: float) -> None:
        """Assign a value to this input node and invalidate its dependents.

        Raises:
            NotAnInputError: If this is not an input node.
            TypeError: If ``value`` is not a real number.

        """
        assign_input(self.graph._nodes, self.index, value)  # noqa: SLF001

    def __add__(self, other: object) -> Handle:
        if not isinstance(other, Handle):
            return NotImplemented
        return self.graph.add(self, other)

    def __mul__(self, other: object) -> Handle:
        if not isinstance(other, Handle):
            return NotImplemented
        return self.graph.mul(self, other)

    def __pow__(self, other: object) -> Handle:
        if not isinstance(other, Handle):
            return NotImplemented
        return self.graph.pow(self, other)

    def __repr__(self) -> str:
        name = self.name
        if name is not None:
            return f"Handle({self.kind}, #{self.index}, name={name!r})"
        return f"Handle({self.kind}, #{self.index})"


_default_graph = Graph()


def default_graph() -> Graph:
    """Return the graph used by ``create_input`` when none is given."""
    return _default_graph


@contextmanager
def use_graph(graph: Graph | None = None) -> Iterator[Graph]:
    """Temporarily replace the default graph.

    Example:
        with use_graph() as graph:
            x = create_input("x")
            y = sin(x)

    """
    global _default_graph  # noqa: PLW0603
    previous = _default_graph
    _default_graph = graph if graph is not None else Graph()
    try:
        yield _default_graph
    finally:
        _default_graph = previous


def _require_handle(handle: object) -> Handle:
    if not isinstance(handle, Handle):
        msg = f"Expected a Handle, got {type(handle).__name__}"
        raise TypeError(msg)
    return handle


def _graph_of(handle: object) -> Graph:
    return _require_handle(handle).graph


def create_input(name: str, *, graph: Graph | None = None) -> Handle:
    """Create an input node on ``graph`` (the default graph when omitted)."""
    return (graph if graph is not None else _default_graph).create_input(name)


def add(a: Handle, b: Handle) -> Handle:
    return _graph_of(a).add(a, b)


def mul(a: Handle, b: Handle) -> Handle:
    return _graph_of(a).mul(a, b)


def pow(base: Handle, exponent: Handle) -> Handle:  # noqa: A001
    return _graph_of(base).pow(base, exponent)


pow_f32 = pow


def sin(a: Handle) -> Handle:
    return _graph_of(a).sin(a)


def compute(handle: Handle) -> np.float32:
    """Evaluate ``handle``; see ``Handle.compute``."""
    return _require_handle(handle).compute()


def set(handle: Handle, value: float) -> None:  # noqa: A001
    """Assign ``value`` to the input ``handle``; see ``Handle.set``."""
    _require_handle(handle).set(value)
