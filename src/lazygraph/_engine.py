"""Evaluation and invalidation of graph nodes.

Both walks use an explicit stack, so expression chains deeper than Python's
recursion limit are handled.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from ._errors import NotAnInputError, UnsetInputError
from ._node import Add, Input, Mul, Pow, Sin

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._node import Node, Operation

logger = logging.getLogger(__name__)


def _apply(operation: Operation, args: list[np.float32]) -> np.float32:
    """Compute one operator from its already evaluated operands."""
    match operation:
        case Add():
            return np.float32(args[0] + args[1])
        case Mul():
            return np.float32(args[0] * args[1])
        case Pow():
            return np.float32(np.power(args[0], args[1]))
        case Sin():
            return np.float32(np.sin(args[0]))
        case _:
            msg = f"Cannot apply operation {operation!r}"
            raise TypeError(msg)


def evaluate(nodes: Sequence[Node], root: int) -> np.float32:
    """Return the value of ``nodes[root]``, reusing and filling node caches.

    Values computed during the walk are written back to the node caches only
    once the whole evaluation succeeds. If an unset input is reached, no cache
    is modified.

    Args:
        nodes: The arena of nodes, addressed by index.
        root: Index of the node to evaluate.

    Returns:
        The node's value as a single-precision float.

    Raises:
        UnsetInputError: If an input reached by the walk has no value.

    """
    cached = nodes[root].cache
    if cached is not None:
        return cached

    results: dict[int, np.float32] = {}
    stack = [root]

    # NaN and Inf are ordinary values here, not warnings
    with np.errstate(all="ignore"):
        while stack:
            index = stack[-1]
            if index in results:
                stack.pop()
                continue

            node = nodes[index]
            if node.cache is not None:
                results[index] = node.cache
                stack.pop()
                continue

            operation = node.operation
            if isinstance(operation, Input):
                raise UnsetInputError(operation.name)

            pending = [i for i in operation.operands if i not in results]
            if pending:
                stack.extend(pending)
                continue

            results[index] = _apply(operation, [results[i] for i in operation.operands])
            stack.pop()

    computed = 0
    for index, value in results.items():
        node = nodes[index]
        if node.cache is None:
            node.cache = value
            computed += 1

    logger.debug("Evaluated node %d, computed %d node(s)", root, computed)
    return results[root]


def invalidate(nodes: Sequence[Node], start: int) -> int:
    """Clear the cache of ``nodes[start]`` and of everything depending on it.

    Each node is visited at most once, however many dependent paths lead
    to it.

    Returns:
        The number of nodes visited.

    """
    visited: set[int] = set()
    stack = [start]
    while stack:
        index = stack.pop()
        if index in visited:
            continue
        visited.add(index)
        node = nodes[index]
        node.cache = None
        stack.extend(node.dependents)

    logger.debug("Invalidated %d node(s) from node %d", len(visited), start)
    return len(visited)


def to_float32(value: object) -> np.float32:
    """Convert a real number to ``numpy.float32``.

    Raises:
        TypeError: If the value is not an int or float (bool is rejected).

    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, float, np.integer, np.floating)):
        msg = f"Expected a real number, got {type(value).__name__}"
        raise TypeError(msg)
    return np.float32(value)


def assign_input(nodes: Sequence[Node], index: int, value: object) -> None:
    """Assign a new value to an input node.

    The input and every node depending on it (transitively) lose their cached
    values before the new value is stored.

    Raises:
        NotAnInputError: If ``nodes[index]`` is not an input node.
        TypeError: If ``value`` is not a real number.

    """
    node = nodes[index]
    operation = node.operation
    if not isinstance(operation, Input):
        raise NotAnInputError(operation.kind)

    new_value = to_float32(value)
    invalidate(nodes, index)
    node.cache = new_value
    logger.debug("Set input '%s' = %r", operation.name, new_value)
