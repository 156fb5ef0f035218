"""Rich rendering of expression graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.tree import Tree

from ._node import OpKind

if TYPE_CHECKING:
    from rich.console import Console

    from ._graph import Handle

_KIND_STYLES = {
    OpKind.INPUT: "green",
    OpKind.ADD: "cyan",
    OpKind.MUL: "cyan",
    OpKind.POW: "magenta",
    OpKind.SIN: "yellow",
}


def _format_value(handle: Handle) -> str:
    value = handle.cached
    if value is None:
        return "[dim]?[/dim]"
    return f"{float(value):.6g}"


def _label(handle: Handle) -> str:
    style = _KIND_STYLES[handle.kind]
    if handle.kind == OpKind.INPUT:
        title = f"[{style}]{escape(handle.name or '')}[/{style}]"
    else:
        title = f"[{style}]{handle.kind.upper()}[/{style}]"
    return f"{title} [dim]#{handle.index}[/dim] = {_format_value(handle)}"


def build_tree(root: Handle) -> Tree:
    """Build a Rich tree of the expression rooted at ``root``.

    Nodes reached through more than one parent are expanded once; later
    occurrences are shown as a reference to the node's index.

    Args:
        root: Handle of the expression to display.

    Returns:
        A Rich Tree showing each node's operation and cached value.

    """
    tree = Tree(_label(root))
    expanded = {root.index}
    stack: list[tuple[Tree, Handle]] = [(tree, root)]

    while stack:
        parent_tree, handle = stack.pop()
        children: list[tuple[Tree, Handle]] = []
        for operand in handle.operands:
            if operand.index in expanded:
                parent_tree.add(f"[dim]↺ #{operand.index}[/dim]")
                continue
            expanded.add(operand.index)
            children.append((parent_tree.add(_label(operand)), operand))
        # Operands are added left to right; process them in the same order
        stack.extend(reversed(children))

    return tree


def render_tree(root: Handle, console: Console) -> None:
    """Print the expression tree of ``root`` to ``console``."""
    console.print(build_tree(root))
