"""Lazily evaluated, memoized scalar computation graphs."""

__all__ = [
    "Graph",
    "GraphError",
    "GraphMismatchError",
    "Handle",
    "InputFileError",
    "NotAnInputError",
    "OpKind",
    "UnsetInputError",
    "add",
    "build_tree",
    "compute",
    "create_input",
    "default_graph",
    "export_to_toml",
    "load_input_values",
    "mul",
    "pow",
    "pow_f32",
    "render_tree",
    "set",
    "sin",
    "use_graph",
]

from ._errors import GraphError, GraphMismatchError, InputFileError, NotAnInputError, UnsetInputError
from ._graph import (
    Graph,
    Handle,
    add,
    compute,
    create_input,
    default_graph,
    mul,
    pow,  # noqa: A004
    pow_f32,
    set,  # noqa: A004
    sin,
    use_graph,
)
from ._io import export_to_toml, load_input_values
from ._node import OpKind
from ._render import build_tree, render_tree
