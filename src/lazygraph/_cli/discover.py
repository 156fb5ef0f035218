"""Utilities to discover graph expressions in user scripts and modules.

This module was adapted from `fastapi_cli.discover` of package `fastapi-cli` version 0.0.8 (77e6d1f).
"""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lazygraph._graph import Handle

if TYPE_CHECKING:
    from pathlib import Path

    from .config import GraphSource

logger = logging.getLogger(__name__)


@dataclass
class ModuleData:
    """Module data for a Python module."""

    module_import_str: str
    extra_sys_path: Path
    module_paths: list[Path]


def get_module_data_from_path(path: Path) -> ModuleData:
    """Get module data from a file path.

    Args:
        path: Path to a Python file or package

    Returns:
        ModuleData containing module import information

    """
    use_path = path.resolve()
    module_path = use_path
    if use_path.is_file() and use_path.stem == "__init__":
        module_path = use_path.parent
    module_paths = [module_path]
    extra_sys_path = module_path.parent
    for parent in module_path.parents:
        init_path = parent / "__init__.py"
        if init_path.is_file():
            module_paths.insert(0, parent)
            extra_sys_path = parent.parent
        else:
            break

    module_str = ".".join(p.stem for p in module_paths)
    return ModuleData(
        module_import_str=module_str,
        extra_sys_path=extra_sys_path.resolve(),
        module_paths=module_paths,
    )


def load_root_from_script(script_path: Path, root_name: str | None = None) -> Handle:
    """Load the root expression from a Python script path.

    Args:
        script_path: Path to the Python script building the graph
        root_name: Name of the root variable. If None, the single module
            attribute holding a Handle without dependents is used

    Returns:
        The Handle of the root expression

    Raises:
        ImportError: If the module cannot be imported
        ValueError: If no handle is found or the named variable doesn't exist
        TypeError: If the named variable is not a Handle

    """
    module_data = get_module_data_from_path(script_path)
    sys.path.insert(0, str(module_data.extra_sys_path))

    try:
        module = importlib.import_module(module_data.module_import_str)
    except (ImportError, ValueError):
        logger.exception("Import error")
        logger.warning("Ensure all the package directories have an __init__.py file")
        raise

    if root_name:
        if not hasattr(module, root_name):
            msg = f"Could not find '{root_name}' in {module_data.module_import_str}"
            raise ValueError(msg)
        root = getattr(module, root_name)
        if not isinstance(root, Handle):
            msg = f"'{root_name}' in {module_data.module_import_str} is not a Handle"
            raise TypeError(msg)
        return root

    # Infer the root: the only module-level handle that nothing depends on
    candidates = {
        name: obj for name, obj in vars(module).items() if isinstance(obj, Handle) and not obj.dependents
    }
    if len(candidates) == 1:
        name, root = candidates.popitem()
        logger.debug(f"Found root expression: {name}")
        return root

    if not candidates:
        msg = "Could not find a graph Handle in module, try using --root"
    else:
        msg = f"Found several candidate roots ({', '.join(sorted(candidates))}), try using --root"
    raise ValueError(msg)


def load_root_from_module_path(module_path: str) -> Handle:
    """Load the root expression from a module path (e.g., 'examples.reference:expr').

    Raises:
        ValueError: If module path format is invalid
        TypeError: If the specified variable is not a Handle

    """
    if ":" not in module_path:
        msg = "Module path must be in format 'module.path:variable_name'"
        raise ValueError(msg)

    module_name, root_name = module_path.split(":", 1)
    module = importlib.import_module(module_name)
    root = getattr(module, root_name)

    if not isinstance(root, Handle):
        msg = f"'{root_name}' in module '{module_name}' is not a Handle"
        raise TypeError(msg)

    return root


def load_root_from_source(source: GraphSource) -> Handle:
    """Load the root expression from a GraphSource (script or module)."""
    from .config import ModuleSource, ScriptSource  # noqa: PLC0415

    match source:
        case ScriptSource(script=script, root=root):
            return load_root_from_script(script, root)
        case ModuleSource(module_path=module_path):
            return load_root_from_module_path(module_path)
