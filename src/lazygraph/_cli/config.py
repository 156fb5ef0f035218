"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import cast


class ConfigError(Exception):
    """Error in lazygraph configuration."""


@dataclass(slots=True, frozen=True)
class ScriptSource:
    """Script path with optional root variable name."""

    script: Path
    root: str | None = None


@dataclass(slots=True, frozen=True)
class ModuleSource:
    """Module path with variable name (e.g., 'examples.reference:expr')."""

    module_path: str


GraphSource = ScriptSource | ModuleSource


@dataclass(slots=True, frozen=True)
class LazygraphConfig:
    """Configuration loaded from the [tool.lazygraph] table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    graph: GraphSource | None = None
    input: Path | None = None
    output: Path | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_graph_source(value: object, project_root: Path) -> GraphSource:
    """Parse the graph field from config.

    Raises:
        ConfigError: If the value format is invalid

    """
    if isinstance(value, str):
        if ":" not in value:
            msg = f"Invalid module path '{value}'. Expected format: 'module.path:variable_name'"
            raise ConfigError(msg)
        return ModuleSource(module_path=value)

    if isinstance(value, dict):
        # { script = "path.py", root = "expr" }
        value_dict = cast("dict[str, object]", value)
        script_value = value_dict.get("script")
        if script_value is None:
            msg = "Invalid [tool.lazygraph].graph configuration. Expected string or table with 'script' key."
            raise ConfigError(msg)
        if not isinstance(script_value, str):
            msg = "Invalid [tool.lazygraph].graph.script: expected string path"
            raise ConfigError(msg)
        script_path = Path(script_value)
        if not script_path.is_absolute():
            script_path = project_root / script_path

        root = value_dict.get("root")
        if root is not None and not isinstance(root, str):
            msg = "Invalid [tool.lazygraph].graph.root: expected string"
            raise ConfigError(msg)

        return ScriptSource(script=script_path, root=root)

    msg = "Invalid [tool.lazygraph].graph configuration. Expected string or table with 'script' key."
    raise ConfigError(msg)


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.lazygraph].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> LazygraphConfig:
    """Load and validate [tool.lazygraph] config from pyproject.toml.

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("lazygraph", {})
    if not section:
        return LazygraphConfig(project_root=project_root)

    graph_source: GraphSource | None = None
    if "graph" in section:
        graph_source = _parse_graph_source(section["graph"], project_root)

    return LazygraphConfig(
        graph=graph_source,
        input=_parse_path(section, "input", project_root),
        output=_parse_path(section, "output", project_root),
        project_root=project_root,
    )


def get_config() -> LazygraphConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        LazygraphConfig (may be empty if no pyproject.toml or no [tool.lazygraph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return LazygraphConfig()
    return load_config(pyproject_path)
