"""Tests for the configuration module."""

from pathlib import Path

import pytest

from lazygraph._cli.config import (
    ConfigError,
    LazygraphConfig,
    ModuleSource,
    ScriptSource,
    find_pyproject_toml,
    get_config,
    load_config,
)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")
        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        assert find_pyproject_toml(tmp_path) is None


class TestLoadConfigGraph:
    """Tests for the graph source setting."""

    def test_no_section_gives_empty_config(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        assert load_config(pyproject) == LazygraphConfig(project_root=tmp_path)

    def test_module_path_string(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.lazygraph]\ngraph = "examples.reference:expr"\n')

        config = load_config(pyproject)

        assert config.graph == ModuleSource(module_path="examples.reference:expr")
        assert config.project_root == tmp_path

    def test_module_path_without_colon_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.lazygraph]\ngraph = "examples.reference"\n')

        with pytest.raises(ConfigError, match="Invalid module path"):
            load_config(pyproject)

    def test_script_path_inline_table(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.lazygraph]\ngraph = { script = "examples/reference.py" }\n')

        config = load_config(pyproject)

        assert config.graph == ScriptSource(script=tmp_path / "examples/reference.py")

    def test_script_path_with_root(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.lazygraph]\ngraph = { script = "reference.py", root = "expr" }\n')

        config = load_config(pyproject)

        assert isinstance(config.graph, ScriptSource)
        assert config.graph.root == "expr"

    def test_missing_script_key_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.lazygraph]\ngraph = { root = "expr" }\n')

        with pytest.raises(ConfigError, match="'script' key"):
            load_config(pyproject)

    def test_non_string_root_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.lazygraph]\ngraph = { script = "reference.py", root = 1 }\n')

        with pytest.raises(ConfigError, match="graph.root"):
            load_config(pyproject)

    def test_wrong_type_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.lazygraph]\ngraph = 3\n")

        with pytest.raises(ConfigError, match="Expected string or table"):
            load_config(pyproject)


class TestLoadConfigInputOutput:
    """Tests for the input and output settings."""

    def test_relative_paths_resolved_from_project_root(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.lazygraph]\ninput = "data/in.toml"\noutput = "data/out.toml"\n')

        config = load_config(pyproject)

        assert config.input == tmp_path / "data/in.toml"
        assert config.output == tmp_path / "data/out.toml"

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        absolute = tmp_path / "elsewhere" / "in.toml"
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.lazygraph]\ninput = '{absolute.as_posix()}'\n")

        assert load_config(pyproject).input == absolute

    def test_non_string_input_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.lazygraph]\ninput = 1\n")

        with pytest.raises(ConfigError, match="input: expected string path"):
            load_config(pyproject)

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.lazygraph\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)


class TestGetConfig:
    def test_reads_from_current_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.lazygraph]\ninput = "in.toml"\n')
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.input == tmp_path.resolve() / "in.toml"
