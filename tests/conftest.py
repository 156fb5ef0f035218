"""Shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

REFERENCE_SCRIPT = """\
import lazygraph as lg

graph = lg.Graph()
x1 = graph.create_input("x1")
x2 = graph.create_input("x2")
x3 = graph.create_input("x3")
x4 = graph.create_input("x4")
expr = lg.add(x1, lg.mul(x2, lg.sin(lg.add(x2, lg.pow(x3, x4)))))
"""


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str], Path]:
    """Write a graph script under a module name unique to the test.

    Imported scripts stay in ``sys.modules``, so each test gets its own name.
    """

    def _write(source: str = REFERENCE_SCRIPT) -> Path:
        path = tmp_path / f"graph_{tmp_path.name}.py"
        path.write_text(source)
        return path

    return _write


@pytest.fixture
def reference_inputs(tmp_path: Path) -> Path:
    path = tmp_path / "inputs.toml"
    path.write_text("[inputs]\nx1 = 1.0\nx2 = 2.0\nx3 = 3.0\nx4 = 3.0\n")
    return path
