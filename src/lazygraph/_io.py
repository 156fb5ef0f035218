"""Reading input values and exporting computed values as TOML."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

import tomli_w
from pydantic import BaseModel, ConfigDict, ValidationError

from ._engine import to_float32
from ._errors import InputFileError

if TYPE_CHECKING:
    from collections.abc import Mapping

    import numpy as np

    from ._graph import Handle

logger = logging.getLogger(__name__)


class InputValues(BaseModel):
    """Contents of an input values file.

    Example file::

        [inputs]
        x1 = 1.0
        x2 = 2.0

    """

    model_config = ConfigDict(extra="forbid", strict=True)

    inputs: dict[str, float]


def parse_input_values(toml_contents: dict[str, object]) -> dict[str, float]:
    """Validate parsed TOML contents and return the input values by name.

    Raises:
        InputFileError: If the contents do not match the expected layout.

    """
    try:
        model = InputValues.model_validate(toml_contents)
    except ValidationError as e:
        msg = f"Invalid input values: {e}"
        raise InputFileError(msg) from e
    return model.inputs


def load_input_values(input_path: Path | str) -> dict[str, float]:
    """Load input values from a TOML file.

    Raises:
        InputFileError: If the file is not valid TOML or has the wrong layout.

    """
    input_path = Path(input_path)
    with input_path.open("rb") as f:
        try:
            toml_contents = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise InputFileError(msg) from e

    values = parse_input_values(toml_contents)
    logger.debug(f"Loaded {len(values)} input value(s) from {input_path}")
    return values


def apply_input_values(root: Handle, values: Mapping[str, float]) -> None:
    """Assign values to the inputs of ``root``'s graph by name.

    Every input carrying a given name receives the value. All names and
    values are checked before any input is touched, so a failure leaves
    the graph as it was.

    Raises:
        InputFileError: If a name matches no input of the graph.
        TypeError: If a value is not a real number.

    """
    assignments: list[tuple[tuple[Handle, ...], np.float32]] = []
    for name, value in values.items():
        handles = root.graph.find_inputs(name)
        if not handles:
            msg = f"Graph has no input named '{name}'"
            raise InputFileError(msg)
        assignments.append((handles, to_float32(value)))

    for handles, value in assignments:
        for handle in handles:
            handle.set(value)


def results_to_dict(root: Handle) -> dict[str, object]:
    """Collect input values and the root's cached result for export.

    Only values that are currently known are included.
    """
    inputs: dict[str, float] = {}
    for handle in root.graph.inputs():
        if handle.cached is not None and handle.name is not None:
            inputs[handle.name] = float(handle.cached)

    data: dict[str, object] = {"inputs": inputs}
    if root.cached is not None:
        data["result"] = float(root.cached)
    return data


def export_to_toml(root: Handle, output_path: Path | str) -> None:
    """Write the input values and the root's result to a TOML file."""
    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(results_to_dict(root), f)

    logger.debug(f"Exported results to {output_path}")
