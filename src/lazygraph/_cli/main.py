import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from lazygraph._errors import GraphError
from lazygraph._graph import Handle
from lazygraph._io import apply_input_values, export_to_toml, load_input_values
from lazygraph._render import render_tree

from .config import ConfigError, LazygraphConfig, get_config
from .discover import load_root_from_module_path, load_root_from_script, load_root_from_source

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Lazygraph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> LazygraphConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_root(path: str | None, root_var: str | None, config: LazygraphConfig) -> Handle:
    """Load the root expression from the command line argument or the config."""
    if path is None:
        if config.graph is None:
            err_console.print(
                "[red]✗ No graph given. Pass a script or module path, "
                "or set \\[tool.lazygraph].graph in pyproject.toml[/red]",
            )
            raise typer.Exit(code=1)
        err_console.print("[cyan]Loading graph from pyproject.toml configuration[/cyan]")
        return load_root_from_source(config.graph)

    if ":" in path:
        err_console.print(f"[cyan]Loading graph from module:[/cyan] {path}")
        return load_root_from_module_path(path)

    script_path = Path(path)
    err_console.print(f"[cyan]Loading graph from script:[/cyan] {script_path}")
    return load_root_from_script(script_path, root_var)


def _assign_inputs(root: Handle, input_path: Path | None) -> None:
    if input_path is None:
        return
    err_console.print(f"[cyan]Loading input from:[/cyan] {input_path}")
    values = load_input_values(input_path)
    apply_input_values(root, values)


@app.command()
def calc(
    path: Annotated[
        str | None,
        typer.Argument(help="Path to Python script or module path (e.g., examples.reference:expr)"),
    ] = None,
    *,
    input: Annotated[  # noqa: A002
        Path | None,
        typer.Option("-i", "--input", help="Path to input TOML file"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    root_var: Annotated[
        str | None,
        typer.Option("--root", help="Name of the root expression variable (for script paths only)"),
    ] = None,
) -> None:
    """Assign inputs, evaluate the root expression and print the result."""
    config = _load_config()
    root = _load_root(path, root_var, config)
    input_path = input if input is not None else config.input
    output_path = output if output is not None else config.output

    try:
        _assign_inputs(root, input_path)
        result = root.compute()
    except GraphError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    out_console.print(f"{float(result):.7g}")

    if output_path is not None:
        err_console.print(f"[cyan]Exporting results to:[/cyan] {output_path}")
        export_to_toml(root, output_path)

    err_console.print("[green]✓ Calculation complete[/green]")


@app.command()
def tree(
    path: Annotated[
        str | None,
        typer.Argument(help="Path to Python script or module path (e.g., examples.reference:expr)"),
    ] = None,
    *,
    input: Annotated[  # noqa: A002
        Path | None,
        typer.Option("-i", "--input", help="Path to input TOML file"),
    ] = None,
    root_var: Annotated[
        str | None,
        typer.Option("--root", help="Name of the root expression variable (for script paths only)"),
    ] = None,
) -> None:
    """Show the expression as a tree with its cached values."""
    config = _load_config()
    root = _load_root(path, root_var, config)
    input_path = input if input is not None else config.input

    try:
        _assign_inputs(root, input_path)
    except GraphError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    try:
        root.compute()
    except GraphError as e:
        # Still show the tree; unset values are displayed as '?'
        logger.info(str(e))

    render_tree(root, out_console)


def main() -> None:
    app()
