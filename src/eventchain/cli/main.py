"""Global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import console
from ..logging_config import setup_logging


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML config file (merged over ~/.eventchain.toml and ./eventchain.toml)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only show errors (hides skipped-record warnings)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log output to this file",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Build Markov transition matrices from event logs.

    [bold cyan]Examples:[/bold cyan]

      eventchain matrix --in events.csv --out "matrix_{category}.csv"

      eventchain diag --in matrix_3.csv --min 2 --out flow.mmd
    """
    if version:
        from .. import __version__

        console.print(f"[bold cyan]eventchain[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)

    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config
