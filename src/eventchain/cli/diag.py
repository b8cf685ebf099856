"""Diagram command -- convert a table artifact into a Mermaid flowchart."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import fail, resolve_config, write_artifact
from ..exceptions import EventChainError
from ..logging_config import get_logger
from ..markov import read_table, render_diagram

logger = get_logger(__name__)


@app.command()
def diag(
    ctx: typer.Context,
    input_path: Path = typer.Option(
        ...,
        "--in",
        "-i",
        help="Transition table to convert (as written by 'eventchain matrix')",
    ),
    min_weight: Optional[int] = typer.Option(
        None,
        "--min",
        "-m",
        help="Keep only transitions with a count strictly greater than this",
        min=0,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the diagram here instead of stdout",
    ),
    delimiter: Optional[str] = typer.Option(
        None,
        "--delimiter",
        "-d",
        help="Field delimiter of the table (default ',')",
    ),
):
    """
    Convert a transition table into a Mermaid [bold]graph LR[/bold] diagram.

    [bold cyan]Examples:[/bold cyan]

      eventchain diag --in matrix_3.csv

      eventchain diag --in matrix_3.csv --min 5 --out flow.mmd
    """
    try:
        config = resolve_config(ctx, table_delimiter=delimiter, min_weight=min_weight)
        rows = read_table(input_path, delimiter=config.table_delimiter)
        diagram = render_diagram(rows, threshold=config.min_weight)

        if not diagram:
            logger.warning("Table %s has fewer than two rows or columns; diagram is empty", input_path)

        if output is None:
            typer.echo(diagram, nl=False)
        else:
            write_artifact(output, diagram)

    except EventChainError as e:
        raise fail(e)
