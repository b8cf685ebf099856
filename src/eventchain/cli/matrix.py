"""Matrix command -- build one transition table per category from raw events."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import fail, resolve_config, write_artifact
from ..config import OUTPUT_FORMATS
from ..exceptions import EventChainError, InvalidConfigError
from ..formatters import get_formatter
from ..logging_config import get_logger
from ..markov import Sentinels, build_category_matrices, load_events

logger = get_logger(__name__)

CATEGORY_FIELD = "{category}"


def output_paths(template: str, categories: list[int]) -> dict[int, Path]:
    """Expand an output template into one path per category.

    Raises:
        InvalidConfigError: If several categories would share one path, or
            the template has placeholders other than ``{category}``
    """
    if CATEGORY_FIELD not in template and len(categories) > 1:
        raise InvalidConfigError(
            "out", template, f"must contain {CATEGORY_FIELD} when the input has several categories"
        )
    paths: dict[int, Path] = {}
    for category_id in categories:
        try:
            paths[category_id] = Path(template.format(category=category_id))
        except (KeyError, IndexError, ValueError) as e:
            raise InvalidConfigError("out", template, f"bad placeholder: {e}")
    return paths


@app.command()
def matrix(
    ctx: typer.Context,
    input_path: Path = typer.Option(
        ...,
        "--in",
        "-i",
        help="Delimited event records (one header line)",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output path template, e.g. 'matrix_{category}.csv' (default: stdout)",
    ),
    start: Optional[str] = typer.Option(
        None,
        "--start",
        help="Name of the synthetic event before each run (default 'start')",
    ),
    stop: Optional[str] = typer.Option(
        None,
        "--stop",
        help="Name of the synthetic event after each run (default 'stop')",
    ),
    bare: bool = typer.Option(
        False,
        "--bare",
        help="Count only transitions between real events (no start/stop)",
    ),
    delimiter: Optional[str] = typer.Option(
        None,
        "--delimiter",
        "-d",
        help="Field delimiter of the event records (default ';')",
    ),
    table_delimiter: Optional[str] = typer.Option(
        None,
        "--table-delimiter",
        help="Field delimiter of the written tables (default ',')",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format: {', '.join(OUTPUT_FORMATS)}",
    ),
    min_weight: Optional[int] = typer.Option(
        None,
        "--min",
        "-m",
        help="For mermaid output: keep transitions with a count strictly greater than this",
        min=0,
    ),
):
    """
    Build a transition matrix for every category of an event log.

    Events are grouped by run and ordered by timestamp; every consecutive
    pair within a run counts as one transition. By default each run is
    bracketed by [bold]start[/bold] and [bold]stop[/bold] events.

    [bold cyan]Examples:[/bold cyan]

      eventchain matrix --in events.csv

      eventchain matrix --in events.csv --out "out/matrix_{category}.csv"

      eventchain matrix --in events.csv --bare --format mermaid --min 3
    """
    try:
        config = resolve_config(
            ctx,
            delimiter=delimiter,
            table_delimiter=table_delimiter,
            start=start,
            stop=stop,
            bracketed=False if bare else None,
            output_format=output_format,
            min_weight=min_weight,
        )

        result = load_events(
            input_path,
            layout=config.layout,
            delimiter=config.delimiter,
            timestamp_format=config.timestamp_format,
            comment=config.comment,
        )
        for skipped in result.skipped:
            logger.warning("%s: %s", skipped.category, skipped)

        if not result.events_by_category:
            logger.warning("No events loaded from %s", input_path)
            return

        sentinels = Sentinels(config.start, config.stop) if config.bracketed else None
        matrices = build_category_matrices(result, sentinels)
        formatter = get_formatter(
            config.output_format,
            delimiter=config.table_delimiter,
            min_weight=config.min_weight,
        )

        if output is None:
            for category_id, transitions in matrices.items():
                typer.echo(f"Transition matrix for category {category_id}:")
                formatter.render(transitions)
        else:
            paths = output_paths(output, list(matrices))
            # Render everything before touching the filesystem
            artifacts = {paths[cid]: formatter.format(m) for cid, m in matrices.items()}
            for path, text in artifacts.items():
                write_artifact(path, text)
            logger.info("Wrote %d matrices", len(artifacts))

        if result.skipped:
            logger.warning("%d of %d records skipped", len(result.skipped), result.records_read)

    except EventChainError as e:
        raise fail(e)
