"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import MatrixConfig, load_config
from ..exceptions import EventChainError, OutputError
from ..logging_config import get_logger

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)


def resolve_config(ctx: typer.Context, **overrides) -> MatrixConfig:
    """Build config from the global --config file and command options."""
    config_file: Optional[Path] = (ctx.obj or {}).get("config_file")
    return load_config(config_file=config_file, **overrides)


def fail(error: EventChainError) -> typer.Exit:
    """Report a fatal error and return the exit to raise."""
    logger.debug("%s: %s", error.__class__.__name__, error)
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    return typer.Exit(1)


def write_artifact(path: Path, text: str) -> None:
    """Write one output artifact, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputError(path, str(e))
    logger.info("Wrote %s", path)

