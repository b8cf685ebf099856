"""CLI entry point — registers all subcommands."""

import typer

app = typer.Typer(
    name="eventchain",
    help="eventchain - Markov transition matrices from event logs",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .matrix import matrix as _matrix  # noqa: F401, E402
from .diag import diag as _diag  # noqa: F401, E402

__all__ = ["app"]
