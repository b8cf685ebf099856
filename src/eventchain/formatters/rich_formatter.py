"""Rich terminal formatter."""

import io

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..markov.models import TransitionMatrix
from ..markov.table import CORNER
from .base import BaseFormatter


class RichFormatter(BaseFormatter):
    """Terminal preview of the count table with zero cells dimmed."""

    def __init__(self, width: int = 120):
        self.width = width

    def render(self, matrix: TransitionMatrix) -> None:
        Console().print(self._build_table(matrix))

    def format(self, matrix: TransitionMatrix) -> str:
        buffer = io.StringIO()
        console = Console(file=buffer, width=self.width, no_color=True)
        console.print(self._build_table(matrix))
        return buffer.getvalue()

    def _build_table(self, matrix: TransitionMatrix) -> Table:
        names = matrix.names()
        table = Table(show_header=True, show_lines=False, pad_edge=True)
        table.add_column(CORNER, style="bold cyan")
        for name in names:
            table.add_column(escape(name), justify="right")
        table.add_column("Total", justify="right", style="bold")

        for src in names:
            cells = []
            for dst in names:
                n = matrix.count(src, dst)
                cells.append(str(n) if n else "[dim]0[/dim]")
            table.add_row(escape(src), *cells, str(matrix.outgoing(src)))
        return table
