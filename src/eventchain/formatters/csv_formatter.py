"""CSV table formatter."""

from ..markov.models import TransitionMatrix
from ..markov.table import format_table
from .base import BaseFormatter


class CsvFormatter(BaseFormatter):
    """Render the square count table, one delimited row per event."""

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def format(self, matrix: TransitionMatrix) -> str:
        return format_table(matrix, self.delimiter)
