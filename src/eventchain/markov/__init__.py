"""Event loading, transition counting, and matrix rendering."""

from .builder import build_category_matrices, build_transition_matrix, group_runs
from .diagram import matrix_to_diagram, render_diagram
from .loader import load_events, parse_records
from .models import Event, LoadResult, Sentinels, SkippedRecord, TransitionMatrix
from .table import format_table, read_table, table_rows, write_table

__all__ = [
    "Event",
    "LoadResult",
    "Sentinels",
    "SkippedRecord",
    "TransitionMatrix",
    "load_events",
    "parse_records",
    "group_runs",
    "build_transition_matrix",
    "build_category_matrices",
    "table_rows",
    "write_table",
    "format_table",
    "read_table",
    "render_diagram",
    "matrix_to_diagram",
]
