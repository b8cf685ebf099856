"""
eventchain - Markov transition matrices from event logs

Reads timestamped event records grouped by run and category, counts how
often one event is immediately followed by another within a run, and
renders the counts as a square table or a Mermaid flow diagram.
"""

__version__ = "0.3.0"

from .markov import (
    Event,
    LoadResult,
    Sentinels,
    TransitionMatrix,
    build_category_matrices,
    build_transition_matrix,
    load_events,
    matrix_to_diagram,
    render_diagram,
    write_table,
)

__all__ = [
    "Event",
    "LoadResult",
    "Sentinels",
    "TransitionMatrix",
    "load_events",  # Loader
    "build_transition_matrix",  # Builder
    "build_category_matrices",
    "write_table",  # Renderers
    "render_diagram",
    "matrix_to_diagram",
]
