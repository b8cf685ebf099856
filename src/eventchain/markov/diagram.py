"""Mermaid flowchart rendering of a transition table."""

from __future__ import annotations

from typing import Sequence

from ..logging_config import get_logger
from .models import TransitionMatrix
from .table import table_rows

logger = get_logger(__name__)

HEADER = "graph LR\n"


def render_diagram(rows: Sequence[Sequence[str]], threshold: int = 0) -> str:
    """Render table rows as a left-to-right Mermaid graph.

    ``rows[0]`` is the header (corner cell, then destination names); every
    other row is a source name followed by its counts. Node ids ``e0, e1,
    ...`` follow the header order. An edge is emitted only when its weight
    is strictly greater than ``threshold``.

    A table with fewer than two rows or two header cells renders as "".
    """
    if len(rows) < 2 or len(rows[0]) < 2:
        return ""

    header = rows[0]
    node_ids: dict[str, str] = {}
    for name in header[1:]:
        _node_id(node_ids, name)

    lines = [HEADER]
    for row in rows[1:]:
        if not row:
            continue
        src = row[0]
        src_id = _node_id(node_ids, src)
        for dst, cell in zip(header[1:], row[1:]):
            weight = _weight(cell)
            if weight > threshold:
                lines.append(f"{src_id}[{src}] -- {weight} --> {node_ids[dst]}[{dst}]\n")
    return "".join(lines)


def matrix_to_diagram(matrix: TransitionMatrix, threshold: int = 0) -> str:
    """Render a matrix directly; node ids follow its sorted name axis."""
    return render_diagram(table_rows(matrix), threshold)


def _node_id(node_ids: dict[str, str], name: str) -> str:
    # first appearance wins; row labels missing from the header get the next id
    if name not in node_ids:
        node_ids[name] = f"e{len(node_ids)}"
    return node_ids[name]


def _weight(cell: str) -> int:
    try:
        return int(cell.strip())
    except ValueError:
        logger.debug("Non-numeric table cell %r treated as 0", cell)
        return 0
