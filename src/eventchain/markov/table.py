"""Square count table: the tabular artifact of a transition matrix."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Optional, TextIO, Union

from ..exceptions import HeaderError, InvalidDelimiterError, SourceAccessError
from .models import TransitionMatrix

CORNER = "From/To"


def table_rows(matrix: TransitionMatrix) -> list[list[str]]:
    """Header row plus one row per event name, all names sorted.

    Names are the union of sources and destinations, so an event that is
    only ever a destination still gets a row of zeros.
    """
    names = matrix.names()
    rows = [[CORNER, *names]]
    for src in names:
        rows.append([src, *(str(matrix.count(src, dst)) for dst in names)])
    return rows


def write_table(matrix: TransitionMatrix, sink: TextIO, delimiter: str = ",") -> None:
    """Write the table of ``matrix`` to an open text sink."""
    if len(delimiter) != 1:
        raise InvalidDelimiterError(delimiter, key="table_delimiter")
    writer = csv.writer(sink, delimiter=delimiter, lineterminator="\n")
    writer.writerows(table_rows(matrix))


def format_table(matrix: TransitionMatrix, delimiter: str = ",") -> str:
    output = io.StringIO()
    write_table(matrix, output, delimiter)
    return output.getvalue()


def read_table(
    path: Union[str, Path], delimiter: str = ",", comment: Optional[str] = "#"
) -> list[list[str]]:
    """Read a table artifact back into rows of strings.

    Raises:
        SourceAccessError: If the file cannot be opened or parsed
        HeaderError: If the file holds no rows at all
    """
    if len(delimiter) != 1:
        raise InvalidDelimiterError(delimiter)
    path = Path(path)
    try:
        with open(path, newline="", encoding="utf-8") as f:
            rows = [
                row
                for row in csv.reader(f, delimiter=delimiter)
                if row and not (comment and row[0].startswith(comment))
            ]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise SourceAccessError(path, str(e))
    if not rows:
        raise HeaderError(path, "table is empty")
    return rows
