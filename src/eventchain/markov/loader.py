"""Parse delimited event records into Events partitioned by category."""

from __future__ import annotations

import csv
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union

from ..config import FieldLayout
from ..exceptions import HeaderError, InvalidDelimiterError, SourceAccessError
from ..logging_config import get_logger
from .models import Event, LoadResult, SkippedRecord

logger = get_logger(__name__)

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# strptime accepts unpadded fields; the default format is fixed-width
_DEFAULT_TIMESTAMP_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def load_events(
    path: Union[str, Path],
    layout: Optional[FieldLayout] = None,
    delimiter: str = ";",
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    comment: Optional[str] = None,
    encoding: str = "utf-8",
) -> LoadResult:
    """Read a record file and group its events by category id.

    Malformed rows never fail the load; they are reported in
    ``LoadResult.skipped``. Only an unreadable file or header is fatal.

    Raises:
        InvalidDelimiterError: If ``delimiter`` is not one character
        SourceAccessError: If the file cannot be opened or read
        HeaderError: If the file has no header line
    """
    _check_delimiter(delimiter)
    path = Path(path)
    try:
        with open(path, newline="", encoding=encoding) as f:
            return parse_records(
                f,
                layout=layout,
                delimiter=delimiter,
                timestamp_format=timestamp_format,
                comment=comment,
                source=path,
            )
    except (OSError, UnicodeDecodeError) as e:
        raise SourceAccessError(path, str(e))


def parse_records(
    lines: Iterable[str],
    layout: Optional[FieldLayout] = None,
    delimiter: str = ";",
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    comment: Optional[str] = None,
    source: Union[str, Path] = "<stream>",
) -> LoadResult:
    """Parse an iterable of record lines (header first) into a LoadResult."""
    _check_delimiter(delimiter)
    layout = layout or FieldLayout()
    source = Path(source)

    reader = csv.reader(lines, delimiter=delimiter, skipinitialspace=True)
    result = LoadResult()

    try:
        header = _next_record(reader, comment)
        if header is None:
            raise HeaderError(source, "no header line")
        logger.debug("Header of %s has %d fields", source, len(header))

        for record in reader:
            if not record or _is_comment(record, comment):
                continue
            result.records_read += 1
            event = _parse_record(record, reader.line_num, layout, timestamp_format, result)
            if event is not None:
                result.events_by_category.setdefault(event.category_id, []).append(event)
    except csv.Error as e:
        raise SourceAccessError(source, f"line {reader.line_num}: {e}")

    logger.info(
        "Loaded %d events in %d categories from %s (%d skipped)",
        result.total_events,
        len(result.events_by_category),
        source,
        len(result.skipped),
    )
    return result


def _parse_record(
    record: list[str],
    line: int,
    layout: FieldLayout,
    timestamp_format: str,
    result: LoadResult,
) -> Optional[Event]:
    """Build one Event, or record why the row was skipped and return None."""
    sent_at = (_field(record, layout.timestamp) or "").strip()
    if not sent_at:
        return None

    try:
        timestamp = _parse_timestamp(sent_at, timestamp_format)
    except ValueError:
        return _skip(result, line, "invalid timestamp", sent_at)

    raw_category = _field(record, layout.category_id)
    if raw_category is None:
        return _skip(result, line, "missing category id")
    try:
        category_id = _parse_int(raw_category)
    except ValueError:
        return _skip(result, line, "invalid category id", raw_category)

    raw_run = _field(record, layout.run_id)
    if raw_run is None:
        return _skip(result, line, "missing run id")
    try:
        run_id = _parse_int(raw_run)
    except ValueError:
        return _skip(result, line, "invalid run id", raw_run)

    name = _field(record, layout.name)
    if name is None:
        return _skip(result, line, "missing event name")

    return Event(name=name, run_id=run_id, timestamp=timestamp, category_id=category_id)


def _parse_timestamp(value: str, timestamp_format: str) -> datetime:
    if timestamp_format == DEFAULT_TIMESTAMP_FORMAT and not _DEFAULT_TIMESTAMP_SHAPE.fullmatch(value):
        raise ValueError(f"timestamp {value!r} is not YYYY-MM-DD HH:MM:SS")
    return datetime.strptime(value, timestamp_format)


def _parse_int(raw: str) -> int:
    """Parse an optionally signed run of ASCII digits."""
    value = raw.strip()
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"invalid integer: {raw!r}")
    return int(value)


def _skip(result: LoadResult, line: int, reason: str, value: str = "") -> None:
    skipped = SkippedRecord(line=line, reason=reason, value=value)
    result.skipped.append(skipped)
    logger.debug("Skipping record (%s) %s", skipped.category, skipped)
    return None


def _field(record: list[str], index: int) -> Optional[str]:
    if index < len(record):
        return record[index]
    return None


def _next_record(reader, comment: Optional[str]) -> Optional[list[str]]:
    for record in reader:
        if record and not _is_comment(record, comment):
            return record
    return None


def _is_comment(record: list[str], comment: Optional[str]) -> bool:
    return comment is not None and record[0].startswith(comment)


def _check_delimiter(delimiter: str) -> None:
    if len(delimiter) != 1:
        raise InvalidDelimiterError(delimiter)
