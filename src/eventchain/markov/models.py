"""Data models for event loading and transition counting."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Mapping, Optional

SKIPPED_MALFORMED_RECORD = "skipped-malformed-record"


@dataclass(frozen=True)
class Event:
    name: str
    run_id: int
    timestamp: datetime
    category_id: Optional[int] = None  # partition key only


@dataclass(frozen=True)
class Sentinels:
    """Synthetic event names bracketing every run."""

    start: str = "start"
    stop: str = "stop"


@dataclass(frozen=True)
class SkippedRecord:
    line: int  # 1-based line number in the source
    reason: str
    value: str = ""
    category: str = SKIPPED_MALFORMED_RECORD

    def __str__(self) -> str:
        if self.value:
            return f"line {self.line}: {self.reason}: {self.value!r}"
        return f"line {self.line}: {self.reason}"


@dataclass
class LoadResult:
    events_by_category: dict[int, list[Event]] = field(default_factory=dict)
    skipped: list[SkippedRecord] = field(default_factory=list)
    records_read: int = 0

    def categories(self) -> list[int]:
        return sorted(self.events_by_category)

    @property
    def total_events(self) -> int:
        return sum(len(events) for events in self.events_by_category.values())


class TransitionMatrix:
    """Sparse count matrix keyed by (source, destination) event names.

    Only non-zero cells are stored. Nothing here depends on insertion
    order: every view that feeds an output sorts its keys first.
    """

    def __init__(self, counts: Optional[Mapping[tuple[str, str], int]] = None):
        self._counts: Counter[tuple[str, str]] = Counter()
        if counts:
            for (src, dst), n in counts.items():
                self.increment(src, dst, n)

    @classmethod
    def from_dict(cls, nested: Mapping[str, Mapping[str, int]]) -> TransitionMatrix:
        """Build from ``{source: {destination: count}}``."""
        matrix = cls()
        for src, row in nested.items():
            for dst, n in row.items():
                matrix.increment(src, dst, n)
        return matrix

    def increment(self, src: str, dst: str, n: int = 1) -> None:
        if n < 0:
            raise ValueError(f"transition counts cannot be negative: {src} -> {dst} = {n}")
        if n:
            self._counts[(src, dst)] += n

    def count(self, src: str, dst: str) -> int:
        return self._counts.get((src, dst), 0)

    def outgoing(self, src: str) -> int:
        """Total count of transitions leaving ``src``."""
        return sum(n for (s, _), n in self._counts.items() if s == src)

    def names(self) -> list[str]:
        """Every event name seen as a source or destination, sorted."""
        seen: set[str] = set()
        for src, dst in self._counts:
            seen.add(src)
            seen.add(dst)
        return sorted(seen)

    def total(self) -> int:
        return sum(self._counts.values())

    def items(self) -> Iterator[tuple[tuple[str, str], int]]:
        """Non-zero cells in sorted (source, destination) order."""
        for key in sorted(self._counts):
            yield key, self._counts[key]

    def to_dict(self) -> dict[str, dict[str, int]]:
        nested: dict[str, dict[str, int]] = {}
        for (src, dst), n in self.items():
            nested.setdefault(src, {})[dst] = n
        return nested

    def __len__(self) -> int:
        return len(self._counts)

    def __bool__(self) -> bool:
        return bool(self._counts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TransitionMatrix):
            return self._counts == other._counts
        return NotImplemented

    def __repr__(self) -> str:
        return f"TransitionMatrix({self.to_dict()!r})"

