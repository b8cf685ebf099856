"""Count first-order transitions between consecutive events of a run."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional

from ..logging_config import get_logger
from .models import Event, LoadResult, Sentinels, TransitionMatrix

logger = get_logger(__name__)


def group_runs(events: Iterable[Event]) -> dict[int, list[Event]]:
    """Partition events by run id, each run in chronological order.

    ``sorted`` is stable, so events sharing a timestamp keep their input
    order.
    """
    runs: dict[int, list[Event]] = defaultdict(list)
    for event in events:
        runs[event.run_id].append(event)
    return {run_id: sorted(run, key=lambda e: e.timestamp) for run_id, run in runs.items()}


def build_transition_matrix(
    events: Iterable[Event], sentinels: Optional[Sentinels] = None
) -> TransitionMatrix:
    """Build a transition matrix from events of any order.

    Bare mode (no sentinels): each consecutive pair of a run counts once;
    runs of fewer than two events add nothing.

    Bracketed mode: every non-empty run additionally counts
    ``start -> first`` and ``last -> stop``, so a single-event run yields
    exactly those two transitions.

    Each run contributes only through its own chronological sequence, so
    the order in which runs are visited does not affect the counts.
    """
    matrix = TransitionMatrix()
    runs = group_runs(events)

    for run in runs.values():
        names = [event.name for event in run]
        if sentinels is not None:
            names = [sentinels.start, *names, sentinels.stop]
        for prev, curr in zip(names, names[1:]):
            matrix.increment(prev, curr)

    logger.debug(
        "Counted %d transitions over %d runs (%d distinct)", matrix.total(), len(runs), len(matrix)
    )
    return matrix


def build_category_matrices(
    result: LoadResult, sentinels: Optional[Sentinels] = None
) -> dict[int, TransitionMatrix]:
    """One independent matrix per category, in ascending category order."""
    return {
        category_id: build_transition_matrix(result.events_by_category[category_id], sentinels)
        for category_id in result.categories()
    }
