"""Filtering, search and ordering over normalized events.

All functions are pure and return new lists; the input is never mutated.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .models import EventState, NormalizedEvent


def filter_by_state(events: Iterable[NormalizedEvent], state: Optional[EventState]) -> list[NormalizedEvent]:
    """Keep events in the given state. A state of None keeps everything."""
    if state is None:
        return list(events)
    return [e for e in events if e.status.state == state]


def live(events: Iterable[NormalizedEvent]) -> list[NormalizedEvent]:
    return filter_by_state(events, EventState.IN_PROGRESS)


def upcoming(events: Iterable[NormalizedEvent]) -> list[NormalizedEvent]:
    return filter_by_state(events, EventState.SCHEDULED)


def completed(events: Iterable[NormalizedEvent]) -> list[NormalizedEvent]:
    return filter_by_state(events, EventState.COMPLETED)


def search_events(events: Iterable[NormalizedEvent], query: str) -> list[NormalizedEvent]:
    """Case-insensitive substring match on participant names and abbreviations."""
    needle = query.strip().lower()
    if not needle:
        return []

    def matches(event: NormalizedEvent) -> bool:
        for p in event.participants:
            if needle in p.name.lower():
                return True
            if p.abbreviation and needle in p.abbreviation.lower():
                return True
        return False

    return [e for e in events if matches(e)]


def sort_by_start(
    events: Iterable[NormalizedEvent],
    limit: Optional[int] = None,
    descending: bool = False,
) -> list[NormalizedEvent]:
    """Order by start time, then cap at `limit` results.

    Events without a start time go last in either direction. The sort is
    stable, so ties keep their input order.
    """
    events = list(events)
    dated = [e for e in events if e.start_time is not None]
    undated = [e for e in events if e.start_time is None]
    ordered = sorted(dated, key=lambda e: e.start_time, reverse=descending) + undated
    if limit is not None:
        ordered = ordered[: max(limit, 0)]
    return ordered


def count_by_state(events: Iterable[NormalizedEvent]) -> dict[str, int]:
    """Totals per EventState, plus an overall 'total'."""
    counts = {state.value: 0 for state in EventState}
    total = 0
    for e in events:
        counts[e.status.state.value] += 1
        total += 1
    counts["total"] = total
    return counts
