"""Per-day activity aggregation for heatmap views."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Tuple, Union

from .periods import Instant, local_date, week_start

ActivityEvent = Union[Instant, Tuple[Instant, int]]

DEFAULT_WINDOW_DAYS = 364


@dataclass(frozen=True, slots=True)
class ActivityBucket:
    """Number of events recorded on a single calendar day."""

    day: date
    count: int = 0


@dataclass(frozen=True, slots=True)
class ActivitySummary:
    total_days: int
    active_days: int
    total_count: int


def _resolve_window(window_days: int, anchor: Optional[Instant]) -> tuple[date, date]:
    if window_days < 0:
        raise ValueError("window_days must be zero or positive")
    end = local_date(anchor) if anchor is not None else date.today()
    return end - timedelta(days=window_days), end


def _daily_counts(events: Iterable[ActivityEvent]) -> Counter:
    counts: Counter = Counter()
    for event in events:
        if isinstance(event, tuple):
            when, count = event
            counts[local_date(when)] += int(count)
        else:
            counts[local_date(event)] += 1
    return counts


def aggregate(
    events: Iterable[ActivityEvent],
    window_days: int = DEFAULT_WINDOW_DAYS,
    anchor: Optional[Instant] = None,
) -> list[ActivityBucket]:
    """Bucket ``events`` into one entry per day of ``[anchor - window_days, anchor]``.

    Events may be plain dates/datetimes (each counts once) or ``(date, count)``
    pairs. Days without events are zero-filled; events outside the window are
    dropped. Buckets are ordered oldest first.
    """

    start, end = _resolve_window(window_days, anchor)
    counts = _daily_counts(events)
    return [
        ActivityBucket(day=day, count=counts.get(day, 0))
        for day in (start + timedelta(days=offset) for offset in range((end - start).days + 1))
    ]


def calendar_grid(
    events: Iterable[ActivityEvent],
    window_days: int = DEFAULT_WINDOW_DAYS,
    anchor: Optional[Instant] = None,
) -> list[list[Optional[ActivityBucket]]]:
    """Lay the per-day counts of ``aggregate`` out as Sunday-first weeks.

    The first week begins on the Sunday on or before the window start. Cells
    outside the window, before its start or after the anchor, are ``None``.
    """

    buckets = aggregate(events, window_days=window_days, anchor=anchor)
    by_day = {bucket.day: bucket for bucket in buckets}
    first, last = buckets[0].day, buckets[-1].day

    weeks: list[list[Optional[ActivityBucket]]] = []
    cursor = week_start(first)
    while cursor <= last:
        week = [by_day.get(cursor + timedelta(days=offset)) for offset in range(7)]
        weeks.append(week)
        cursor += timedelta(days=7)
    return weeks


def activity_level(count: int) -> int:
    """Map a day's count to a heatmap intensity between 0 and 4."""

    if count <= 0:
        return 0
    if count == 1:
        return 1
    if count <= 3:
        return 2
    if count <= 5:
        return 3
    return 4


def summarize(buckets: Iterable[ActivityBucket]) -> ActivitySummary:
    buckets = list(buckets)
    return ActivitySummary(
        total_days=len(buckets),
        active_days=sum(1 for bucket in buckets if bucket.count > 0),
        total_count=sum(bucket.count for bucket in buckets),
    )


__all__ = [
    "ActivityBucket",
    "ActivityEvent",
    "ActivitySummary",
    "DEFAULT_WINDOW_DAYS",
    "activity_level",
    "aggregate",
    "calendar_grid",
    "summarize",
]
