"""Current and longest streak calculation for periodic habits."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from .periods import Instant, Period, end_of_period, period_index


@dataclass(frozen=True, slots=True)
class StreakResult:
    """Derived streak counts for a habit or journal."""

    current_streak: int = 0
    longest_streak: int = 0


def dedupe_by_period(completions: Iterable[Instant], period: Period | str) -> list[Instant]:
    """Collapse completions to one per period bucket, ascending.

    The earliest completion in each bucket represents it (first wins); any
    later completions in the same bucket are dropped.
    """

    period = Period.coerce(period)
    firsts: dict[int, Instant] = {}
    for instant in sorted(completions, key=_sort_key):
        firsts.setdefault(period_index(period, instant), instant)
    return [firsts[index] for index in sorted(firsts)]


def _sort_key(instant: Instant):
    if isinstance(instant, datetime):
        return (instant.date(), instant.time())
    return (instant, datetime.min.time())


def longest_run(indices: list[int]) -> int:
    """Return the longest run of consecutive values in ascending ``indices``."""

    longest = 0
    run = 0
    previous: int | None = None
    for index in indices:
        run = run + 1 if previous is not None and index - previous == 1 else 1
        longest = max(longest, run)
        previous = index
    return longest


def trailing_run(indices: list[int]) -> int:
    """Return the length of the consecutive run ending at the last of ``indices``."""

    if not indices:
        return 0
    run = 1
    for newer, older in zip(reversed(indices), reversed(indices[:-1])):
        if newer - older != 1:
            break
        run += 1
    return run


def compute_streak(
    completions: Iterable[Instant], period: Period | str, now: datetime
) -> StreakResult:
    """Return current and longest streaks for ``completions`` under ``period``.

    The current streak is alive only when the newest completion is in the
    period containing ``now``; it then extends backwards over consecutive
    periods until the first gap. Completions after the end of the current
    period are ignored.
    """

    period = Period.coerce(period)
    cutoff = end_of_period(period, now)
    observed = [c for c in completions if _sort_key(c) <= _sort_key(cutoff)]
    indices = [period_index(period, c) for c in dedupe_by_period(observed, period)]
    if not indices:
        return StreakResult(0, 0)

    current = trailing_run(indices) if indices[-1] == period_index(period, now) else 0
    longest = max(current, longest_run(indices))
    return StreakResult(current_streak=current, longest_streak=longest)


def completed_in_period(completions: Iterable[Instant], period: Period | str, now: datetime) -> bool:
    """Return True when any completion falls in the period containing ``now``."""

    target = period_index(period, now)
    return any(period_index(period, c) == target for c in completions)


_UNITS = {Period.DAILY: "day", Period.WEEKLY: "week", Period.MONTHLY: "month"}


def streak_label(streak: int, period: Period | str) -> str:
    """Return a short label such as ``"3 days streak"``; empty for no streak."""

    if streak <= 0:
        return ""
    unit = _UNITS[Period.coerce(period)]
    return f"{streak} {unit}{'s' if streak > 1 else ''} streak"


__all__ = [
    "StreakResult",
    "completed_in_period",
    "compute_streak",
    "dedupe_by_period",
    "longest_run",
    "streak_label",
    "trailing_run",
]
