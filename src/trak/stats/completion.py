"""Expected-versus-actual completion estimates for habits."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable

from .periods import Instant, Period
from .streaks import dedupe_by_period

_DAY = timedelta(days=1)


def expected_occurrences(period: Period | str, created_at: datetime, now: datetime) -> int:
    """Return how many periods a habit created at ``created_at`` has spanned by ``now``.

    Never less than one, so the value is always safe as a divisor.
    """

    period = Period.coerce(period)
    if period is Period.DAILY:
        return max(1, math.floor((now - created_at) / _DAY))
    if period is Period.WEEKLY:
        return max(1, math.ceil((now - created_at) / (7 * _DAY)))
    months = (now.month - created_at.month) + 12 * (now.year - created_at.year)
    return max(1, months)


def completion_rate(
    created_at: datetime,
    period: Period | str,
    completions: Iterable[Instant],
    now: datetime,
) -> float:
    """Return distinct completed periods divided by expected occurrences.

    The ratio is not clamped: a habit completed in more periods than the
    estimate expects reports a rate above 1.0.
    """

    period = Period.coerce(period)
    completed = len(dedupe_by_period(completions, period))
    return completed / expected_occurrences(period, created_at, now)


__all__ = ["completion_rate", "expected_occurrences"]
