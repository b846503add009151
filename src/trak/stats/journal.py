"""Daily journal streaks with a one-day grace period."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from .periods import Instant, Period, local_date, period_index
from .streaks import StreakResult, longest_run, trailing_run


def journal_streak(entries: Iterable[Instant], now: datetime) -> StreakResult:
    """Return current and longest journaling streaks.

    A streak stays alive until the end of the day after the last entry: if
    there is no entry today but there is one yesterday, counting starts from
    yesterday. From that anchor every earlier day must have an entry. Entries
    dated after today are ignored, as habit completions after the current
    period are.
    """

    today = local_date(now)
    indices = sorted(
        {period_index(Period.DAILY, entry) for entry in entries if local_date(entry) <= today}
    )
    if not indices:
        return StreakResult(0, 0)

    alive = indices[-1] >= period_index(Period.DAILY, today) - 1
    current = trailing_run(indices) if alive else 0
    longest = max(current, longest_run(indices))
    return StreakResult(current_streak=current, longest_streak=longest)


__all__ = ["journal_streak"]
