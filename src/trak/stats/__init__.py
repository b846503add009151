"""Pure streak and period statistics over completion and entry timestamps.

Nothing in this package touches the database or the logger, and only the
activity anchor falls back to the clock: callers pass snapshots and ``now``.
"""

from .activity import (
    ActivityBucket,
    ActivitySummary,
    activity_level,
    aggregate,
    calendar_grid,
    summarize,
)
from .completion import completion_rate, expected_occurrences
from .journal import journal_streak
from .periods import (
    InvalidPeriodError,
    Period,
    end_of_period,
    is_consecutive_period,
    period_key,
    start_of_period,
)
from .streaks import (
    StreakResult,
    completed_in_period,
    compute_streak,
    dedupe_by_period,
    streak_label,
)

__all__ = [
    "ActivityBucket",
    "ActivitySummary",
    "InvalidPeriodError",
    "Period",
    "StreakResult",
    "activity_level",
    "aggregate",
    "calendar_grid",
    "completed_in_period",
    "completion_rate",
    "compute_streak",
    "dedupe_by_period",
    "end_of_period",
    "expected_occurrences",
    "is_consecutive_period",
    "journal_streak",
    "period_key",
    "start_of_period",
    "streak_label",
    "summarize",
]
