"""Per-user activity feed for the heatmap."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..domain.repositories import HabitRepository, JournalRepository
from ..stats import ActivityBucket, aggregate, calendar_grid
from ..stats.activity import ActivityEvent, DEFAULT_WINDOW_DAYS


def collect_events(
    habit_repo: HabitRepository,
    journal_repo: JournalRepository,
    *,
    user_id: int,
    window_days: int,
    now: datetime,
) -> list[ActivityEvent]:
    """Return one event per habit creation, habit completion and journal entry."""

    since = (now - timedelta(days=window_days)).date()
    events: list[ActivityEvent] = [h.created_at for h in habit_repo.list_all(user_id=user_id)]
    events.extend(c.completed_at for c in habit_repo.list_completions(user_id=user_id))
    events.extend(
        entry.entry_date
        for entry in journal_repo.list_entries(user_id=user_id, start_date=since, end_date=now.date())
    )
    return events


def activity_buckets(
    habit_repo: HabitRepository,
    journal_repo: JournalRepository,
    *,
    user_id: int,
    window_days: int = DEFAULT_WINDOW_DAYS,
    now: Optional[datetime] = None,
) -> list[ActivityBucket]:
    """Linear per-day counts for the trailing window ending today."""

    now = now or datetime.now()
    events = collect_events(
        habit_repo, journal_repo, user_id=user_id, window_days=window_days, now=now
    )
    return aggregate(events, window_days=window_days, anchor=now)


def activity_grid(
    habit_repo: HabitRepository,
    journal_repo: JournalRepository,
    *,
    user_id: int,
    window_days: int = DEFAULT_WINDOW_DAYS,
    now: Optional[datetime] = None,
) -> list[list[Optional[ActivityBucket]]]:
    """Sunday-first week columns over the same per-day counts."""

    now = now or datetime.now()
    events = collect_events(
        habit_repo, journal_repo, user_id=user_id, window_days=window_days, now=now
    )
    return calendar_grid(events, window_days=window_days, anchor=now)


__all__ = ["activity_buckets", "activity_grid", "collect_events"]
