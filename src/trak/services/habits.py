"""Habit management and per-habit statistics.

All statistics go through ``trak.stats``; this module only fetches rows from
the repository, groups them by habit and hands snapshots to the engine.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Optional

from ..domain.repositories import HabitRepository
from ..logging_config import get_logger
from ..models.habit import Habit, HabitCompletion, HabitTag
from ..stats import (
    Period,
    StreakResult,
    completed_in_period,
    completion_rate,
    compute_streak,
    end_of_period,
    start_of_period,
    streak_label,
)

logger = get_logger(__name__)

MAX_TAG_LENGTH = 32
TOP_TAGS = 5
FEED_DAYS = 30


class HabitNotFound(LookupError):
    """Raised when a habit does not exist or belongs to another user."""


@dataclass(slots=True)
class HabitOverview:
    """A habit together with the statistics shown in the habit list."""

    habit: Habit
    completed: bool
    streak: StreakResult
    completion_rate: float
    total_completions: int
    tags: list[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return streak_label(self.streak.current_streak, self.habit.period)


@dataclass(slots=True)
class ConsistentHabit:
    title: str
    rate: float


@dataclass(slots=True)
class HabitDashboardStats:
    """Aggregate habit statistics for the dashboard."""

    active_habits: int = 0
    daily: int = 0
    weekly: int = 0
    monthly: int = 0
    completion_rate: float = 0.0
    longest_streak: int = 0
    total_completions: int = 0
    most_consistent: Optional[ConsistentHabit] = None
    top_tags: list[str] = field(default_factory=list)


def _get_owned(repo: HabitRepository, habit_id: int, user_id: int) -> Habit:
    habit = repo.get_by_id(habit_id, user_id=user_id)
    if habit is None:
        raise HabitNotFound(f"Habit {habit_id} not found")
    return habit


def normalize_tags(names: Iterable[str]) -> list[str]:
    """Strip tag names, dropping blanks and repeats while keeping their order."""

    tags: list[str] = []
    for name in names:
        name = (name or "").strip()
        if not name or name in tags:
            continue
        if len(name) > MAX_TAG_LENGTH:
            raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters.")
        tags.append(name)
    return tags


def top_tags(tags: Iterable[HabitTag], limit: int = TOP_TAGS) -> list[str]:
    """Rank tag names by how many habits carry them, most recently used first on ties."""

    counts: Counter = Counter()
    latest: dict[str, datetime] = {}
    for tag in tags:
        counts[tag.name] += 1
        if tag.name not in latest or tag.created_at > latest[tag.name]:
            latest[tag.name] = tag.created_at
    names = sorted(counts)
    names.sort(key=latest.__getitem__, reverse=True)
    names.sort(key=counts.__getitem__, reverse=True)
    return names[:limit]


def tags_for(repo: HabitRepository, habit_id: int, *, user_id: int) -> list[str]:
    tags = repo.list_tags(user_id=user_id, habit_ids=[habit_id])
    return [tag.name for tag in sorted(tags, key=lambda tag: tag.id)]


def create_habit(
    repo: HabitRepository,
    *,
    user_id: int,
    title: str,
    period: Period | str = Period.DAILY,
    description: str = "",
    tags: Iterable[str] = (),
    now: Optional[datetime] = None,
) -> Habit:
    """Validate and persist a new habit with its tags."""

    title = (title or "").strip()
    if not title:
        raise ValueError("Please provide a habit title.")
    recurrence = Period.coerce(period)
    tag_names = normalize_tags(tags)
    now = now or datetime.now()
    habit = repo.create(
        Habit(
            user_id=user_id,
            title=title,
            description=description.strip(),
            period=recurrence.value,
            created_at=now,
            updated_at=now,
        ),
        user_id=user_id,
    )
    if tag_names:
        repo.set_tags(habit.id, tag_names, user_id=user_id)
    logger.info("Habit created", extra={"habit_id": habit.id, "period": habit.period})
    return habit


def update_habit(
    repo: HabitRepository,
    habit_id: int,
    *,
    user_id: int,
    title: Optional[str] = None,
    description: Optional[str] = None,
    period: Period | str | None = None,
    tags: Optional[Iterable[str]] = None,
) -> Habit:
    """Apply the given changes to a habit.

    The period cannot change once completions exist, since the recorded
    history would be re-bucketed under a different recurrence. A ``tags``
    list replaces the current tags; ``None`` leaves them alone.
    """

    habit = _get_owned(repo, habit_id, user_id)
    tag_names = normalize_tags(tags) if tags is not None else None
    if title is not None:
        title = title.strip()
        if not title:
            raise ValueError("Please provide a habit title.")
        habit.title = title
    if description is not None:
        habit.description = description.strip()
    if period is not None:
        recurrence = Period.coerce(period)
        if recurrence.value != habit.period:
            if repo.count_completions(habit_id, user_id=user_id):
                logger.warning(
                    "Rejected period change on habit with history",
                    extra={"habit_id": habit_id, "period": recurrence.value},
                )
                raise ValueError("The period of a habit with completions cannot be changed.")
            habit.period = recurrence.value
    if tag_names is not None:
        repo.set_tags(habit_id, tag_names, user_id=user_id)
    return repo.update(habit, user_id=user_id)


def delete_habit(repo: HabitRepository, habit_id: int, *, user_id: int) -> None:
    _get_owned(repo, habit_id, user_id)
    repo.delete(habit_id, user_id=user_id)
    logger.info("Habit deleted", extra={"habit_id": habit_id})


def toggle_completion(
    repo: HabitRepository,
    habit_id: int,
    *,
    user_id: int,
    now: Optional[datetime] = None,
) -> bool:
    """Mark the habit done for the current period, or undo it if already done.

    Returns the completion state after the toggle.
    """

    habit = _get_owned(repo, habit_id, user_id)
    now = now or datetime.now()
    period = habit.recurrence
    start, end = start_of_period(period, now), end_of_period(period, now)

    removed = repo.remove_completions_in_range(habit_id, start, end, user_id=user_id)
    if removed:
        logger.info("Habit completion undone", extra={"habit_id": habit_id, "removed": removed})
        return False

    repo.add_completion(
        HabitCompletion(user_id=user_id, habit_id=habit_id, completed_at=now), user_id=user_id
    )
    logger.info("Habit completed", extra={"habit_id": habit_id, "period": period.value})
    return True


def _completions_by_habit(completions: Iterable[HabitCompletion]) -> dict[int, list[datetime]]:
    grouped: dict[int, list[datetime]] = defaultdict(list)
    for completion in completions:
        grouped[completion.habit_id].append(completion.completed_at)
    return grouped


def _tags_by_habit(tags: Iterable[HabitTag]) -> dict[int, list[str]]:
    grouped: dict[int, list[str]] = defaultdict(list)
    for tag in sorted(tags, key=lambda tag: tag.id):
        grouped[tag.habit_id].append(tag.name)
    return grouped


def _overview_for(
    habit: Habit, completions: list[datetime], tags: list[str], now: datetime
) -> HabitOverview:
    period = habit.recurrence
    return HabitOverview(
        habit=habit,
        completed=completed_in_period(completions, period, now),
        streak=compute_streak(completions, period, now),
        completion_rate=completion_rate(habit.created_at, period, completions, now),
        total_completions=len(completions),
        tags=tags,
    )


def habit_overview(
    repo: HabitRepository,
    *,
    user_id: int,
    now: Optional[datetime] = None,
    period: Period | str | None = None,
    tag: Optional[str] = None,
) -> list[HabitOverview]:
    """Return every habit of the user with its streak, rate, tags and current state.

    ``period`` and ``tag`` narrow the list to one recurrence or one tag name.
    """

    now = now or datetime.now()
    filter_value = Period.coerce(period).value if period is not None else None
    habits = repo.list_all(user_id=user_id, period=filter_value, tag=tag)
    if not habits:
        return []
    habit_ids = [h.id for h in habits]
    completions = _completions_by_habit(
        repo.list_completions(user_id=user_id, habit_ids=habit_ids)
    )
    tags = _tags_by_habit(repo.list_tags(user_id=user_id, habit_ids=habit_ids))
    return [
        _overview_for(habit, completions.get(habit.id, []), tags.get(habit.id, []), now)
        for habit in habits
    ]


def dashboard_stats(
    repo: HabitRepository, *, user_id: int, now: Optional[datetime] = None
) -> HabitDashboardStats:
    """Summarize all habits: counts, mean rate, best streak, most consistent and top tags."""

    overviews = habit_overview(repo, user_id=user_id, now=now)
    if not overviews:
        return HabitDashboardStats()

    stats = HabitDashboardStats(active_habits=len(overviews))
    for overview in overviews:
        period = overview.habit.recurrence
        if period is Period.DAILY:
            stats.daily += 1
        elif period is Period.WEEKLY:
            stats.weekly += 1
        else:
            stats.monthly += 1
        stats.total_completions += overview.total_completions
        stats.longest_streak = max(stats.longest_streak, overview.streak.longest_streak)
        best = stats.most_consistent
        if overview.completion_rate > 0 and (best is None or overview.completion_rate > best.rate):
            stats.most_consistent = ConsistentHabit(
                title=overview.habit.title, rate=overview.completion_rate
            )

    stats.completion_rate = sum(o.completion_rate for o in overviews) / len(overviews)
    stats.top_tags = top_tags(repo.list_tags(user_id=user_id))
    return stats


class FeedKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    COMPLETED = "completed"


@dataclass(slots=True)
class FeedItem:
    """One entry of the recent-activity feed.

    ``streak`` is set for completions only: the habit's current streak as of
    the period in which that completion was recorded.
    """

    habit: Habit
    when: datetime
    kind: FeedKind
    streak: Optional[int] = None


def activity_feed(
    repo: HabitRepository,
    *,
    user_id: int,
    days: int = FEED_DAYS,
    now: Optional[datetime] = None,
    tag: Optional[str] = None,
) -> list[FeedItem]:
    """Return habit creations, edits and completions from the last ``days`` days, newest first."""

    if days < 0:
        raise ValueError("days must be zero or positive")
    now = now or datetime.now()
    since = now - timedelta(days=days)

    habits = repo.list_all(user_id=user_id, tag=tag)
    if not habits:
        return []
    by_id = {habit.id: habit for habit in habits}

    items: list[FeedItem] = []
    for habit in habits:
        if since <= habit.created_at <= now:
            items.append(FeedItem(habit=habit, when=habit.created_at, kind=FeedKind.CREATED))
        if habit.updated_at != habit.created_at and since <= habit.updated_at <= now:
            items.append(FeedItem(habit=habit, when=habit.updated_at, kind=FeedKind.UPDATED))

    grouped = _completions_by_habit(repo.list_completions(user_id=user_id, habit_ids=list(by_id)))
    for habit_id, moments in grouped.items():
        habit = by_id[habit_id]
        for moment in moments:
            if not since <= moment <= now:
                continue
            streak = compute_streak(moments, habit.recurrence, now=moment).current_streak
            items.append(
                FeedItem(habit=habit, when=moment, kind=FeedKind.COMPLETED, streak=streak)
            )

    items.sort(key=lambda item: item.when, reverse=True)
    return items


__all__ = [
    "ConsistentHabit",
    "FeedItem",
    "FeedKind",
    "HabitDashboardStats",
    "HabitNotFound",
    "HabitOverview",
    "activity_feed",
    "create_habit",
    "dashboard_stats",
    "delete_habit",
    "habit_overview",
    "normalize_tags",
    "tags_for",
    "toggle_completion",
    "top_tags",
    "update_habit",
]
