"""Journal writing and statistics."""

from __future__ import annotations

import re
from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..domain.repositories import JournalRepository
from ..logging_config import get_logger
from ..models.journal import JournalEntry
from ..stats import journal_streak

logger = get_logger(__name__)

_WORD = re.compile(r"\b\w+\b")

RECENT_DAYS = 5
YEARS_BACK = 5


@dataclass(slots=True)
class JournalStats:
    total_entries: int = 0
    total_words: int = 0
    current_streak: int = 0
    longest_streak: int = 0


@dataclass(slots=True)
class JournalHistory:
    """Entries from the last few days plus the same day in past months/years."""

    recent: list[JournalEntry] = field(default_factory=list)
    lookbacks: dict[str, JournalEntry] = field(default_factory=dict)


def count_words(text: str | None) -> int:
    """Count word tokens in ``text``."""

    if not text:
        return 0
    return len(_WORD.findall(text))


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by ``months``, clamping to the last day of the target month."""

    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, monthrange(year, month)[1]))


def save_entry(
    repo: JournalRepository,
    content: str,
    *,
    user_id: int,
    now: Optional[datetime] = None,
) -> JournalEntry:
    """Write today's entry, replacing any earlier version from the same day."""

    if not content or not content.strip():
        raise ValueError("Journal entry cannot be empty.")
    today = (now or datetime.now()).date()
    entry = repo.upsert_for_date(today, content, user_id=user_id)
    logger.info("Journal entry saved", extra={"entry_date": today.isoformat()})
    return entry


def todays_entry(
    repo: JournalRepository, *, user_id: int, now: Optional[datetime] = None
) -> Optional[JournalEntry]:
    return repo.get_for_date((now or datetime.now()).date(), user_id=user_id)


def stats_from_entries(entries: Iterable[JournalEntry], now: datetime) -> JournalStats:
    entries = list(entries)
    streak = journal_streak([entry.entry_date for entry in entries], now)
    return JournalStats(
        total_entries=len(entries),
        total_words=sum(count_words(entry.content) for entry in entries),
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
    )


def journal_stats(
    repo: JournalRepository, *, user_id: int, now: Optional[datetime] = None
) -> JournalStats:
    """Return entry and word totals with current and longest streaks."""

    return stats_from_entries(repo.list_entries(user_id=user_id), now or datetime.now())


def journal_history(
    repo: JournalRepository, *, user_id: int, now: Optional[datetime] = None
) -> JournalHistory:
    """Collect the last five days' entries and the entries from one month and 1-5 years ago."""

    today = (now or datetime.now()).date()
    history = JournalHistory()

    recent_start = today - timedelta(days=RECENT_DAYS)
    history.recent = repo.list_entries(
        user_id=user_id, start_date=recent_start, end_date=today - timedelta(days=1)
    )

    targets = {"1_month": shift_months(today, -1)}
    for years in range(1, YEARS_BACK + 1):
        targets[f"{years}_year{'s' if years > 1 else ''}"] = shift_months(today, -12 * years)
    for key, day in targets.items():
        entry = repo.get_for_date(day, user_id=user_id)
        if entry is not None:
            history.lookbacks[key] = entry
    return history


__all__ = [
    "JournalHistory",
    "JournalStats",
    "count_words",
    "journal_history",
    "journal_stats",
    "save_entry",
    "shift_months",
    "stats_from_entries",
    "todays_entry",
]
