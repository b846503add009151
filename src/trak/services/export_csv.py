"""CSV export helpers for habits and journal entries."""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from ..models.habit import Habit, HabitCompletion
from ..models.journal import JournalEntry


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _write_rows(output_path: Path, headers: list[str], rows: Iterable[dict]) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=headers, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for row in rows:
            writer.writerow({key: _serialize_value(row.get(key)) for key in headers})
    return output_path


def export_habits_csv(
    *,
    habits: Iterable[Habit],
    completions: Iterable[HabitCompletion],
    output_path: Path,
) -> Path:
    """Write one row per completion (and one per never-completed habit).

    Columns: habit_id, title, period, created_at, completed_at.
    """

    by_habit: dict[int, list[HabitCompletion]] = {}
    for completion in completions:
        by_habit.setdefault(completion.habit_id, []).append(completion)

    def rows():
        for habit in habits:
            base = {
                "habit_id": habit.id,
                "title": habit.title,
                "period": habit.period,
                "created_at": habit.created_at,
            }
            done = sorted(by_habit.get(habit.id, []), key=lambda c: c.completed_at)
            if not done:
                yield {**base, "completed_at": None}
            for completion in done:
                yield {**base, "completed_at": completion.completed_at}

    headers = ["habit_id", "title", "period", "created_at", "completed_at"]
    return _write_rows(output_path, headers, rows())


def export_journal_csv(*, entries: Iterable[JournalEntry], output_path: Path) -> Path:
    """Write journal entries oldest first. Columns: entry_date, content, updated_at."""

    ordered = sorted(entries, key=lambda entry: entry.entry_date)
    headers = ["entry_date", "content", "updated_at"]
    return _write_rows(
        output_path,
        headers,
        (
            {"entry_date": e.entry_date, "content": e.content, "updated_at": e.updated_at}
            for e in ordered
        ),
    )


__all__ = ["export_habits_csv", "export_journal_csv"]
