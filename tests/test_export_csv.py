"""Tests for CSV export helpers and the export CLI command."""

from __future__ import annotations

import csv
from datetime import date, datetime

from trak.models import Habit, HabitCompletion, JournalEntry
from trak.services import auth, export_csv


def _read(path):
    with path.open(newline="", encoding="utf-8") as fh:
        return list(csv.DictReader(fh))


def test_export_habits_csv_one_row_per_completion(tmp_path):
    """Each completion is a row; a habit never completed still gets one row."""

    habits = [
        Habit(id=1, user_id=1, title="Read", period="daily", created_at=datetime(2024, 1, 1)),
        Habit(id=2, user_id=1, title="Call mum", period="weekly", created_at=datetime(2024, 1, 2)),
    ]
    completions = [
        HabitCompletion(id=2, user_id=1, habit_id=1, completed_at=datetime(2024, 1, 3, 7, 30)),
        HabitCompletion(id=1, user_id=1, habit_id=1, completed_at=datetime(2024, 1, 2, 7, 30)),
    ]

    output_path = tmp_path / "nested" / "habits.csv"
    export_csv.export_habits_csv(habits=habits, completions=completions, output_path=output_path)

    rows = _read(output_path)
    assert [(row["title"], row["completed_at"]) for row in rows] == [
        ("Read", "2024-01-02T07:30:00"),
        ("Read", "2024-01-03T07:30:00"),
        ("Call mum", ""),
    ]
    assert rows[2]["period"] == "weekly"
    assert rows[0]["created_at"] == "2024-01-01T00:00:00"


def test_export_journal_csv_oldest_first(tmp_path):
    """Journal rows are sorted by entry date and keep multi-line content intact."""

    entries = [
        JournalEntry(user_id=1, entry_date=date(2024, 1, 5), content="later",
                     updated_at=datetime(2024, 1, 5, 21)),
        JournalEntry(user_id=1, entry_date=date(2024, 1, 4), content="line one\nline, two",
                     updated_at=datetime(2024, 1, 4, 22)),
    ]

    output_path = tmp_path / "journal.csv"
    export_csv.export_journal_csv(entries=entries, output_path=output_path)

    rows = _read(output_path)
    assert [row["entry_date"] for row in rows] == ["2024-01-04", "2024-01-05"]
    assert rows[0]["content"] == "line one\nline, two"


def test_export_cli_writes_both_files(app, tmp_path):
    """The ``trak-export`` command writes habits.csv and journal.csv for a user."""

    ctx = app.extensions["trak"]
    user = auth.create_user(username="grace", password="hopper1", session_factory=ctx.session_factory)
    habit = ctx.habit_repo.create(Habit(user_id=user.id, title="Walk"), user_id=user.id)
    ctx.habit_repo.add_completion(
        HabitCompletion(user_id=user.id, habit_id=habit.id, completed_at=datetime(2024, 1, 2)),
        user_id=user.id,
    )
    ctx.journal_repo.upsert_for_date(date(2024, 1, 2), "Walked far", user_id=user.id)

    out_dir = tmp_path / "exports"
    result = app.test_cli_runner().invoke(
        args=["trak-export", "--user", "grace", "--out", str(out_dir)]
    )

    assert result.exit_code == 0, result.output
    assert "habits.csv" in result.output
    assert [row["title"] for row in _read(out_dir / "habits.csv")] == ["Walk"]
    assert [row["content"] for row in _read(out_dir / "journal.csv")] == ["Walked far"]


def test_export_cli_unknown_user(app):
    result = app.test_cli_runner().invoke(args=["trak-export", "--user", "nobody"])

    assert result.exit_code != 0
    assert "No such user" in result.output
