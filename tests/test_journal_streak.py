"""Tests for journal streaks and the one-day grace rule."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from trak.stats.journal import journal_streak
from trak.stats.streaks import StreakResult, compute_streak

NOW = datetime(2024, 3, 11, 20, 0)
TODAY = NOW.date()


def _days_back(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=offset) for offset in offsets]


class TestJournalStreak:
    def test_grace_rule_anchors_on_yesterday(self):
        """Ten entries ending yesterday keep a ten-day streak alive today."""
        entries = _days_back(*range(1, 11))
        assert journal_streak(entries, now=NOW) == StreakResult(10, 10)

    def test_anchored_on_today(self):
        entries = _days_back(0, 1, 2)
        assert journal_streak(entries, now=NOW) == StreakResult(3, 3)

    def test_two_day_gap_breaks_streak(self):
        entries = _days_back(2, 3, 4)
        assert journal_streak(entries, now=NOW) == StreakResult(0, 3)

    def test_longest_kept_after_break(self):
        entries = _days_back(0, 5, 6, 7, 8)
        assert journal_streak(entries, now=NOW) == StreakResult(1, 4)

    def test_same_day_counted_once(self):
        entries = [datetime(2024, 3, 11, 8), datetime(2024, 3, 11, 22), date(2024, 3, 10)]
        assert journal_streak(entries, now=NOW) == StreakResult(2, 2)

    def test_no_entries(self):
        assert journal_streak([], now=NOW) == StreakResult(0, 0)

    def test_entries_after_today_are_ignored(self):
        """Future-dated entries count toward neither streak, matching habit streaks."""
        entries = [date(2024, 1, 3), date(2024, 1, 4), date(2024, 1, 5)]
        now = datetime(2024, 1, 3, 9)
        assert journal_streak(entries, now=now) == StreakResult(1, 1)
        assert journal_streak(entries, now=now) == compute_streak(entries, "daily", now=now)
