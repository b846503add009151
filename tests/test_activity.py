"""Tests for heatmap activity aggregation."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from trak.stats.activity import (
    DEFAULT_WINDOW_DAYS,
    ActivityBucket,
    ActivitySummary,
    activity_level,
    aggregate,
    calendar_grid,
    summarize,
)

ANCHOR = date(2024, 1, 10)  # Wednesday


class TestAggregate:
    def test_window_is_inclusive_and_zero_filled(self):
        buckets = aggregate([], window_days=6, anchor=ANCHOR)
        assert [b.day for b in buckets] == [date(2024, 1, d) for d in range(4, 11)]
        assert all(b.count == 0 for b in buckets)

    def test_counts_events_per_day(self):
        events = [
            datetime(2024, 1, 5, 8),
            datetime(2024, 1, 5, 21),
            date(2024, 1, 10),
            datetime(2024, 1, 3, 23, 59),  # before the window
            datetime(2024, 1, 11, 0, 1),  # after the anchor
        ]
        buckets = aggregate(events, window_days=6, anchor=ANCHOR)
        counts = {b.day: b.count for b in buckets}
        assert counts[date(2024, 1, 5)] == 2
        assert counts[date(2024, 1, 10)] == 1
        assert sum(counts.values()) == 3

    def test_weighted_events(self):
        events = [(date(2024, 1, 9), 3), (datetime(2024, 1, 9, 12), 2), date(2024, 1, 9)]
        buckets = aggregate(events, window_days=1, anchor=ANCHOR)
        assert buckets == [ActivityBucket(date(2024, 1, 9), 6), ActivityBucket(date(2024, 1, 10), 0)]

    def test_default_window_covers_a_year(self):
        buckets = aggregate([], anchor=ANCHOR)
        assert len(buckets) == DEFAULT_WINDOW_DAYS + 1 == 365
        assert buckets[-1].day == ANCHOR

    def test_zero_window_is_single_day(self):
        assert aggregate([ANCHOR], window_days=0, anchor=ANCHOR) == [ActivityBucket(ANCHOR, 1)]

    def test_negative_window_rejected(self):
        with pytest.raises(ValueError):
            aggregate([], window_days=-1, anchor=ANCHOR)

    def test_anchor_defaults_to_today(self):
        buckets = aggregate([], window_days=0)
        assert buckets[0].day == date.today()


class TestCalendarGrid:
    def test_partial_weeks_are_padded(self):
        weeks = calendar_grid([date(2024, 1, 4)], window_days=6, anchor=ANCHOR)
        assert len(weeks) == 2
        first, second = weeks
        # Sun Dec 31 .. Wed Jan 3 are before the window
        assert first[:4] == [None, None, None, None]
        assert first[4] == ActivityBucket(date(2024, 1, 4), 1)
        assert first[6].day == date(2024, 1, 6)
        assert second[0].day == date(2024, 1, 7)
        assert second[3].day == ANCHOR
        # Thu Jan 11 .. Sat Jan 13 are after the anchor
        assert second[4:] == [None, None, None]

    def test_window_aligned_to_weeks(self):
        weeks = calendar_grid([], window_days=13, anchor=date(2024, 1, 13))
        assert len(weeks) == 2
        assert all(cell is not None for week in weeks for cell in week)
        assert weeks[0][0].day == date(2023, 12, 31)

    def test_every_week_has_seven_cells(self):
        weeks = calendar_grid([], anchor=ANCHOR)
        assert all(len(week) == 7 for week in weeks)
        assert sum(cell is not None for week in weeks for cell in week) == 365


class TestLevelsAndSummary:
    @pytest.mark.parametrize(
        ("count", "level"),
        [(0, 0), (1, 1), (2, 2), (3, 2), (4, 3), (5, 3), (6, 4), (40, 4)],
    )
    def test_activity_level(self, count, level):
        assert activity_level(count) == level

    def test_summarize(self):
        buckets = aggregate(
            [date(2024, 1, 8), date(2024, 1, 8), date(2024, 1, 10)], window_days=6, anchor=ANCHOR
        )
        assert summarize(buckets) == ActivitySummary(total_days=7, active_days=2, total_count=3)
