"""Recurrence periods and the calendar arithmetic behind them.

Weeks start on Sunday. Month boundaries come from ``calendar.monthrange`` so
the last day of February and year rollovers need no special casing.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Union

Instant = Union[datetime, date]

_END_OF_DAY = time(23, 59, 59, 999999)


class InvalidPeriodError(ValueError):
    """Raised when a recurrence period is not one of the supported values."""


class Period(str, Enum):
    """Supported habit recurrence periods."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def coerce(cls, value: "Period | str") -> "Period":
        """Return the matching period or raise ``InvalidPeriodError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidPeriodError(f"Unknown period: {value!r}") from None


def _as_datetime(instant: Instant) -> datetime:
    if isinstance(instant, datetime):
        return instant
    if isinstance(instant, date):
        return datetime.combine(instant, time.min)
    raise TypeError(f"Expected date or datetime, got {type(instant).__name__}")


def local_date(instant: Instant) -> date:
    """Return the calendar date of ``instant`` on its own wall clock."""

    if isinstance(instant, datetime):
        return instant.date()
    if isinstance(instant, date):
        return instant
    raise TypeError(f"Expected date or datetime, got {type(instant).__name__}")


def week_start(day: date) -> date:
    """Return the Sunday on or before ``day``."""

    return day - timedelta(days=(day.weekday() + 1) % 7)


def period_key(period: Period | str, instant: Instant) -> date:
    """Return the first calendar day of the period bucket containing ``instant``."""

    period = Period.coerce(period)
    day = local_date(instant)
    if period is Period.DAILY:
        return day
    if period is Period.WEEKLY:
        return week_start(day)
    return day.replace(day=1)


def period_index(period: Period | str, instant: Instant) -> int:
    """Return an ordinal for the bucket of ``instant``; adjacent buckets differ by one."""

    period = Period.coerce(period)
    key = period_key(period, instant)
    if period is Period.DAILY:
        return key.toordinal()
    if period is Period.WEEKLY:
        return key.toordinal() // 7
    return key.year * 12 + (key.month - 1)


def start_of_period(period: Period | str, reference: Instant) -> datetime:
    """Return midnight at the start of the period containing ``reference``."""

    start = period_key(period, reference)
    return _as_datetime(reference).replace(
        year=start.year, month=start.month, day=start.day, hour=0, minute=0, second=0, microsecond=0
    )


def end_of_period(period: Period | str, reference: Instant) -> datetime:
    """Return the last representable instant of the period containing ``reference``."""

    period = Period.coerce(period)
    start = period_key(period, reference)
    if period is Period.DAILY:
        last = start
    elif period is Period.WEEKLY:
        last = start + timedelta(days=6)
    else:
        last = start.replace(day=monthrange(start.year, start.month)[1])
    return _as_datetime(reference).replace(
        year=last.year,
        month=last.month,
        day=last.day,
        hour=_END_OF_DAY.hour,
        minute=_END_OF_DAY.minute,
        second=_END_OF_DAY.second,
        microsecond=_END_OF_DAY.microsecond,
    )


def is_consecutive_period(period: Period | str, earlier: Instant, later: Instant) -> bool:
    """Return True when ``later`` falls in the period right after ``earlier``'s.

    Daily and weekly periods compare calendar dates, never elapsed seconds, so
    DST transitions do not matter. Monthly periods compare ``year * 12 + month``
    so December to January of the following year is consecutive.
    """

    return period_index(period, later) - period_index(period, earlier) == 1


__all__ = [
    "Instant",
    "InvalidPeriodError",
    "Period",
    "end_of_period",
    "is_consecutive_period",
    "local_date",
    "period_index",
    "period_key",
    "start_of_period",
    "week_start",
]
