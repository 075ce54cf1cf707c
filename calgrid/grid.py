# calgrid/grid.py
"""Date normalization and calendar grids.

Every function here is total: a value that is not a date/datetime never
raises. `normalize` and the grid builders fall back to today, `date_key`
falls back to EPOCH_DAY_KEY, so one malformed record cannot take down a
whole week or month grid. Callers that need strict input go through
`calgrid.ingest` first.
"""

from __future__ import annotations

import calendar
import datetime as dt
from typing import Any, List, Optional, Tuple

from .model import CalendarDate

EPOCH_DAY_KEY = "1970-01-01"
DAYS_PER_WEEK = 7
MONTH_GRID_CELLS = 42


def is_valid_instant(d: Any) -> bool:
    return isinstance(d, dt.date)


def _today_midnight() -> dt.datetime:
    t = dt.date.today()
    return dt.datetime(t.year, t.month, t.day)


def normalize(d: Any) -> dt.datetime:
    """`d` truncated to midnight; today's midnight when `d` is not a date."""
    if isinstance(d, dt.datetime):
        return d.replace(hour=0, minute=0, second=0, microsecond=0)
    if isinstance(d, dt.date):
        return dt.datetime(d.year, d.month, d.day)
    return _today_midnight()


def align(bound: dt.datetime, like: dt.datetime) -> dt.datetime:
    """`bound` re-tagged to match whether `like` is aware.

    Grid bounds are built from the anchor's wall-clock fields, so an aware
    event is compared against the same wall-clock bound in its own tzinfo.
    """
    if (bound.tzinfo is None) == (like.tzinfo is None):
        return bound
    return bound.replace(tzinfo=like.tzinfo)


def date_key(d: Any) -> str:
    """Canonical "YYYY-MM-DD" key used for every day comparison."""
    if not isinstance(d, dt.date):
        return EPOCH_DAY_KEY
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def same_day(a: Any, b: Any) -> bool:
    return date_key(a) == date_key(b)


def minutes_since_midnight(d: dt.datetime) -> float:
    return d.hour * 60 + d.minute + d.second / 60.0 + d.microsecond / 60_000_000.0


def day_bounds(d: Any) -> Tuple[dt.datetime, dt.datetime]:
    """Half-open [midnight, next midnight) range of the day containing `d`."""
    start = normalize(d)
    return start, start + dt.timedelta(days=1)


def week_start(d: Any) -> dt.datetime:
    """Midnight of the Sunday that opens the week containing `d`."""
    base = normalize(d)
    # weekday(): Monday=0 .. Sunday=6
    return base - dt.timedelta(days=(base.weekday() + 1) % 7)


def week_dates(d: Any) -> List[dt.datetime]:
    start = week_start(d)
    return [start + dt.timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def days_in_month(d: Any) -> int:
    base = normalize(d)
    return calendar.monthrange(base.year, base.month)[1]


def month_bounds(d: Any) -> Tuple[dt.datetime, dt.datetime]:
    """Half-open [first of month, first of next month) range."""
    first = normalize(d).replace(day=1)
    return first, first + dt.timedelta(days=days_in_month(first))


def month_dates(d: Any, today: Optional[Any] = None) -> List[CalendarDate]:
    """The 6x7 Sunday-start grid around the month containing `d`.

    Always 42 cells: the month itself, padded in front with the tail of the
    previous month and at the back with the head of the next one.
    """
    first, _next_first = month_bounds(d)
    grid_start = week_start(first)
    today_key = date_key(today if is_valid_instant(today) else dt.date.today())

    cells: List[CalendarDate] = []
    for i in range(MONTH_GRID_CELLS):
        day = grid_start + dt.timedelta(days=i)
        cells.append(
            CalendarDate(
                date=day,
                is_today=date_key(day) == today_key,
                is_current_month=(day.year, day.month) == (first.year, first.month),
            )
        )
    return cells


__all__ = [
    "DAYS_PER_WEEK",
    "EPOCH_DAY_KEY",
    "MONTH_GRID_CELLS",
    "date_key",
    "day_bounds",
    "days_in_month",
    "align",
    "is_valid_instant",
    "minutes_since_midnight",
    "month_bounds",
    "month_dates",
    "normalize",
    "same_day",
    "week_dates",
    "week_start",
]
