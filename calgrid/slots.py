# calgrid/slots.py
"""Hourly row labels and free-slot search."""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

from .cluster import Span, events_overlap
from .grid import align
from .config import DEFAULT_WORKING_HOURS
from .model import Event, TimeSlot, WorkingHours

HOURS_PER_DAY = 24
SEARCH_HOURS = 24
FALLBACK_HOUR = 9


def hour_label(hour: int) -> str:
    """12-hour clock label: 0 -> "12:00 AM", 13 -> "1:00 PM"."""
    h = hour % 24
    suffix = "AM" if h < 12 else "PM"
    h12 = h % 12 or 12
    return f"{h12}:00 {suffix}"


def time_slots(now: Optional[dt.datetime] = None) -> List[TimeSlot]:
    current_hour = (now or dt.datetime.now()).hour
    return [
        TimeSlot(hour=h, minute=0, display=hour_label(h), is_current_hour=h == current_hour)
        for h in range(HOURS_PER_DAY)
    ]


def is_within_working_hours(t: dt.datetime, working_hours: WorkingHours = DEFAULT_WORKING_HOURS) -> bool:
    # Hour granular and inclusive at both ends.
    return working_hours.start_hour <= t.hour <= working_hours.end_hour


def validate_time_range(start: dt.datetime, end: dt.datetime) -> bool:
    return end > start


def next_available_slot(
    events: Iterable[Event],
    now: dt.datetime,
    duration_min: int = 60,
    preferred_start: Optional[dt.datetime] = None,
    working_hours: WorkingHours = DEFAULT_WORKING_HOURS,
) -> dt.datetime:
    """First conflict-free start on the hour after `preferred_start or now`.

    Looks at the next 24 whole hours; a candidate qualifies when it overlaps
    no event and its hour is inside the working window. With nothing free,
    falls back to 09:00 on the following day.
    """
    if duration_min <= 0:
        raise ValueError("duration_min must be positive")

    evs = list(events)
    base = (preferred_start or now).replace(minute=0, second=0, microsecond=0) + dt.timedelta(hours=1)
    span = dt.timedelta(minutes=duration_min)

    for i in range(SEARCH_HOURS):
        start = base + dt.timedelta(hours=i)
        if any(events_overlap(Span(align(start, e.start), align(start + span, e.start)), e) for e in evs):
            continue
        if is_within_working_hours(start, working_hours):
            return start

    next_day = base + dt.timedelta(days=1)
    return next_day.replace(hour=FALLBACK_HOUR, minute=0, second=0, microsecond=0)


__all__ = [
    "hour_label",
    "is_within_working_hours",
    "next_available_slot",
    "time_slots",
    "validate_time_range",
]
