# calgrid/filters.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

from .grid import align, day_bounds, week_start
from .model import CATEGORY_ALL, Event


def by_date_range(events: Iterable[Event], start: dt.datetime, end: dt.datetime) -> List[Event]:
    """Events whose start or end falls inside [start, end). Input order is kept."""
    out: List[Event] = []
    for e in events:
        lo = align(start, e.start)
        hi = align(end, e.start)
        if lo <= e.start < hi or lo <= e.end < hi:
            out.append(e)
    return out


def by_category(events: Iterable[Event], category: str) -> List[Event]:
    if category == CATEGORY_ALL:
        return list(events)
    return [e for e in events if e.category == category]


def events_on_day(events: Iterable[Event], day: dt.datetime) -> List[Event]:
    start, end = day_bounds(day)
    return by_date_range(events, start, end)


def events_in_week(events: Iterable[Event], day: dt.datetime) -> List[Event]:
    start = week_start(day)
    return by_date_range(events, start, start + dt.timedelta(days=7))


def next_upcoming(events: Iterable[Event], now: dt.datetime) -> Optional[Event]:
    """Earliest event starting strictly after `now`; ties keep input order."""
    best: Optional[Event] = None
    for e in events:
        if e.start <= align(now, e.start):
            continue
        if best is None or e.start < best.start:
            best = e
    return best


__all__ = ["by_category", "by_date_range", "events_in_week", "events_on_day", "next_upcoming"]
