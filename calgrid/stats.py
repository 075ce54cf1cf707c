# calgrid/stats.py
from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List

from .grid import align, date_key, month_bounds, normalize, week_start
from .model import CATEGORIES, CATEGORY_EVENT, CATEGORY_MEETING, CATEGORY_TASK, CalendarStats, Event

BUCKET_TODAY = "today"
BUCKET_WEEK = "week"
BUCKET_MONTH = "month"
BUCKET_UPCOMING = "upcoming"
BUCKETS = (BUCKET_TODAY, BUCKET_WEEK, BUCKET_MONTH, BUCKET_UPCOMING)

UPCOMING_DAYS = 7


def _count(events: List[Event]) -> Dict[str, int]:
    out = {c: 0 for c in CATEGORIES}
    for e in events:
        out[e.category] = out.get(e.category, 0) + 1
    return out


def calendar_stats(events: Iterable[Event], reference: dt.datetime) -> CalendarStats:
    """Category counts overall and for today/week/month/upcoming around `reference`.

    Buckets are keyed on each event's start. "upcoming" is the closed range
    [reference midnight, reference midnight + 7 days].
    """
    evs = list(events)
    today = normalize(reference)
    today_key = date_key(today)
    w_start = week_start(today)
    w_end = w_start + dt.timedelta(days=7)
    m_start, m_end = month_bounds(today)
    horizon = today + dt.timedelta(days=UPCOMING_DAYS)

    picked: Dict[str, List[Event]] = {b: [] for b in BUCKETS}
    for e in evs:
        if date_key(e.start) == today_key:
            picked[BUCKET_TODAY].append(e)
        if align(w_start, e.start) <= e.start < align(w_end, e.start):
            picked[BUCKET_WEEK].append(e)
        if align(m_start, e.start) <= e.start < align(m_end, e.start):
            picked[BUCKET_MONTH].append(e)
        if align(today, e.start) <= e.start <= align(horizon, e.start):
            picked[BUCKET_UPCOMING].append(e)

    by_category = _count(evs)
    buckets = {b: _count(picked[b]) for b in BUCKETS}

    return CalendarStats(
        total_meetings=by_category[CATEGORY_MEETING],
        total_events=by_category[CATEGORY_EVENT],
        total_tasks=by_category[CATEGORY_TASK],
        today_meetings=buckets[BUCKET_TODAY][CATEGORY_MEETING],
        week_meetings=buckets[BUCKET_WEEK][CATEGORY_MEETING],
        month_meetings=buckets[BUCKET_MONTH][CATEGORY_MEETING],
        upcoming_meetings=buckets[BUCKET_UPCOMING][CATEGORY_MEETING],
        by_category=by_category,
        buckets=buckets,
    )


__all__ = ["BUCKETS", "UPCOMING_DAYS", "calendar_stats"]
