# calgrid/layout.py
"""Day/week/month/list layout pipeline.

filter by category -> split per day (clipped to the day) -> cluster ->
assign columns -> geometry. Nothing is cached; each call recomputes.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .cluster import STRATEGY_SWEEP, cluster_events
from .columns import assign_columns
from .filters import by_category
from .geometry import position_event
from .grid import align, date_key, day_bounds, month_dates, normalize, week_dates
from .model import (
    CATEGORY_ALL,
    VIEW_DAY,
    VIEW_LIST,
    VIEW_MODES,
    VIEW_MONTH,
    VIEW_WEEK,
    Event,
    LayoutProfile,
    PositionedEvent,
)


@dataclass(frozen=True)
class DaySegment:
    """The part of an event that falls inside one day."""

    event: Event
    start: dt.datetime
    end: dt.datetime


@dataclass(frozen=True)
class CalendarLayout:
    view_mode: str
    anchor_key: str
    days: Dict[str, List[PositionedEvent]] = field(default_factory=dict)
    items: List[PositionedEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "view_mode": self.view_mode,
            "anchor": self.anchor_key,
            "days": {k: [p.to_dict() for p in v] for k, v in self.days.items()},
            "items": [p.to_dict() for p in self.items],
        }


def day_segments(events: Iterable[Event], day: Any) -> List[DaySegment]:
    """Clip every event touching `day` to [midnight, next midnight)."""
    d_start, d_end = day_bounds(day)
    out: List[DaySegment] = []
    for ev in events:
        lo = align(d_start, ev.start)
        hi = align(d_end, ev.start)
        if not (ev.start < hi and ev.end > lo):
            continue
        s = max(ev.start, lo)
        e = min(ev.end, hi)
        if e > s:
            out.append(DaySegment(event=ev, start=s, end=e))
    return out


def layout_day(
    events: Iterable[Event],
    day: Any,
    profile: LayoutProfile,
    view_mode: str = VIEW_DAY,
    *,
    strategy: str = STRATEGY_SWEEP,
) -> List[PositionedEvent]:
    out: List[PositionedEvent] = []
    for cluster in cluster_events(day_segments(events, day), strategy=strategy):
        for slot in assign_columns(cluster, span=profile.column_span):
            seg = slot.event
            out.append(
                position_event(
                    seg.event,
                    slot.column,
                    slot.total_columns,
                    view_mode,
                    profile,
                    start=seg.start,
                    end=seg.end,
                )
            )
    return out


def layout_week(
    events: Iterable[Event],
    anchor: Any,
    profile: LayoutProfile,
    *,
    strategy: str = STRATEGY_SWEEP,
) -> Dict[str, List[PositionedEvent]]:
    evs = list(events)
    return {date_key(d): layout_day(evs, d, profile, VIEW_WEEK, strategy=strategy) for d in week_dates(anchor)}


def layout_month(
    events: Iterable[Event],
    anchor: Any,
    profile: LayoutProfile,
    *,
    today: Optional[Any] = None,
    strategy: str = STRATEGY_SWEEP,
) -> Dict[str, List[PositionedEvent]]:
    evs = list(events)
    return {
        cell.key: layout_day(evs, cell.date, profile, VIEW_MONTH, strategy=strategy)
        for cell in month_dates(anchor, today=today)
    }


def layout_list(events: Iterable[Event], profile: LayoutProfile) -> List[PositionedEvent]:
    ordered = sorted(events, key=lambda e: e.start)
    return [position_event(ev, 0, 1, VIEW_LIST, profile) for ev in ordered]


def layout_events(
    events: Iterable[Event],
    view_mode: str,
    anchor: Any,
    profile: LayoutProfile,
    *,
    category: str = CATEGORY_ALL,
    today: Optional[Any] = None,
    strategy: str = STRATEGY_SWEEP,
) -> CalendarLayout:
    """Lay out `events` for one view around `anchor`."""
    if view_mode not in VIEW_MODES:
        raise ValueError(f"unknown view mode: {view_mode!r}")

    evs = by_category(events, category)
    anchor_key = date_key(normalize(anchor))

    if view_mode == VIEW_LIST:
        return CalendarLayout(view_mode=view_mode, anchor_key=anchor_key, items=layout_list(evs, profile))

    if view_mode == VIEW_DAY:
        day = normalize(anchor)
        days = {date_key(day): layout_day(evs, day, profile, VIEW_DAY, strategy=strategy)}
    elif view_mode == VIEW_WEEK:
        days = layout_week(evs, anchor, profile, strategy=strategy)
    else:
        days = layout_month(evs, anchor, profile, today=today, strategy=strategy)

    items = [p for day_items in days.values() for p in day_items]
    return CalendarLayout(view_mode=view_mode, anchor_key=anchor_key, days=days, items=items)


__all__ = [
    "CalendarLayout",
    "DaySegment",
    "day_segments",
    "layout_day",
    "layout_events",
    "layout_list",
    "layout_month",
    "layout_week",
]
