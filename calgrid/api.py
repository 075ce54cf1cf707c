"""calgrid.api

Stable *library* entrypoint for calgrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Optional, Union

from calgrid.cache import GridCache
from calgrid.cluster import cluster_events, events_overlap
from calgrid.columns import ColumnSlot, assign_columns
from calgrid.config import AGENDA_PROFILE, SKED_PROFILE, event_color, get_profile
from calgrid.filters import by_category, by_date_range, events_in_week, events_on_day, next_upcoming
from calgrid.fmt import format_date, format_datetime, format_time, relative_time
from calgrid.geometry import event_geometry, position_event
from calgrid.grid import EPOCH_DAY_KEY, date_key, day_bounds, month_dates, normalize, week_dates
from calgrid.ingest import (
    EventValidationError,
    IngestResult,
    assert_valid_events,
    ingest_events,
    load_records,
    parse_event,
    validate_event_records,
)
from calgrid.layout import CalendarLayout, layout_day, layout_events, layout_list, layout_month, layout_week
from calgrid.model import (
    CalendarDate,
    CalendarStats,
    Event,
    Geometry,
    LayoutProfile,
    PositionedEvent,
    RowHeightTable,
    TimeSlot,
    WorkingHours,
)
from calgrid.nowline import OUTSIDE_WORKING_HOURS, current_time_offset, current_time_position
from calgrid.slots import is_within_working_hours, next_available_slot, time_slots, validate_time_range
from calgrid.stats import calendar_stats
from calgrid.util.tz import now_wall_clock, resolve_tz

JsonPath = Union[str, Path]


def load_events_from_json(path: JsonPath, *, tz: Optional[str] = "local") -> IngestResult:
    """Read an events JSON file (list or {"events": [...]}) through ingestion."""
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    return ingest_events(load_records(obj), tz=tz)


def layout_json(
    path: JsonPath,
    view_mode: str,
    anchor: dt.date,
    *,
    profile: Union[str, LayoutProfile, None] = None,
    category: str = "all",
    tz: Optional[str] = "local",
) -> CalendarLayout:
    """Ingest a JSON file and lay it out in one call. Rejected records are dropped."""
    prof = profile if isinstance(profile, LayoutProfile) else get_profile(profile)
    res = load_events_from_json(path, tz=tz)
    today = now_wall_clock(resolve_tz(tz)).date()
    return layout_events(res.events, view_mode, anchor, prof, category=category, today=today)


def describe(obj: Any) -> Any:
    """JSON-ready form of engine results (dataclasses, lists, dicts of them)."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, dict):
        return {k: describe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [describe(v) for v in obj]
    if isinstance(obj, dt.datetime):
        return obj.isoformat()
    return obj


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
_PUBLIC_EXPORTS = (
    "AGENDA_PROFILE",
    "CalendarDate",
    "CalendarLayout",
    "CalendarStats",
    "ColumnSlot",
    "EPOCH_DAY_KEY",
    "Event",
    "EventValidationError",
    "Geometry",
    "GridCache",
    "IngestResult",
    "LayoutProfile",
    "OUTSIDE_WORKING_HOURS",
    "PositionedEvent",
    "RowHeightTable",
    "SKED_PROFILE",
    "TimeSlot",
    "WorkingHours",
    "assert_valid_events",
    "assign_columns",
    "by_category",
    "by_date_range",
    "calendar_stats",
    "cluster_events",
    "current_time_offset",
    "current_time_position",
    "date_key",
    "day_bounds",
    "describe",
    "event_color",
    "event_geometry",
    "events_in_week",
    "events_on_day",
    "events_overlap",
    "format_date",
    "format_datetime",
    "format_time",
    "get_profile",
    "ingest_events",
    "is_within_working_hours",
    "layout_day",
    "layout_events",
    "layout_json",
    "layout_list",
    "layout_month",
    "layout_week",
    "load_events_from_json",
    "month_dates",
    "next_available_slot",
    "next_upcoming",
    "normalize",
    "parse_event",
    "position_event",
    "relative_time",
    "time_slots",
    "validate_event_records",
    "validate_time_range",
    "week_dates",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
