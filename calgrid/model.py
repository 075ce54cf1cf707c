# calgrid/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .util.timeparse import parse_workhours

CATEGORY_MEETING = "meeting"
CATEGORY_EVENT = "event"
CATEGORY_TASK = "task"
CATEGORIES: Tuple[str, ...] = (CATEGORY_MEETING, CATEGORY_EVENT, CATEGORY_TASK)
CATEGORY_ALL = "all"

VIEW_DAY = "day"
VIEW_WEEK = "week"
VIEW_MONTH = "month"
VIEW_LIST = "list"
VIEW_MODES: Tuple[str, ...] = (VIEW_DAY, VIEW_WEEK, VIEW_MONTH, VIEW_LIST)

SPAN_CLUSTER = "cluster"
SPAN_OVERLAP = "overlap"
COLUMN_SPANS: Tuple[str, ...] = (SPAN_CLUSTER, SPAN_OVERLAP)


@dataclass(frozen=True)
class Event:
    """A time-ranged calendar entry. Callers guarantee end > start."""

    id: str
    title: str
    start: dt.datetime
    end: dt.datetime
    category: str = CATEGORY_MEETING
    location: Optional[str] = None
    attendees: Tuple[str, ...] = ()
    description: Optional[str] = None
    status: Optional[str] = None

    @property
    def duration_min(self) -> float:
        return (self.end - self.start).total_seconds() / 60.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "category": self.category,
            "location": self.location,
            "attendees": list(self.attendees),
            "description": self.description,
            "status": self.status,
        }


@dataclass(frozen=True)
class WorkingHours:
    start_hour: int = 8
    end_hour: int = 20

    def __post_init__(self) -> None:
        if not (isinstance(self.start_hour, int) and isinstance(self.end_hour, int)):
            raise ValueError("working hours must be whole hours")
        if not (0 <= self.start_hour < self.end_hour <= 24):
            raise ValueError(f"invalid working hours: {self.start_hour}-{self.end_hour}")

    @property
    def start_min(self) -> int:
        return self.start_hour * 60

    @property
    def end_min(self) -> int:
        return self.end_hour * 60

    @classmethod
    def parse(cls, s: str) -> "WorkingHours":
        """Build from "08:00-20:00". Only whole hours are accepted."""
        start_min, end_min = parse_workhours(s)
        if start_min % 60 or end_min % 60:
            raise ValueError(f"working hours must fall on whole hours: {s!r}")
        return cls(start_hour=start_min // 60, end_hour=end_min // 60)

    def label(self) -> str:
        return f"{self.start_hour:02d}:00-{self.end_hour:02d}:00"


@dataclass(frozen=True)
class RowHeightTable:
    """Pixel height of one hour row, per view mode."""

    day: float
    week: float
    month: float

    def for_view(self, view_mode: str) -> float:
        if view_mode == VIEW_DAY:
            return float(self.day)
        if view_mode == VIEW_MONTH:
            return float(self.month)
        return float(self.week)


@dataclass(frozen=True)
class LayoutProfile:
    """Layout constants for one calendar surface."""

    name: str
    working_hours: WorkingHours
    row_heights: RowHeightTable
    min_height: float
    list_height: float = 60.0
    base_z: int = 10
    column_span: str = SPAN_CLUSTER

    def __post_init__(self) -> None:
        if self.min_height < 0 or self.list_height < 0:
            raise ValueError("heights must be non-negative")
        if self.column_span not in COLUMN_SPANS:
            raise ValueError(f"unknown column span: {self.column_span!r}")

    def row_height(self, view_mode: str) -> float:
        return self.row_heights.for_view(view_mode)

    def minimum_height(self, view_mode: str) -> float:
        if view_mode == VIEW_LIST:
            return float(self.list_height)
        return float(self.min_height)


@dataclass(frozen=True)
class Geometry:
    top: float
    height: float
    width: float
    left: float
    z_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "top": self.top,
            "height": self.height,
            "width": self.width,
            "left": self.left,
            "zIndex": self.z_index,
        }


@dataclass(frozen=True)
class PositionedEvent:
    event: Event
    day_key: str
    column: int
    total_columns: int
    geometry: Geometry

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def title(self) -> str:
        return self.event.title

    @property
    def start(self) -> dt.datetime:
        return self.event.start

    @property
    def end(self) -> dt.datetime:
        return self.event.end

    @property
    def category(self) -> str:
        return self.event.category

    @property
    def top(self) -> float:
        return self.geometry.top

    @property
    def height(self) -> float:
        return self.geometry.height

    @property
    def width(self) -> float:
        return self.geometry.width

    @property
    def left(self) -> float:
        return self.geometry.left

    @property
    def z_index(self) -> int:
        return self.geometry.z_index

    def to_dict(self) -> Dict[str, Any]:
        out = self.event.to_dict()
        out.update(
            {
                "day_key": self.day_key,
                "column": self.column,
                "total_columns": self.total_columns,
                "position": self.geometry.to_dict(),
            }
        )
        return out


@dataclass(frozen=True)
class CalendarDate:
    date: dt.datetime
    is_today: bool
    is_current_month: bool

    @property
    def key(self) -> str:
        return self.date.strftime("%Y-%m-%d")

    @property
    def day_of_week(self) -> str:
        return DAYS_OF_WEEK[(self.date.weekday() + 1) % 7]

    @property
    def day_of_month(self) -> int:
        return self.date.day

    @property
    def month_name(self) -> str:
        return MONTHS[self.date.month - 1]

    @property
    def year(self) -> int:
        return self.date.year

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.key,
            "day_of_week": self.day_of_week,
            "day_of_month": self.day_of_month,
            "month": self.month_name,
            "year": self.year,
            "is_today": self.is_today,
            "is_current_month": self.is_current_month,
        }


@dataclass(frozen=True)
class CalendarStats:
    total_meetings: int
    total_events: int
    total_tasks: int
    today_meetings: int
    week_meetings: int
    month_meetings: int
    upcoming_meetings: int
    by_category: Dict[str, int] = field(default_factory=dict)
    buckets: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_meetings": self.total_meetings,
            "total_events": self.total_events,
            "total_tasks": self.total_tasks,
            "today_meetings": self.today_meetings,
            "week_meetings": self.week_meetings,
            "month_meetings": self.month_meetings,
            "upcoming_meetings": self.upcoming_meetings,
            "by_category": dict(self.by_category),
            "buckets": {k: dict(v) for k, v in self.buckets.items()},
        }


@dataclass(frozen=True)
class TimeSlot:
    hour: int
    minute: int
    display: str
    is_current_hour: bool = False


# Sunday-first, matching the week grid.
DAYS_OF_WEEK: Tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

MONTHS: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


__all__ = [
    "CATEGORIES",
    "CATEGORY_ALL",
    "CATEGORY_EVENT",
    "CATEGORY_MEETING",
    "CATEGORY_TASK",
    "COLUMN_SPANS",
    "CalendarDate",
    "CalendarStats",
    "DAYS_OF_WEEK",
    "Event",
    "Geometry",
    "LayoutProfile",
    "MONTHS",
    "PositionedEvent",
    "RowHeightTable",
    "SPAN_CLUSTER",
    "SPAN_OVERLAP",
    "TimeSlot",
    "VIEW_DAY",
    "VIEW_LIST",
    "VIEW_MODES",
    "VIEW_MONTH",
    "VIEW_WEEK",
    "WorkingHours",
]
