# calgrid/nowline.py
from __future__ import annotations

import datetime as dt

from .grid import minutes_since_midnight
from .model import LayoutProfile, WorkingHours

OUTSIDE_WORKING_HOURS = -1


def current_time_offset(now: dt.datetime, working_hours: WorkingHours, day_row_height: float) -> float:
    """Pixel offset of the "now" line, or -1 outside [start_hour, end_hour]."""
    total = minutes_since_midnight(now)
    if total < working_hours.start_min or total > working_hours.end_min:
        return OUTSIDE_WORKING_HOURS
    return (total - working_hours.start_min) / 60.0 * float(day_row_height)


def current_time_position(now: dt.datetime, profile: LayoutProfile) -> float:
    # Only the day view draws the line, so the day row height is used for every view.
    return current_time_offset(now, profile.working_hours, profile.row_heights.day)


__all__ = ["OUTSIDE_WORKING_HOURS", "current_time_offset", "current_time_position"]
