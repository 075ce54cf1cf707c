# calgrid/fmt.py
from __future__ import annotations

import datetime as dt
import math

from .model import MONTHS


def _js_round(x: float) -> int:
    # Half-up rounding (round() in Python is half-to-even).
    return int(math.floor(x + 0.5))


def format_time(d: dt.datetime) -> str:
    """12-hour clock, e.g. 9:05 AM."""
    h12 = d.hour % 12 or 12
    suffix = "AM" if d.hour < 12 else "PM"
    return f"{h12}:{d.minute:02d} {suffix}"


def format_date(d: dt.date) -> str:
    """Short month name, e.g. Oct 19, 2026."""
    return f"{MONTHS[d.month - 1][:3]} {d.day}, {d.year}"


def format_datetime(d: dt.datetime) -> str:
    return f"{format_date(d)} at {format_time(d)}"


def relative_time(d: dt.datetime, now: dt.datetime) -> str:
    diff_s = (d - now).total_seconds()
    minutes = _js_round(diff_s / 60.0)
    hours = _js_round(diff_s / 3600.0)
    days = _js_round(diff_s / 86400.0)

    if minutes < 0:
        ago = abs(minutes)
        if ago < 60:
            return f"{ago} minutes ago"
        if ago < 1440:
            return f"{abs(hours)} hours ago"
        return f"{abs(days)} days ago"

    if minutes < 60:
        return f"in {minutes} minutes"
    if minutes < 1440:
        return f"in {hours} hours"
    if days == 1:
        return "tomorrow"
    return f"in {days} days"


__all__ = ["format_date", "format_datetime", "format_time", "relative_time"]
