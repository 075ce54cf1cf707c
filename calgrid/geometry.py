# calgrid/geometry.py
from __future__ import annotations

import datetime as dt

from .grid import date_key, minutes_since_midnight
from .model import VIEW_LIST, Event, Geometry, LayoutProfile, PositionedEvent


def list_geometry(profile: LayoutProfile) -> Geometry:
    return Geometry(top=0.0, height=float(profile.list_height), width=100.0, left=0.0, z_index=int(profile.base_z))


def event_geometry(
    start: dt.datetime,
    end: dt.datetime,
    column: int,
    total_columns: int,
    view_mode: str,
    profile: LayoutProfile,
) -> Geometry:
    """top/height in pixels from the working-hours start; width/left in percent."""
    if view_mode == VIEW_LIST:
        return list_geometry(profile)

    total_columns = max(1, int(total_columns))
    row_height = profile.row_height(view_mode)

    relative_min = max(0.0, minutes_since_midnight(start) - profile.working_hours.start_min)
    duration_min = (end - start).total_seconds() / 60.0

    top = relative_min / 60.0 * row_height
    height = max(profile.minimum_height(view_mode), duration_min / 60.0 * row_height)
    width = 100.0 / total_columns
    left = column * width

    return Geometry(top=top, height=height, width=width, left=left, z_index=int(profile.base_z) + int(column))


def position_event(
    event: Event,
    column: int,
    total_columns: int,
    view_mode: str,
    profile: LayoutProfile,
    *,
    start: dt.datetime | None = None,
    end: dt.datetime | None = None,
) -> PositionedEvent:
    """Wrap `event` with its geometry.

    `start`/`end` override the event's own range when the caller placed a
    clipped segment (e.g. the part of a multi-day event inside one day).
    """
    seg_start = start if start is not None else event.start
    seg_end = end if end is not None else event.end
    geo = event_geometry(seg_start, seg_end, column, total_columns, view_mode, profile)
    if view_mode == VIEW_LIST:
        column, total_columns = 0, 1
    return PositionedEvent(
        event=event,
        day_key=date_key(seg_start),
        column=int(column),
        total_columns=max(1, int(total_columns)),
        geometry=geo,
    )


__all__ = ["event_geometry", "list_geometry", "position_event"]
