# calgrid/ingest.py
"""Validated-input boundary.

Raw event records (JSON-ish dicts from the booking store) become `Event`
values here, or are rejected with a typed error. The layout engine itself
never validates; it only ever sees what passed through this module.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from .model import CATEGORIES, Event
from .util.timeparse import parse_iso_datetime
from .util.tz import resolve_tz, to_wall_clock, wall_clock_from_ms

log = logging.getLogger(__name__)

TzLike = Union[str, dt.tzinfo, None]

_START_KEYS = ("start", "startTime", "start_ms")
_END_KEYS = ("end", "endTime", "end_ms")
_CATEGORY_KEYS = ("category", "type")


class EventValidationError(ValueError):
    """Raised when an event record cannot enter the engine."""


@dataclass(frozen=True)
class Rejection:
    index: int
    record_id: Optional[str]
    message: str


@dataclass(frozen=True)
class IngestResult:
    events: List[Event] = field(default_factory=list)
    rejected: List[Rejection] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected


def _tzinfo(tz: TzLike) -> dt.tzinfo:
    if isinstance(tz, dt.tzinfo):
        return tz
    return resolve_tz(tz)


def parse_instant(value: Any, tz: TzLike = "local") -> dt.datetime:
    """Datetime, epoch ms, or ISO 8601 string -> naive wall clock in `tz`."""
    tzinfo = _tzinfo(tz)
    if isinstance(value, bool):
        raise EventValidationError(f"not a timestamp: {value!r}")
    if isinstance(value, dt.datetime):
        return to_wall_clock(value, tzinfo)
    if isinstance(value, int):
        try:
            return wall_clock_from_ms(value, tzinfo)
        except (OverflowError, OSError, ValueError) as ex:
            raise EventValidationError(f"epoch ms out of range: {value!r}") from ex
    if isinstance(value, str) and value.strip():
        try:
            return to_wall_clock(parse_iso_datetime(value), tzinfo)
        except ValueError as ex:
            raise EventValidationError(f"invalid ISO datetime: {value!r}") from ex
    raise EventValidationError(f"not a timestamp: {value!r}")


def _first(record: Dict[str, Any], keys: Iterable[str]) -> Any:
    for k in keys:
        if record.get(k) is not None:
            return record.get(k)
    return None


def _record_id(record: Any) -> Optional[str]:
    if not isinstance(record, dict):
        return None
    rid = record.get("id")
    if isinstance(rid, bool) or not isinstance(rid, (str, int)):
        return None
    return str(rid)


def parse_event(record: Any, tz: TzLike = "local") -> Event:
    if not isinstance(record, dict):
        raise EventValidationError(f"event record must be a dict; got {type(record).__name__}")

    rid = _record_id(record)
    if not rid or not rid.strip():
        raise EventValidationError("id must be a non-empty string or int")

    title = record.get("title")
    if not isinstance(title, str) or not title.strip():
        raise EventValidationError(f"{rid}: title must be a non-empty string")

    raw_start = _first(record, _START_KEYS)
    raw_end = _first(record, _END_KEYS)
    if raw_start is None:
        raise EventValidationError(f"{rid}: start is required")
    if raw_end is None:
        raise EventValidationError(f"{rid}: end is required")
    start = parse_instant(raw_start, tz)
    end = parse_instant(raw_end, tz)
    if end <= start:
        raise EventValidationError(f"{rid}: end must be after start")

    category = _first(record, _CATEGORY_KEYS)
    if category not in CATEGORIES:
        raise EventValidationError(f"{rid}: category must be one of {', '.join(CATEGORIES)}; got {category!r}")

    location = record.get("location")
    if location is not None and not isinstance(location, str):
        raise EventValidationError(f"{rid}: location must be a string")

    attendees = record.get("attendees") or []
    if not isinstance(attendees, list) or not all(isinstance(a, str) for a in attendees):
        raise EventValidationError(f"{rid}: attendees must be a list of strings")

    description = record.get("description")
    status = record.get("status")

    return Event(
        id=rid,
        title=title,
        start=start,
        end=end,
        category=category,
        location=location,
        attendees=tuple(attendees),
        description=description if isinstance(description, str) else None,
        status=status if isinstance(status, str) else None,
    )


def ingest_events(records: Iterable[Any], tz: TzLike = "local") -> IngestResult:
    """Parse every record; bad ones are collected, never raised."""
    tzinfo = _tzinfo(tz)
    events: List[Event] = []
    rejected: List[Rejection] = []

    for i, rec in enumerate(records):
        try:
            events.append(parse_event(rec, tzinfo))
        except EventValidationError as ex:
            rej = Rejection(index=i, record_id=_record_id(rec), message=str(ex))
            log.warning("rejected event record #%d (id=%s): %s", i, rej.record_id, rej.message)
            rejected.append(rej)

    log.debug("ingested %d events, rejected %d", len(events), len(rejected))
    return IngestResult(events=events, rejected=rejected)


def validate_event_records(records: Any, *, label: str = "events", tz: TzLike = "UTC") -> List[str]:
    if not isinstance(records, list):
        return [f"{label}: must be a list"]
    errs: List[str] = []
    for i, rec in enumerate(records):
        try:
            parse_event(rec, tz)
        except EventValidationError as ex:
            errs.append(f"{label}[{i}]: {ex}")
    return errs


def assert_valid_events(records: Any, *, tz: TzLike = "UTC") -> None:
    errs = validate_event_records(records, tz=tz)
    if errs:
        raise EventValidationError("; ".join(errs))


def load_records(obj: Any) -> List[Any]:
    """Accept a bare list or {"events": [...]}."""
    if isinstance(obj, list):
        return obj
    if isinstance(obj, dict) and isinstance(obj.get("events"), list):
        return obj["events"]
    raise EventValidationError('events JSON must be a list or an object with an "events" list')


__all__ = [
    "EventValidationError",
    "IngestResult",
    "Rejection",
    "assert_valid_events",
    "ingest_events",
    "load_records",
    "parse_event",
    "parse_instant",
    "validate_event_records",
]
