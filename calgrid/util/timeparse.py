# calgrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    # 24:00 is allowed so a window can run to the end of the day.
    if not ((0 <= hh <= 23 and 0 <= mm <= 59) or (hh == 24 and mm == 0)):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_workhours(s: str) -> Tuple[int, int]:
    """Parse "08:00-20:00" into (start_min, end_min)."""
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("workhours must be like 08:00-20:00")
    sh, sm = parse_hhmm(parts[0])
    eh, em = parse_hhmm(parts[1])
    start = sh * 60 + sm
    end = eh * 60 + em
    if end <= start:
        raise ValueError("workhours end must be after start")
    return start, end


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def parse_iso_datetime(s: str) -> dt.datetime:
    """ISO 8601 datetime; a trailing "Z" is read as UTC."""
    ss = str(s).strip()
    if ss.endswith(("Z", "z")):
        ss = ss[:-1] + "+00:00"
    return dt.datetime.fromisoformat(ss)
