from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional, Tuple

from .grid import date_key, month_dates, normalize, week_dates
from .model import VIEW_MONTH, VIEW_WEEK, CalendarDate

GridKey = Tuple[str, str, str, str]


class GridCache:
    """Caller-owned memo of week/month grids.

    Keyed by (anchor day, view mode, today, profile). The anchor goes through
    `normalize` first, so the key always names the grid that was built. Nothing
    in calgrid caches on its own; a rendering loop that wants reuse creates one
    of these and keeps it for as long as it likes. Returned lists are copies.
    """

    def __init__(self, profile: str = "") -> None:
        self._profile = profile
        self._weeks: Dict[GridKey, List[dt.datetime]] = {}
        self._months: Dict[GridKey, List[CalendarDate]] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._weeks) + len(self._months)

    def week(self, anchor: Any) -> List[dt.datetime]:
        day = normalize(anchor)
        key = (date_key(day), VIEW_WEEK, "", self._profile)
        if key in self._weeks:
            self.hits += 1
        else:
            self.misses += 1
            self._weeks[key] = week_dates(day)
        return list(self._weeks[key])

    def month(self, anchor: Any, today: Optional[Any] = None) -> List[CalendarDate]:
        day = normalize(anchor)
        today_val = today if isinstance(today, dt.date) else dt.date.today()
        key = (date_key(day), VIEW_MONTH, date_key(today_val), self._profile)
        if key in self._months:
            self.hits += 1
        else:
            self.misses += 1
            self._months[key] = month_dates(day, today=today_val)
        return list(self._months[key])

    def clear(self) -> None:
        self._weeks.clear()
        self._months.clear()
        self.hits = 0
        self.misses = 0


__all__ = ["GridCache"]
