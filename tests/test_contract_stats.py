from __future__ import annotations

import datetime as dt
import unittest

from calgrid.model import Event
from calgrid.stats import BUCKETS, calendar_stats

REF = dt.datetime(2026, 10, 19, 10, 0)


def _ev(eid: str, start: dt.datetime, category: str = "meeting", minutes: int = 30) -> Event:
    return Event(id=eid, title=eid, start=start, end=start + dt.timedelta(minutes=minutes), category=category)


class TestCalendarStatsContract(unittest.TestCase):
    def _events(self):
        return [
            _ev("m_today_1", REF.replace(hour=9)),
            _ev("m_today_2", REF.replace(hour=11)),
            _ev("m_today_3", REF.replace(hour=14)),
            _ev("e_next_week_1", dt.datetime(2026, 10, 26, 10), "event"),
            _ev("e_next_week_2", dt.datetime(2026, 10, 27, 15), "event"),
            _ev("m_thursday", dt.datetime(2026, 10, 22, 9)),
            _ev("m_horizon", dt.datetime(2026, 10, 26, 0, 0)),
            _ev("m_past_horizon", dt.datetime(2026, 10, 26, 9)),
            _ev("m_last_month", dt.datetime(2026, 9, 30, 16)),
            _ev("t_early_october", dt.datetime(2026, 10, 5, 12), "task"),
        ]

    def test_today_meetings_and_totals(self) -> None:
        s = calendar_stats(self._events(), REF)
        self.assertEqual(s.today_meetings, 3)
        self.assertEqual(s.total_events, 2)
        self.assertEqual(s.total_meetings, 7)
        self.assertEqual(s.total_tasks, 1)

    def test_week_month_upcoming(self) -> None:
        s = calendar_stats(self._events(), REF)
        # Week is Sunday 2026-10-18 .. Saturday 2026-10-24.
        self.assertEqual(s.week_meetings, 4)
        self.assertEqual(s.month_meetings, 6)
        # Closed range [2026-10-19 00:00, 2026-10-26 00:00].
        self.assertEqual(s.upcoming_meetings, 5)

    def test_bucket_breakdown(self) -> None:
        s = calendar_stats(self._events(), REF)
        self.assertEqual(set(s.buckets), set(BUCKETS))
        self.assertEqual(s.buckets["week"], {"meeting": 4, "event": 0, "task": 0})
        self.assertEqual(s.buckets["month"], {"meeting": 6, "event": 2, "task": 1})
        self.assertEqual(s.buckets["upcoming"]["event"], 0)
        self.assertEqual(s.by_category, {"meeting": 7, "event": 2, "task": 1})

    def test_aware_events_with_naive_reference(self) -> None:
        utc = dt.timezone.utc
        evs = [
            _ev("a", dt.datetime(2026, 10, 19, 9, tzinfo=utc)),
            _ev("b", dt.datetime(2026, 10, 19, 15, tzinfo=utc)),
            _ev("c", dt.datetime(2026, 10, 22, 9, tzinfo=utc)),
            _ev("d", dt.datetime(2026, 11, 2, 9, tzinfo=utc)),
        ]
        s = calendar_stats(evs, dt.datetime(2026, 10, 19))
        self.assertEqual(
            (s.today_meetings, s.week_meetings, s.month_meetings, s.upcoming_meetings, s.total_meetings),
            (2, 3, 3, 3, 4),
        )

    def test_empty(self) -> None:
        s = calendar_stats([], REF)
        self.assertEqual(
            (s.total_meetings, s.total_events, s.total_tasks, s.today_meetings, s.upcoming_meetings),
            (0, 0, 0, 0, 0),
        )
        d = s.to_dict()
        self.assertEqual(d["buckets"]["today"], {"meeting": 0, "event": 0, "task": 0})


if __name__ == "__main__":
    unittest.main(verbosity=2)
