from __future__ import annotations

import dataclasses
import datetime as dt
import unittest

from calgrid.config import AGENDA_PROFILE, SKED_PROFILE
from calgrid.model import WorkingHours
from calgrid.nowline import OUTSIDE_WORKING_HOURS, current_time_offset, current_time_position

DAY = dt.datetime(2026, 10, 19)


class TestCurrentTimeIndicatorContract(unittest.TestCase):
    def test_outside_working_hours_is_sentinel(self) -> None:
        wh = WorkingHours(8, 20)
        for hh, mm in ((6, 0), (7, 59), (20, 1), (23, 30), (0, 0)):
            self.assertEqual(current_time_offset(DAY.replace(hour=hh, minute=mm), wh, 128), OUTSIDE_WORKING_HOURS)
        self.assertEqual(OUTSIDE_WORKING_HOURS, -1)

    def test_inside_window(self) -> None:
        wh = WorkingHours(8, 20)
        self.assertEqual(current_time_offset(DAY.replace(hour=8), wh, 128), 0.0)
        self.assertAlmostEqual(current_time_offset(DAY.replace(hour=10), wh, 128), 256.0)
        self.assertAlmostEqual(current_time_offset(DAY.replace(hour=10, minute=15), wh, 128), 288.0)

    def test_window_end_is_inclusive(self) -> None:
        self.assertAlmostEqual(current_time_offset(DAY.replace(hour=20), WorkingHours(8, 20), 128), 12 * 128.0)

    def test_position_uses_day_row_height(self) -> None:
        now = DAY.replace(hour=10)
        self.assertAlmostEqual(current_time_position(now, SKED_PROFILE), 256.0)
        self.assertAlmostEqual(current_time_position(now, AGENDA_PROFILE), 200.0)

        early = dataclasses.replace(SKED_PROFILE, working_hours=WorkingHours(6, 18))
        self.assertAlmostEqual(current_time_position(DAY.replace(hour=6, minute=30), early), 64.0)
        self.assertEqual(current_time_position(DAY.replace(hour=6, minute=30), SKED_PROFILE), -1)


if __name__ == "__main__":
    unittest.main(verbosity=2)
