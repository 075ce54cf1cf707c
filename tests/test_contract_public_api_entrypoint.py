from __future__ import annotations

import datetime as dt
import json
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]


class TestPublicApiEntrypointContract(unittest.TestCase):
    def test_layout_fixture_through_package(self) -> None:
        import calgrid
        from calgrid import describe, layout_json

        fixture = REPO_ROOT / "tests" / "fixtures" / "events_week.json"
        self.assertTrue(fixture.exists(), f"missing fixture: {fixture}")

        with self.assertLogs("calgrid.ingest", level="WARNING"):
            layout = layout_json(fixture, "day", dt.date(2026, 10, 19), profile="agenda", tz="UTC")
        ids = {p.id: p for p in layout.items}
        self.assertEqual(sorted(ids), ["m1", "m2"])
        self.assertEqual((ids["m1"].total_columns, ids["m2"].total_columns), (2, 2))
        # agenda day rows are 100px
        self.assertAlmostEqual(ids["m1"].top, 100.0)

        doc = describe(layout)
        json.dumps(doc)
        self.assertEqual(doc["anchor"], "2026-10-19")

        self.assertTrue(hasattr(calgrid, "layout_events"))
        self.assertTrue(hasattr(calgrid, "__version__"))

    def test_layout_json_today_follows_tz(self) -> None:
        import calgrid.api as api

        fixture = REPO_ROOT / "tests" / "fixtures" / "events_week.json"
        with patch("calgrid.api.now_wall_clock", return_value=dt.datetime(2026, 10, 20, 0, 30)) as clock, patch(
            "calgrid.api.layout_events", wraps=api.layout_events
        ) as le, self.assertLogs("calgrid.ingest", level="WARNING"):
            api.layout_json(fixture, "month", dt.date(2026, 10, 19), tz="+14:00")

        self.assertEqual(clock.call_args.args[0].utcoffset(None), dt.timedelta(hours=14))
        self.assertEqual(le.call_args.kwargs["today"], dt.date(2026, 10, 20))

    def test_describe_nested(self) -> None:
        from calgrid import Event, describe

        ev = Event(id="a", title="A", start=dt.datetime(2026, 10, 19, 9), end=dt.datetime(2026, 10, 19, 10))
        out = describe({"x": [ev], "when": dt.datetime(2026, 10, 19, 8), "n": 3})
        self.assertEqual(out["x"][0]["id"], "a")
        self.assertEqual(out["when"], "2026-10-19T08:00:00")
        self.assertEqual(out["n"], 3)


if __name__ == "__main__":
    unittest.main(verbosity=2)
