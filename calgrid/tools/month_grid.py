#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import Any, Dict, List

from calgrid.cli import add_common_args, load_input, rejected_dicts, resolve_clock, setup_logging, write_json
from calgrid.grid import date_key, month_dates
from calgrid.layout import day_segments
from calgrid.model import Event
from calgrid.util.console import die

TOOL = "calgrid-month-grid"


def _cells(anchor: Any, today: Any, events: List[Event]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for cell in month_dates(anchor, today=today):
        row = cell.to_dict()
        row["event_ids"] = [seg.event.id for seg in day_segments(events, cell.date)]
        out.append(row)
    return out


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog=TOOL, description="Emit the 42-cell month grid, optionally with event ids per day.")
    add_common_args(ap, require_input=False)
    args = ap.parse_args(argv)

    setup_logging(args.verbose)

    try:
        tzinfo, now, anchor = resolve_clock(args)
    except ValueError as e:
        return die(TOOL, str(e))

    events: List[Event] = []
    rejected: List[Dict[str, Any]] = []
    if args.in_json:
        res, rc = load_input(TOOL, args, tzinfo)
        if res is None:
            return rc
        events = res.events
        rejected = rejected_dicts(res)

    cells = _cells(anchor, now.date(), events)
    out = {
        "anchor": date_key(anchor),
        "today": date_key(now),
        "weeks": [cells[i : i + 7] for i in range(0, len(cells), 7)],
        "rejected": rejected,
    }
    write_json(out, args.out, pretty=args.pretty)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
