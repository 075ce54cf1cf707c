#!/usr/bin/env python3
from __future__ import annotations

import argparse
import datetime as dt

from calgrid.cli import add_common_args, load_input, rejected_dicts, resolve_clock, setup_logging, write_json
from calgrid.filters import next_upcoming
from calgrid.fmt import format_datetime, relative_time
from calgrid.grid import date_key
from calgrid.stats import calendar_stats
from calgrid.util.console import die

TOOL = "calgrid-event-stats"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog=TOOL, description="Count events by category and by today/week/month/upcoming.")
    add_common_args(ap)
    args = ap.parse_args(argv)

    setup_logging(args.verbose)

    try:
        tzinfo, now, anchor = resolve_clock(args)
    except ValueError as e:
        return die(TOOL, str(e))

    res, rc = load_input(TOOL, args, tzinfo)
    if res is None:
        return rc

    reference = dt.datetime(anchor.year, anchor.month, anchor.day)
    stats = calendar_stats(res.events, reference)

    nxt = next_upcoming(res.events, now)
    upcoming = None
    if nxt is not None:
        upcoming = {
            "id": nxt.id,
            "title": nxt.title,
            "when": format_datetime(nxt.start),
            "relative": relative_time(nxt.start, now),
        }

    out = {
        "reference": date_key(reference),
        "stats": stats.to_dict(),
        "next": upcoming,
        "rejected": rejected_dicts(res),
    }
    write_json(out, args.out, pretty=args.pretty)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
