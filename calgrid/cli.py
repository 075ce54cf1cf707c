from __future__ import annotations

import argparse
import dataclasses
import datetime as dt
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .cluster import STRATEGIES, STRATEGY_SWEEP
from .config import ENV_PROFILE, ENV_TZ, ENV_WORKHOURS, env_default, get_profile
from .ingest import EventValidationError, IngestResult, ingest_events, load_records, parse_instant
from .layout import layout_events
from .model import CATEGORIES, CATEGORY_ALL, COLUMN_SPANS, VIEW_MODES, VIEW_WEEK, LayoutProfile
from .nowline import current_time_position
from .util.console import die
from .util.timeparse import parse_date_yyyy_mm_dd
from .util.tz import normalize_tz_name, now_wall_clock, resolve_tz

TOOL = "calgrid"


def add_common_args(ap: argparse.ArgumentParser, *, require_input: bool = True) -> None:
    """Flags shared by calgrid and the calgrid.tools.* entrypoints."""
    ap.add_argument(
        "--in",
        dest="in_json",
        required=require_input,
        default=None,
        help='Events JSON path (list or {"events": [...]})',
    )
    ap.add_argument("--out", default="-", help="Output JSON path (default: stdout)")
    ap.add_argument("--date", default=None, help="Anchor date YYYY-MM-DD (default: today in --tz)")
    ap.add_argument("--now", default=None, help="Current time as ISO datetime (default: the clock in --tz)")
    ap.add_argument(
        "--tz",
        default=env_default(ENV_TZ, "local"),
        help="Timezone for wall-clock placement (default: env CALGRID_TZ or 'local')",
    )
    ap.add_argument("--strict", action="store_true", help="Fail (exit 3) if any event record is rejected")
    ap.add_argument("--pretty", action="store_true", help="Pretty JSON output")
    ap.add_argument("--verbose", action="store_true", help="Log ingestion details to stderr")


def setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def resolve_clock(args: argparse.Namespace) -> Tuple[dt.tzinfo, dt.datetime, dt.date]:
    """(tzinfo, now, anchor date) from --tz/--now/--date. Raises ValueError."""
    try:
        tzinfo = resolve_tz(normalize_tz_name(args.tz))
    except ValueError as e:
        raise ValueError(f"Invalid --tz value: {e}") from e

    try:
        now = parse_instant(args.now, tzinfo) if args.now else now_wall_clock(tzinfo)
    except EventValidationError as e:
        raise ValueError(f"Invalid --now value: {e}") from e

    if not args.date:
        return tzinfo, now, now.date()
    try:
        return tzinfo, now, parse_date_yyyy_mm_dd(args.date)
    except ValueError as e:
        raise ValueError(f"Invalid --date value: {e}") from e


def read_events(path: Path, tzinfo: dt.tzinfo) -> IngestResult:
    obj = json.loads(path.read_text(encoding="utf-8", errors="replace"))
    return ingest_events(load_records(obj), tz=tzinfo)


def load_input(tool: str, args: argparse.Namespace, tzinfo: dt.tzinfo) -> Tuple[IngestResult | None, int]:
    """Read --in through ingestion. Returns (result, 0) or (None, exit code)."""
    in_path = Path(args.in_json)
    if not in_path.exists():
        return None, die(tool, f"Missing JSON file: {in_path}")
    try:
        res = read_events(in_path, tzinfo)
    except ValueError as e:
        return None, die(tool, f"Failed to read events: {in_path} ({e})")

    if args.strict and res.rejected:
        for r in res.rejected:
            die(tool, f"events[{r.index}]: {r.message}")
        return None, 3
    return res, 0


def rejected_dicts(res: IngestResult) -> List[Dict[str, Any]]:
    return [dataclasses.asdict(r) for r in res.rejected]


def write_json(obj: Any, out: str, *, pretty: bool) -> None:
    txt = json.dumps(obj, ensure_ascii=False, indent=2 if pretty else None)
    if out == "-":
        sys.stdout.write(txt + "\n")
        return
    p = Path(out)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(txt + "\n", encoding="utf-8", newline="\n")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog=TOOL,
        description="Lay out calendar events (columns + geometry) for a day, week, month or list view.",
    )
    add_common_args(ap)
    ap.add_argument("--view", choices=VIEW_MODES, default=VIEW_WEEK, help="View mode (default: week)")
    ap.add_argument(
        "--category",
        choices=(CATEGORY_ALL,) + CATEGORIES,
        default=CATEGORY_ALL,
        help="Only lay out one category (default: all)",
    )
    ap.add_argument(
        "--profile",
        default=env_default(ENV_PROFILE, "sked"),
        help="Layout profile: sked or agenda (default: env CALGRID_PROFILE or 'sked')",
    )
    ap.add_argument(
        "--workhours",
        default=env_default(ENV_WORKHOURS, ""),
        help="Working hours window, e.g. 08:00-20:00 (default: env CALGRID_WORKHOURS or the profile's)",
    )
    ap.add_argument("--span", choices=COLUMN_SPANS, default=None, help="Column width rule (default: profile's)")
    ap.add_argument("--strategy", choices=STRATEGIES, default=STRATEGY_SWEEP, help="Clustering strategy (default: sweep)")
    args = ap.parse_args(argv)

    setup_logging(args.verbose)

    try:
        tzinfo, now, anchor = resolve_clock(args)
    except ValueError as e:
        return die(TOOL, str(e))

    try:
        profile: LayoutProfile = get_profile(args.profile, workhours=args.workhours or None)
    except ValueError as e:
        return die(TOOL, str(e))
    if args.span:
        profile = dataclasses.replace(profile, column_span=args.span)

    res, rc = load_input(TOOL, args, tzinfo)
    if res is None:
        return rc

    layout = layout_events(
        res.events,
        args.view,
        anchor,
        profile,
        category=args.category,
        today=now.date(),
        strategy=args.strategy,
    )

    out = {
        "profile": profile.name,
        "workhours": profile.working_hours.label(),
        "now": now.isoformat(),
        "now_offset": current_time_position(now, profile),
        "layout": layout.to_dict(),
        "rejected": rejected_dicts(res),
    }
    write_json(out, args.out, pretty=args.pretty)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
