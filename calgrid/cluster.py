# calgrid/cluster.py
"""Overlap detection and clustering.

Intervals are half-open: two events that only touch at an endpoint do not
overlap and never share a cluster.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, NamedTuple, Protocol

STRATEGY_SWEEP = "sweep"
STRATEGY_CHAIN = "chain"
STRATEGIES = (STRATEGY_SWEEP, STRATEGY_CHAIN)


class Interval(Protocol):
    start: dt.datetime
    end: dt.datetime


class Span(NamedTuple):
    start: dt.datetime
    end: dt.datetime


def events_overlap(a: Interval, b: Interval) -> bool:
    return a.start < b.end and a.end > b.start


def sort_by_start(events: Iterable[Interval]) -> list:
    # Stable: ties keep input order.
    return sorted(events, key=lambda e: e.start)


def _cluster_chain(items: list) -> List[list]:
    # Compares only to the most recently appended member, so a long event
    # followed by two short staggered ones can be split apart.
    clusters: List[list] = []
    cur: list = []
    for ev in items:
        if cur and events_overlap(cur[-1], ev):
            cur.append(ev)
            continue
        if cur:
            clusters.append(cur)
        cur = [ev]
    if cur:
        clusters.append(cur)
    return clusters


def _cluster_sweep(items: list) -> List[list]:
    clusters: List[list] = []
    cur: list = []
    max_end = None
    for ev in items:
        if cur and ev.start < max_end:
            cur.append(ev)
            if ev.end > max_end:
                max_end = ev.end
            continue
        if cur:
            clusters.append(cur)
        cur = [ev]
        max_end = ev.end
    if cur:
        clusters.append(cur)
    return clusters


def cluster_events(events: Iterable[Interval], strategy: str = STRATEGY_SWEEP) -> List[list]:
    """Partition events into overlap clusters, each sorted by start.

    strategy:
      - "sweep": connected components of the overlap graph (tracks the
        running max end of the open cluster).
      - "chain": legacy heuristic that only looks at the last member.
    """
    items = sort_by_start(events)
    if strategy == STRATEGY_SWEEP:
        return _cluster_sweep(items)
    if strategy == STRATEGY_CHAIN:
        return _cluster_chain(items)
    raise ValueError(f"unknown cluster strategy: {strategy!r}")


__all__ = [
    "STRATEGIES",
    "STRATEGY_CHAIN",
    "STRATEGY_SWEEP",
    "Span",
    "cluster_events",
    "events_overlap",
    "sort_by_start",
]
