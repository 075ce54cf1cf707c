# calgrid/columns.py
from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from .cluster import events_overlap, sort_by_start
from .model import SPAN_CLUSTER, SPAN_OVERLAP


@dataclass(frozen=True)
class ColumnSlot:
    event: Any
    column: int
    total_columns: int


def _pack(items: list) -> Tuple[List[int], int]:
    """First-fit column index per item, plus the number of columns opened.

    Busy columns sit in a heap keyed by the end of their last event; once
    that end is <= the next start the column moves to the free heap, and the
    lowest free index is reused. Starts are non-decreasing, so this picks
    exactly the column a left-to-right first-fit scan would.
    """
    busy: List[Tuple[Any, int]] = []
    free: List[int] = []
    opened = 0
    cols: List[int] = []

    for ev in items:
        while busy and busy[0][0] <= ev.start:
            _end, col = heapq.heappop(busy)
            heapq.heappush(free, col)
        if free:
            col = heapq.heappop(free)
        else:
            col = opened
            opened += 1
        heapq.heappush(busy, (ev.end, col))
        cols.append(col)

    return cols, opened


def assign_columns(cluster: Iterable[Any], span: str = SPAN_CLUSTER) -> List[ColumnSlot]:
    """Assign display columns inside one overlap cluster.

    span:
      - "cluster": every member spans the cluster's column count, which is
        the peak number of simultaneous events.
      - "overlap": an event only divides its width among columns holding a
        member it directly overlaps (never fewer than column + 1, so the
        event stays inside the day column).
    """
    if span not in (SPAN_CLUSTER, SPAN_OVERLAP):
        raise ValueError(f"unknown column span: {span!r}")

    items = sort_by_start(cluster)
    if not items:
        return []

    cols, opened = _pack(items)
    total = max(1, opened)

    if span == SPAN_CLUSTER:
        return [ColumnSlot(event=ev, column=c, total_columns=total) for ev, c in zip(items, cols)]

    members: List[list] = [[] for _ in range(total)]
    for ev, c in zip(items, cols):
        members[c].append(ev)

    out: List[ColumnSlot] = []
    for ev, c in zip(items, cols):
        touching = sum(1 for col in members if any(events_overlap(m, ev) for m in col))
        out.append(ColumnSlot(event=ev, column=c, total_columns=max(1, touching, c + 1)))
    return out


__all__ = ["ColumnSlot", "assign_columns"]
