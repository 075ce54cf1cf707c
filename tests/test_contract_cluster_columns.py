from __future__ import annotations

import datetime as dt
import random
import unittest

from calgrid.cluster import Span, cluster_events, events_overlap, sort_by_start
from calgrid.columns import assign_columns

DAY = dt.datetime(2026, 10, 19)


def _at(hh: int, mm: int = 0) -> dt.datetime:
    return DAY.replace(hour=hh, minute=mm)


class _Iv:
    def __init__(self, name: str, start: dt.datetime, end: dt.datetime) -> None:
        self.name = name
        self.start = start
        self.end = end

    def __repr__(self) -> str:
        return f"<{self.name} {self.start:%H:%M}-{self.end:%H:%M}>"


def _names(clusters):
    return [[iv.name for iv in c] for c in clusters]


def _first_fit(items):
    # Reference: scan columns left to right, take the first free one.
    col_ends = []
    out = []
    for iv in sort_by_start(items):
        for i, end in enumerate(col_ends):
            if end <= iv.start:
                col_ends[i] = iv.end
                out.append(i)
                break
        else:
            col_ends.append(iv.end)
            out.append(len(col_ends) - 1)
    return out


def _random_intervals(rng: random.Random, n: int):
    out = []
    for i in range(n):
        start = rng.randrange(0, 20 * 60, 15)
        length = rng.choice((15, 30, 45, 60, 90, 120, 180))
        out.append(_Iv(f"e{i}", DAY + dt.timedelta(minutes=start), DAY + dt.timedelta(minutes=start + length)))
    return out


class TestOverlapContract(unittest.TestCase):
    def test_half_open_intervals(self) -> None:
        a = Span(_at(9), _at(10))
        self.assertTrue(events_overlap(a, Span(_at(9, 30), _at(10, 30))))
        self.assertFalse(events_overlap(a, Span(_at(10), _at(11))))
        self.assertFalse(events_overlap(Span(_at(10), _at(11)), a))

    def test_sort_is_stable(self) -> None:
        a = _Iv("a", _at(9), _at(10))
        b = _Iv("b", _at(9), _at(11))
        c = _Iv("c", _at(8), _at(9))
        self.assertEqual([x.name for x in sort_by_start([a, b, c])], ["c", "a", "b"])


class TestClusterContract(unittest.TestCase):
    def test_overlapping_pair_clusters(self) -> None:
        a = _Iv("A", _at(9), _at(10))
        b = _Iv("B", _at(9, 30), _at(10, 30))
        self.assertEqual(_names(cluster_events([b, a])), [["A", "B"]])

    def test_touching_events_stay_apart(self) -> None:
        a = _Iv("A", _at(9), _at(10))
        b = _Iv("B", _at(10), _at(11))
        c = _Iv("C", _at(9, 15), _at(9, 45))
        for strategy in ("sweep", "chain"):
            self.assertEqual(_names(cluster_events([a, b, c], strategy=strategy)), [["A", "C"], ["B"]], strategy)

    def test_sweep_keeps_staggered_chain_together(self) -> None:
        long_ = _Iv("L", _at(9), _at(12))
        short = _Iv("S", _at(9, 30), _at(10))
        late = _Iv("T", _at(11), _at(11, 30))

        self.assertEqual(_names(cluster_events([long_, short, late])), [["L", "S", "T"]])
        self.assertEqual(_names(cluster_events([long_, short, late], strategy="chain")), [["L", "S"], ["T"]])

    def test_empty_and_unknown_strategy(self) -> None:
        self.assertEqual(cluster_events([]), [])
        with self.assertRaises(ValueError):
            cluster_events([], strategy="graph")

    def test_sweep_clusters_are_connected_components(self) -> None:
        rng = random.Random(20261019)
        for _ in range(30):
            ivs = _random_intervals(rng, rng.randint(1, 25))
            clusters = cluster_events(ivs)
            self.assertEqual(sum(len(c) for c in clusters), len(ivs))
            # Nothing overlaps across clusters.
            for i, ci in enumerate(clusters):
                for cj in clusters[i + 1 :]:
                    for x in ci:
                        for y in cj:
                            self.assertFalse(events_overlap(x, y), (x, y))


class TestColumnsContract(unittest.TestCase):
    def test_overlapping_pair_two_columns(self) -> None:
        a = _Iv("A", _at(9), _at(10))
        b = _Iv("B", _at(9, 30), _at(10, 30))
        slots = assign_columns([a, b])
        self.assertEqual([(s.event.name, s.column, s.total_columns) for s in slots], [("A", 0, 2), ("B", 1, 2)])

    def test_single_event_single_column(self) -> None:
        slots = assign_columns([_Iv("A", _at(9), _at(10))])
        self.assertEqual((slots[0].column, slots[0].total_columns), (0, 1))
        self.assertEqual(assign_columns([]), [])

    def test_freed_column_is_reused(self) -> None:
        long_ = _Iv("L", _at(9), _at(12))
        short = _Iv("S", _at(9, 30), _at(10))
        late = _Iv("T", _at(11), _at(11, 30))
        cols = {s.event.name: (s.column, s.total_columns) for s in assign_columns([long_, short, late])}
        self.assertEqual(cols, {"L": (0, 2), "S": (1, 2), "T": (1, 2)})

    def test_span_modes(self) -> None:
        a = _Iv("A", _at(9), _at(12))
        b = _Iv("B", _at(9), _at(10))
        c = _Iv("C", _at(9), _at(10))
        d = _Iv("D", _at(11), _at(11, 30))

        by_cluster = {s.event.name: (s.column, s.total_columns) for s in assign_columns([a, b, c, d])}
        self.assertEqual(by_cluster, {"A": (0, 3), "B": (1, 3), "C": (2, 3), "D": (1, 3)})

        by_overlap = {s.event.name: (s.column, s.total_columns) for s in assign_columns([a, b, c, d], span="overlap")}
        self.assertEqual(by_overlap, {"A": (0, 3), "B": (1, 3), "C": (2, 3), "D": (1, 2)})

    def test_unknown_span(self) -> None:
        with self.assertRaises(ValueError):
            assign_columns([], span="greedy")

    def test_matches_first_fit_and_never_collides(self) -> None:
        rng = random.Random(42)
        for _ in range(40):
            ivs = _random_intervals(rng, rng.randint(1, 20))
            for cluster in cluster_events(ivs):
                for span in ("cluster", "overlap"):
                    slots = assign_columns(cluster, span=span)
                    self.assertEqual([s.column for s in slots], _first_fit(cluster))
                    for i, x in enumerate(slots):
                        self.assertLess(x.column, x.total_columns)
                        for y in slots[i + 1 :]:
                            if events_overlap(x.event, y.event):
                                self.assertNotEqual(x.column, y.column, (x, y))

    def test_cluster_span_equals_peak_concurrency(self) -> None:
        rng = random.Random(7)
        for _ in range(40):
            ivs = _random_intervals(rng, rng.randint(1, 20))
            for cluster in cluster_events(ivs):
                peak = max(sum(1 for y in cluster if y.start <= x.start < y.end) for x in cluster)
                slots = assign_columns(cluster)
                self.assertEqual({s.total_columns for s in slots}, {peak})


if __name__ == "__main__":
    unittest.main(verbosity=2)
