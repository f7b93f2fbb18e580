from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from domain.models import ClippedInterval, Cluster, PackedInterval
from domain.services.cluster_overlaps import sort_intervals


def pack_columns(cluster: Cluster) -> list[PackedInterval]:
    """Assign side-by-side columns inside one cluster.

    Greedy coloring by left endpoint: each column remembers the end of the
    interval placed in it last, and an interval takes the first column that is
    already free at its start. This uses exactly as many columns as the
    deepest overlap in the cluster.
    """
    watermarks: list[datetime] = []
    placed: list[tuple[ClippedInterval, int]] = []
    for interval in sort_intervals(cluster.intervals):
        for index, watermark in enumerate(watermarks):
            if watermark <= interval.visible_start:
                watermarks[index] = interval.visible_end
                column = index
                break
        else:
            column = len(watermarks)
            watermarks.append(interval.visible_end)
        placed.append((interval, column))

    column_count = len(watermarks)
    return [
        PackedInterval(interval=interval, column=column, column_count=column_count)
        for interval, column in placed
    ]


def max_overlap_depth(intervals: Iterable[ClippedInterval]) -> int:
    # ends sort before starts at the same instant: ranges are half-open
    events: list[tuple[datetime, int]] = []
    for interval in intervals:
        events.append((interval.visible_start, 1))
        events.append((interval.visible_end, -1))
    events.sort()

    depth = 0
    deepest = 0
    for _moment, delta in events:
        depth += delta
        deepest = max(deepest, depth)
    return deepest
