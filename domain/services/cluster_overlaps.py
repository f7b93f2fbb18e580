from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from domain.models import ClippedInterval, Cluster


def interval_sort_key(interval: ClippedInterval) -> tuple[datetime, str]:
    return (interval.visible_start, interval.item_id)


def sort_intervals(intervals: Iterable[ClippedInterval]) -> list[ClippedInterval]:
    return sorted(intervals, key=interval_sort_key)


def cluster_overlaps(intervals: Iterable[ClippedInterval]) -> list[Cluster]:
    """Partition intervals into connected components of the overlap relation.

    One sweep in start order with a running end watermark: an interval that
    starts before the watermark belongs to the current cluster. Intervals that
    only touch (end == next start) do not overlap.
    """
    ordered = sort_intervals(intervals)
    if not ordered:
        return []

    clusters: list[Cluster] = []
    current: list[ClippedInterval] = [ordered[0]]
    cluster_end = ordered[0].visible_end
    for interval in ordered[1:]:
        if interval.visible_start < cluster_end:
            current.append(interval)
            cluster_end = max(cluster_end, interval.visible_end)
        else:
            clusters.append(Cluster(tuple(current)))
            current = [interval]
            cluster_end = interval.visible_end
    clusters.append(Cluster(tuple(current)))
    return clusters
