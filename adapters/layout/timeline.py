from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from adapters.calendar.zoneinfo_calendar import ZoneInfoDayCalendar
from domain.models import (
    MIN_VISUAL_HEIGHT_PX,
    ClippedInterval,
    DayWindow,
    LayoutResult,
    ScheduleItem,
)
from domain.ports.calendar import DayCalendar
from domain.ports.layout import TimelineLayoutEngine
from domain.services.clip_to_day import clip_to_day
from domain.services.cluster_overlaps import cluster_overlaps
from domain.services.map_geometry import map_geometry
from domain.services.pack_columns import pack_columns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineLayoutConfig:
    min_visual_height_px: float = MIN_VISUAL_HEIGHT_PX


def validate_pixels_per_hour(pixels_per_hour: float) -> float:
    value = float(pixels_per_hour)
    if not math.isfinite(value) or value <= 0:
        msg = f"pixels_per_hour must be a positive number, got {pixels_per_hour!r}"
        raise ValueError(msg)
    return value


class DailyTimelineLayoutEngine(TimelineLayoutEngine):
    def __init__(
        self,
        calendar: DayCalendar | None = None,
        config: TimelineLayoutConfig | None = None,
    ) -> None:
        self.calendar = calendar or ZoneInfoDayCalendar()
        self.config = config or TimelineLayoutConfig()

    def layout(
        self, items: Iterable[ScheduleItem], day: date, pixels_per_hour: float
    ) -> dict[str, LayoutResult]:
        scale = validate_pixels_per_hour(pixels_per_hour)
        window = self.calendar.window_for(day)
        clipped = self.clip_items(items, window)
        clusters = cluster_overlaps(clipped)
        logger.debug(
            "Timeline %s: %d visible items in %d clusters", day, len(clipped), len(clusters)
        )

        # duplicate ids: the later one in start order overwrites the earlier
        results: dict[str, LayoutResult] = {}
        for cluster in clusters:
            for packed in pack_columns(cluster):
                interval = packed.interval
                geometry = map_geometry(
                    interval, window, scale, self.config.min_visual_height_px
                )
                results[interval.item_id] = LayoutResult(
                    column=packed.column,
                    column_count=packed.column_count,
                    top_offset_px=geometry.top_offset_px,
                    height_px=geometry.height_px,
                    spans_from_prev_day=interval.spans_from_prev_day,
                    spans_to_next_day=interval.spans_to_next_day,
                )
        return results

    def clip_items(
        self, items: Iterable[ScheduleItem], window: DayWindow
    ) -> list[ClippedInterval]:
        clipped: list[ClippedInterval] = []
        for item in items:
            if item.end_time is not None and not item.has_usable_end():
                logger.debug("Item %s ends before it starts; using default duration", item.id)
            interval = clip_to_day(item, window)
            if interval is None:
                logger.debug("Item %s is not visible on %s", item.id, window.day)
                continue
            clipped.append(interval)
        return clipped
