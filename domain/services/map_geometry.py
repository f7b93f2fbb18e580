from __future__ import annotations

from datetime import datetime

from domain.models import MIN_VISUAL_HEIGHT_PX, BlockGeometry, ClippedInterval, DayWindow


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def map_geometry(
    interval: ClippedInterval,
    window: DayWindow,
    pixels_per_hour: float,
    min_height_px: float = MIN_VISUAL_HEIGHT_PX,
) -> BlockGeometry:
    top_offset = hours_between(window.start, interval.visible_start) * pixels_per_hour
    raw_height = hours_between(interval.visible_start, interval.visible_end) * pixels_per_hour
    return BlockGeometry(top_offset_px=top_offset, height_px=max(raw_height, min_height_px))
