from __future__ import annotations

import logging

from adapters.calendar.zoneinfo_calendar import ZoneInfoDayCalendar
from adapters.layout.timeline import DailyTimelineLayoutEngine, TimelineLayoutConfig
from app.config import AppSettings


def build_calendar(settings: AppSettings, timezone: str | None = None) -> ZoneInfoDayCalendar:
    return ZoneInfoDayCalendar(timezone or settings.timeline.timezone)


def build_layout_engine(
    settings: AppSettings, calendar: ZoneInfoDayCalendar | None = None
) -> DailyTimelineLayoutEngine:
    config = TimelineLayoutConfig(min_visual_height_px=settings.timeline.min_visual_height_px)
    return DailyTimelineLayoutEngine(calendar or build_calendar(settings), config)


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.timeline.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
