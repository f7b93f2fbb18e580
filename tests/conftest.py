from __future__ import annotations

import os
from collections.abc import Callable, Generator
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

import pytest

from adapters.calendar.zoneinfo_calendar import ZoneInfoDayCalendar
from app.config import AppSettings, TimelineSettings
from domain.models import DayWindow, ScheduleItem


def _clear_timeline_env() -> None:
    for key in list(os.environ):
        if key.startswith("TIMELINE_"):
            os.environ.pop(key, None)


_clear_timeline_env()


@pytest.fixture(autouse=True)
def clear_timeline_env() -> Generator[None, None, None]:
    _clear_timeline_env()
    yield
    _clear_timeline_env()


@pytest.fixture
def day() -> date:
    return date(2026, 3, 10)


@pytest.fixture
def utc_calendar() -> ZoneInfoDayCalendar:
    return ZoneInfoDayCalendar("UTC")


@pytest.fixture
def window(day: date, utc_calendar: ZoneInfoDayCalendar) -> DayWindow:
    return utc_calendar.window_for(day)


@pytest.fixture
def at(day: date) -> Callable[..., datetime]:
    def _at(clock: str, day_offset: int = 0) -> datetime:
        moment = datetime.combine(day + timedelta(days=day_offset), time.fromisoformat(clock))
        return moment.replace(tzinfo=UTC)

    return _at


@pytest.fixture
def make_item(at: Callable[..., datetime]) -> Callable[..., ScheduleItem]:
    def _factory(
        item_id: str,
        start: str,
        end: str | None = None,
        *,
        start_day_offset: int = 0,
        end_day_offset: int = 0,
        **overrides: Any,
    ) -> ScheduleItem:
        return ScheduleItem(
            id=item_id,
            title=overrides.pop("title", f"Study {item_id}"),
            start_time=at(start, start_day_offset),
            end_time=at(end, end_day_offset) if end is not None else None,
            **overrides,
        )

    return _factory


@pytest.fixture
def timeline_settings() -> TimelineSettings:
    return TimelineSettings(
        title="Test Timeline",
        timezone="UTC",
        pixels_per_hour=None,
        canvas_height=600.0,
        canvas_width=390.0,
        label_gutter_px=35.0,
        min_visual_height_px=30.0,
        block_gap_px=1.0,
        log_level="WARNING",
    )


@pytest.fixture
def timeline_settings_factory(
    timeline_settings: TimelineSettings,
) -> Callable[..., TimelineSettings]:
    def _factory(**overrides: object) -> TimelineSettings:
        return timeline_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(timeline_settings: TimelineSettings) -> AppSettings:
    return AppSettings(timeline=timeline_settings)


@pytest.fixture
def app_settings_factory(
    timeline_settings_factory: Callable[..., TimelineSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(timeline=timeline_settings_factory(**overrides))

    return _factory
