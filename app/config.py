from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.calendar.zoneinfo_calendar import resolve_zone
from domain.models import MIN_VISUAL_HEIGHT_PX
from domain.services.timeline_frames import (
    DEFAULT_BLOCK_GAP,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_LABEL_GUTTER,
    hour_height_for,
)

DEFAULT_CONFIG_PATH = Path("config/timeline.yaml")


class TimelineSettings(BaseModel):
    title: str = "Daily Timeline"
    timezone: str = "UTC"
    pixels_per_hour: float | None = Field(default=None, gt=0)
    canvas_height: float = DEFAULT_CANVAS_HEIGHT
    canvas_width: float = Field(default=390.0, ge=0)
    label_gutter_px: float = Field(default=DEFAULT_LABEL_GUTTER, ge=0)
    min_visual_height_px: float = Field(default=MIN_VISUAL_HEIGHT_PX, ge=0)
    block_gap_px: float = Field(default=DEFAULT_BLOCK_GAP, ge=0)
    log_level: str = "WARNING"

    @field_validator("timezone", mode="before")
    @classmethod
    def normalize_timezone(cls, value: object) -> str:
        raw = str(value or "").strip() or "UTC"
        return resolve_zone(raw).key

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value or "WARNING").strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"timeline.log_level must be a logging level name, got {value!r}"
            raise ValueError(msg)
        return level

    def resolve_pixels_per_hour(
        self, pixels_per_hour: float | None = None, canvas_height: float | None = None
    ) -> float:
        if pixels_per_hour is not None:
            return pixels_per_hour
        if canvas_height is not None:
            return hour_height_for(canvas_height)
        if self.pixels_per_hour is not None:
            return self.pixels_per_hour
        return hour_height_for(self.canvas_height)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TIMELINE_", env_nested_delimiter="__")

    timeline: TimelineSettings = TimelineSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("TIMELINE_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
