from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_ITEM_DURATION = timedelta(hours=1)
MIN_VISUAL_HEIGHT_PX = 30.0
HOURS_PER_DAY = 24


def _comparable(moment: datetime) -> datetime:
    if moment.tzinfo is not None and moment.utcoffset() is not None:
        return moment.astimezone(UTC)
    return moment


def _is_aware(moment: datetime) -> bool:
    return moment.tzinfo is not None and moment.utcoffset() is not None


class ScheduleItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: str = ""
    start_time: datetime = Field(..., validation_alias=AliasChoices("start_time", "startTime"))
    end_time: datetime | None = Field(
        default=None, validation_alias=AliasChoices("end_time", "endTime")
    )
    is_completed: bool = Field(
        default=False, validation_alias=AliasChoices("is_completed", "isCompleted")
    )
    is_postponed: bool = Field(
        default=False, validation_alias=AliasChoices("is_postponed", "isPostponed")
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def ensure_consistent_timezones(self) -> ScheduleItem:
        if self.end_time is not None and _is_aware(self.start_time) != _is_aware(self.end_time):
            msg = f"Item {self.id}: start_time and end_time must both be naive or both aware"
            raise ValueError(msg)
        return self

    def has_usable_end(self) -> bool:
        if self.end_time is None:
            return False
        return _comparable(self.end_time) > _comparable(self.start_time)


@dataclass(frozen=True)
class DayWindow:
    day: date
    start: datetime
    end: datetime
    zone: tzinfo = UTC

    def normalize(self, moment: datetime) -> datetime:
        # naive timestamps are wall-clock time in the window's zone
        if not _is_aware(moment):
            moment = moment.replace(tzinfo=self.zone)
        return moment.astimezone(UTC)

    @property
    def hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600.0


@dataclass(frozen=True)
class ClippedInterval:
    item_id: str
    visible_start: datetime
    visible_end: datetime
    spans_from_prev_day: bool = False
    spans_to_next_day: bool = False

    def overlaps(self, other: ClippedInterval) -> bool:
        return self.visible_start < other.visible_end and other.visible_start < self.visible_end


@dataclass(frozen=True)
class Cluster:
    intervals: tuple[ClippedInterval, ...]

    @property
    def start(self) -> datetime:
        return self.intervals[0].visible_start

    @property
    def end(self) -> datetime:
        return max(interval.visible_end for interval in self.intervals)

    @property
    def item_ids(self) -> list[str]:
        return [interval.item_id for interval in self.intervals]

    def __len__(self) -> int:
        return len(self.intervals)


@dataclass(frozen=True)
class PackedInterval:
    interval: ClippedInterval
    column: int
    column_count: int


@dataclass(frozen=True)
class BlockGeometry:
    top_offset_px: float
    height_px: float


@dataclass(frozen=True)
class LayoutResult:
    column: int
    column_count: int
    top_offset_px: float
    height_px: float
    spans_from_prev_day: bool = False
    spans_to_next_day: bool = False

    def __post_init__(self) -> None:
        if self.column_count < 1 or not 0 <= self.column < self.column_count:
            msg = f"Invalid column {self.column} of {self.column_count}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        return {
            "column": self.column,
            "columnCount": self.column_count,
            "topOffsetPx": self.top_offset_px,
            "heightPx": self.height_px,
            "spansFromPrevDay": self.spans_from_prev_day,
            "spansToNextDay": self.spans_to_next_day,
        }


@dataclass(frozen=True)
class BlockFrame:
    x: float
    width: float
    top: float
    height: float
    column: int = 0
    column_count: int = 1
    spans_from_prev_day: bool = False
    spans_to_next_day: bool = False

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "width": self.width,
            "top": self.top,
            "height": self.height,
            "centerY": self.center_y,
            "column": self.column,
            "columnCount": self.column_count,
            "spansFromPrevDay": self.spans_from_prev_day,
            "spansToNextDay": self.spans_to_next_day,
        }
