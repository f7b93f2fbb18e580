from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from domain.models import LayoutResult, ScheduleItem


def test_accepts_camel_case_payload() -> None:
    item = ScheduleItem.model_validate(
        {
            "id": 42,
            "title": "Pedagogy",
            "startTime": "2026-03-10T09:00:00Z",
            "endTime": "2026-03-10T10:30:00Z",
            "isCompleted": True,
        }
    )

    assert item.id == "42"
    assert item.is_completed is True
    assert item.is_postponed is False
    assert item.end_time == datetime(2026, 3, 10, 10, 30, tzinfo=UTC)
    assert item.has_usable_end() is True


def test_missing_end_is_not_usable() -> None:
    start = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)
    item = ScheduleItem(id="a", start_time=start)

    assert item.has_usable_end() is False


@pytest.mark.parametrize("end_delta", [timedelta(0), timedelta(minutes=-30)])
def test_degenerate_end_is_not_usable(end_delta: timedelta) -> None:
    start = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)
    item = ScheduleItem(id="a", start_time=start, end_time=start + end_delta)

    assert item.has_usable_end() is False


def test_mixed_naive_and_aware_timestamps_are_rejected() -> None:
    with pytest.raises(ValidationError):
        ScheduleItem(
            id="a",
            start_time=datetime(2026, 3, 10, 9, 0),
            end_time=datetime(2026, 3, 10, 10, 0, tzinfo=UTC),
        )


def test_layout_result_rejects_column_outside_count() -> None:
    with pytest.raises(ValueError):
        LayoutResult(column=2, column_count=2, top_offset_px=0.0, height_px=30.0)


def test_layout_result_serializes_camel_case() -> None:
    result = LayoutResult(
        column=1,
        column_count=2,
        top_offset_px=540.0,
        height_px=60.0,
        spans_to_next_day=True,
    )

    assert result.to_dict() == {
        "column": 1,
        "columnCount": 2,
        "topOffsetPx": 540.0,
        "heightPx": 60.0,
        "spansFromPrevDay": False,
        "spansToNextDay": True,
    }
