from __future__ import annotations

from collections.abc import Callable

import pytest

from domain.models import DayWindow, LayoutResult, ScheduleItem
from domain.services.timeline_frames import (
    build_block_frame,
    build_block_frames,
    build_draft_frame,
    hour_height_for,
)


def test_hour_height_divides_canvas_by_day() -> None:
    assert hour_height_for(1440.0) == pytest.approx(60.0)
    assert hour_height_for(0.0) == pytest.approx(25.0)
    assert hour_height_for(-10.0) == pytest.approx(25.0)


def test_columns_split_width_after_gutter() -> None:
    results = {
        "a": LayoutResult(column=0, column_count=2, top_offset_px=540.0, height_px=60.0),
        "b": LayoutResult(column=1, column_count=2, top_offset_px=570.0, height_px=60.0),
    }

    frames = build_block_frames(results, canvas_width=435.0, label_gutter=35.0)

    assert frames["a"].x == pytest.approx(35.0)
    assert frames["b"].x == pytest.approx(235.0)
    assert frames["b"].width == pytest.approx(200.0)
    assert frames["a"].height == pytest.approx(59.0)
    assert frames["a"].center_y == pytest.approx(569.5)


def test_tiny_heights_keep_their_size() -> None:
    result = LayoutResult(column=0, column_count=1, top_offset_px=0.0, height_px=2.0)

    frame = build_block_frame(result, canvas_width=100.0, label_gutter=35.0)

    assert frame.height == pytest.approx(2.0)


def test_narrow_canvas_does_not_produce_negative_width() -> None:
    result = LayoutResult(column=0, column_count=3, top_offset_px=0.0, height_px=30.0)

    assert build_block_frame(result, canvas_width=20.0, label_gutter=35.0).width == 0.0


def test_draft_spans_full_width(
    make_item: Callable[..., ScheduleItem], window: DayWindow
) -> None:
    frame = build_draft_frame(
        make_item("draft", "08:00", "09:30"),
        window,
        pixels_per_hour=20.0,
        canvas_width=335.0,
    )

    assert frame is not None
    assert frame.x == pytest.approx(35.0)
    assert frame.width == pytest.approx(300.0)
    assert frame.top == pytest.approx(160.0)
    assert frame.height == pytest.approx(29.0)


def test_draft_outside_day_has_no_frame(
    make_item: Callable[..., ScheduleItem], window: DayWindow
) -> None:
    draft = make_item("draft", "08:00", "09:00", start_day_offset=2, end_day_offset=2)

    assert build_draft_frame(draft, window, 20.0, 335.0) is None
