from __future__ import annotations

from collections.abc import Mapping

from domain.models import (
    HOURS_PER_DAY,
    MIN_VISUAL_HEIGHT_PX,
    BlockFrame,
    DayWindow,
    LayoutResult,
    ScheduleItem,
)
from domain.services.clip_to_day import clip_to_day
from domain.services.map_geometry import map_geometry

DEFAULT_CANVAS_HEIGHT = 600.0
DEFAULT_LABEL_GUTTER = 35.0
DEFAULT_BLOCK_GAP = 1.0


def hour_height_for(canvas_height: float, hours: int = HOURS_PER_DAY) -> float:
    height = canvas_height if canvas_height > 0 else DEFAULT_CANVAS_HEIGHT
    return height / hours


def _drawn_height(height: float, block_gap: float) -> float:
    # adjacent blocks keep a hairline between them
    return height - block_gap if height > 2 else height


def build_block_frame(
    result: LayoutResult,
    canvas_width: float,
    label_gutter: float = DEFAULT_LABEL_GUTTER,
    block_gap: float = DEFAULT_BLOCK_GAP,
) -> BlockFrame:
    width = max(canvas_width - label_gutter, 0.0) / result.column_count
    return BlockFrame(
        x=label_gutter + width * result.column,
        width=width,
        top=result.top_offset_px,
        height=_drawn_height(result.height_px, block_gap),
        column=result.column,
        column_count=result.column_count,
        spans_from_prev_day=result.spans_from_prev_day,
        spans_to_next_day=result.spans_to_next_day,
    )


def build_block_frames(
    results: Mapping[str, LayoutResult],
    canvas_width: float,
    label_gutter: float = DEFAULT_LABEL_GUTTER,
    block_gap: float = DEFAULT_BLOCK_GAP,
) -> dict[str, BlockFrame]:
    return {
        item_id: build_block_frame(result, canvas_width, label_gutter, block_gap)
        for item_id, result in results.items()
    }


def build_draft_frame(
    item: ScheduleItem,
    window: DayWindow,
    pixels_per_hour: float,
    canvas_width: float,
    label_gutter: float = DEFAULT_LABEL_GUTTER,
    block_gap: float = DEFAULT_BLOCK_GAP,
    min_height_px: float = MIN_VISUAL_HEIGHT_PX,
) -> BlockFrame | None:
    """Frame for an item that is still being edited.

    The draft is drawn across the full width on top of the saved items and
    takes no part in column packing.
    """
    interval = clip_to_day(item, window)
    if interval is None:
        return None
    geometry = map_geometry(interval, window, pixels_per_hour, min_height_px)
    result = LayoutResult(
        column=0,
        column_count=1,
        top_offset_px=geometry.top_offset_px,
        height_px=geometry.height_px,
        spans_from_prev_day=interval.spans_from_prev_day,
        spans_to_next_day=interval.spans_to_next_day,
    )
    return build_block_frame(result, canvas_width, label_gutter, block_gap)
