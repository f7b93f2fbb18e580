from __future__ import annotations

from domain.models import DEFAULT_ITEM_DURATION, ClippedInterval, DayWindow, ScheduleItem


def clip_to_day(item: ScheduleItem, window: DayWindow) -> ClippedInterval | None:
    """Restrict an item to the part of it that falls inside ``window``.

    Returns ``None`` when nothing of the item is visible that day. Both flags
    describe the item's true range, not the clipped one.
    """
    start = window.normalize(item.start_time)
    end = window.normalize(item.end_time) if item.end_time is not None else None
    # missing or reversed end: one elapsed hour, so DST changes cannot stretch it
    if end is None or end <= start:
        end = start + DEFAULT_ITEM_DURATION

    visible_start = max(start, window.start)
    visible_end = min(end, window.end)
    if visible_start >= visible_end:
        return None

    return ClippedInterval(
        item_id=item.id,
        visible_start=visible_start,
        visible_end=visible_end,
        spans_from_prev_day=start < window.start,
        spans_to_next_day=end > window.end,
    )


def is_visible_on(item: ScheduleItem, window: DayWindow) -> bool:
    return clip_to_day(item, window) is not None
