from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Protocol

from domain.models import LayoutResult, ScheduleItem


class TimelineLayoutEngine(Protocol):
    def layout(
        self, items: Iterable[ScheduleItem], day: date, pixels_per_hour: float
    ) -> dict[str, LayoutResult]:
        ...
