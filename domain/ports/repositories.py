from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import DayWindow, ScheduleItem


class ScheduleItemRepository(Protocol):
    def load_all(self, path: Path) -> Sequence[ScheduleItem]: ...

    def load_for_day(self, path: Path, window: DayWindow) -> Sequence[ScheduleItem]: ...

    def save(self, items: Sequence[ScheduleItem], path: Path) -> None: ...
