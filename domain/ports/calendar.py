from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

from domain.models import DayWindow


class DayCalendar(Protocol):
    def window_for(self, day: date) -> DayWindow: ...

    def day_of(self, moment: datetime) -> date: ...

    def today(self) -> date: ...
