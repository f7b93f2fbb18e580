from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from domain.models import DayWindow
from domain.ports.calendar import DayCalendar


def resolve_zone(name: str) -> ZoneInfo:
    key = str(name or "").strip() or "UTC"
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        msg = f"Unknown time zone: {name}"
        raise ValueError(msg) from exc


class ZoneInfoDayCalendar(DayCalendar):
    """Day boundaries at local midnight of an IANA time zone.

    A window ends at the next local midnight, so it lasts 23 or 25 hours on
    days with a DST transition.
    """

    def __init__(self, tz_name: str = "UTC") -> None:
        self.zone = resolve_zone(tz_name)

    @property
    def name(self) -> str:
        return self.zone.key

    def window_for(self, day: date) -> DayWindow:
        start = datetime.combine(day, time.min, tzinfo=self.zone)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self.zone)
        return DayWindow(
            day=day,
            start=start.astimezone(UTC),
            end=end.astimezone(UTC),
            zone=self.zone,
        )

    def day_of(self, moment: datetime) -> date:
        if moment.tzinfo is None or moment.utcoffset() is None:
            return moment.date()
        return moment.astimezone(self.zone).date()

    def today(self) -> date:
        return datetime.now(self.zone).date()
