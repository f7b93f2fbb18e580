from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import orjson
from pydantic import TypeAdapter, ValidationError

from domain.models import DayWindow, ScheduleItem
from domain.ports.repositories import ScheduleItemRepository
from domain.services.clip_to_day import is_visible_on

_ITEMS_ADAPTER = TypeAdapter(list[ScheduleItem])


def parse_schedule_items(payload: Any) -> list[ScheduleItem]:
    """Accept either a bare list of items or an object with an ``items`` list."""
    if isinstance(payload, dict):
        payload = payload.get("items", [])
    if not isinstance(payload, list):
        msg = "Schedule items must be a JSON list or an object with an 'items' list"
        raise ValueError(msg)
    return _ITEMS_ADAPTER.validate_python(payload)


class FileSystemScheduleRepository(ScheduleItemRepository):
    def load_all(self, path: Path) -> list[ScheduleItem]:
        try:
            payload = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as exc:
            msg = f"Invalid JSON in {path}: {exc}"
            raise ValueError(msg) from exc
        try:
            return parse_schedule_items(payload)
        except ValidationError as exc:
            msg = f"Invalid schedule items in {path}: {exc}"
            raise ValueError(msg) from exc

    def load_for_day(self, path: Path, window: DayWindow) -> list[ScheduleItem]:
        return [item for item in self.load_all(path) if is_visible_on(item, window)]

    def save(self, items: Sequence[ScheduleItem], path: Path) -> None:
        payload = {"items": [item.model_dump(mode="json") for item in items]}
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(f"{path.suffix}.tmp")
        tmp_path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        tmp_path.replace(path)
