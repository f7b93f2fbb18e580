from __future__ import annotations

import logging
from datetime import date
from typing import Any, cast

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import ORJSONResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from adapters.layout.timeline import validate_pixels_per_hour
from app.config import AppSettings
from app.timeline_wiring import build_calendar, build_layout_engine
from domain.models import ScheduleItem
from domain.services.timeline_frames import build_block_frames, build_draft_frame

logger = logging.getLogger(__name__)


class LayoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: date
    items: list[ScheduleItem] = Field(default_factory=list)
    pixels_per_hour: float | None = Field(
        default=None, validation_alias=AliasChoices("pixels_per_hour", "pixelsPerHour")
    )
    canvas_height: float | None = Field(
        default=None, validation_alias=AliasChoices("canvas_height", "canvasHeight")
    )
    canvas_width: float | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("canvas_width", "canvasWidth")
    )
    timezone: str | None = None
    draft: ScheduleItem | None = None


def get_settings(request: Request) -> AppSettings:
    return cast(AppSettings, request.app.state.settings)


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title=settings.timeline.title)
    app.state.settings = settings

    @app.get("/health")
    def health(settings: AppSettings = Depends(get_settings)) -> ORJSONResponse:
        return ORJSONResponse({"status": "ok", "timezone": settings.timeline.timezone})

    @app.post("/api/timeline/layout")
    def api_timeline_layout(
        payload: LayoutRequest,
        settings: AppSettings = Depends(get_settings),
    ) -> ORJSONResponse:
        timeline = settings.timeline
        try:
            calendar = build_calendar(settings, payload.timezone)
            scale = validate_pixels_per_hour(
                timeline.resolve_pixels_per_hour(payload.pixels_per_hour, payload.canvas_height)
            )
            results = build_layout_engine(settings, calendar).layout(
                payload.items, payload.day, scale
            )
        except ValueError as exc:
            logger.info("Rejected timeline layout request: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        body: dict[str, Any] = {
            "day": payload.day.isoformat(),
            "timezone": calendar.name,
            "pixelsPerHour": scale,
            "results": {item_id: result.to_dict() for item_id, result in results.items()},
        }
        canvas_width = (
            payload.canvas_width if payload.canvas_width is not None else timeline.canvas_width
        )
        if payload.canvas_width is not None:
            frames = build_block_frames(
                results, canvas_width, timeline.label_gutter_px, timeline.block_gap_px
            )
            body["frames"] = {item_id: frame.to_dict() for item_id, frame in frames.items()}
        if payload.draft is not None:
            draft_frame = build_draft_frame(
                payload.draft,
                calendar.window_for(payload.day),
                scale,
                canvas_width,
                timeline.label_gutter_px,
                timeline.block_gap_px,
                timeline.min_visual_height_px,
            )
            body["draft"] = draft_frame.to_dict() if draft_frame else None
        return ORJSONResponse(body)

    return app
