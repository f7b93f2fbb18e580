from __future__ import annotations

from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Optional

import orjson
import typer
from rich.console import Console
from rich.table import Table

from adapters.filesystem.schedule_repository import FileSystemScheduleRepository
from adapters.layout.timeline import validate_pixels_per_hour
from app.config import load_settings
from app.timeline_wiring import build_calendar, build_layout_engine, configure_logging
from app.web_main import create_app
from domain.models import ScheduleItem
from domain.services.cluster_overlaps import cluster_overlaps
from domain.services.pack_columns import max_overlap_depth
from domain.services.timeline_frames import build_block_frames

app = typer.Typer(no_args_is_help=True)
console = Console()


def _parse_day(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {raw!r}") from exc


def _format_moment(moment: datetime, zone: tzinfo) -> str:
    return moment.astimezone(zone).strftime("%H:%M")


@app.command("layout")
def layout(
    items_path: Path = typer.Argument(..., help="JSON file with schedule items."),
    day: Optional[str] = typer.Option(None, help="Day to lay out (YYYY-MM-DD), defaults to today."),
    timezone: Optional[str] = typer.Option(None, help="IANA time zone for day boundaries."),
    pixels_per_hour: Optional[float] = typer.Option(None, help="Height of one hour in pixels."),
    canvas_height: Optional[float] = typer.Option(
        None, help="Canvas height; one hour is a 24th of it."
    ),
    canvas_width: Optional[float] = typer.Option(
        None, help="Canvas width used to compute horizontal frames."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the layout as JSON."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    if not items_path.exists():
        console.print(f"[red]File not found:[/] {items_path}")
        raise typer.Exit(code=1)

    try:
        settings = load_settings(config)
        configure_logging(settings)
        calendar = build_calendar(settings, timezone)
        engine = build_layout_engine(settings, calendar)
        target_day = _parse_day(day) or calendar.today()
        scale = validate_pixels_per_hour(
            settings.timeline.resolve_pixels_per_hour(pixels_per_hour, canvas_height)
        )
        window = calendar.window_for(target_day)
        items = FileSystemScheduleRepository().load_for_day(items_path, window)
        results = engine.layout(items, target_day, scale)
    except typer.BadParameter:
        raise
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Layout failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        width = canvas_width if canvas_width is not None else settings.timeline.canvas_width
        frames = build_block_frames(
            results,
            width,
            settings.timeline.label_gutter_px,
            settings.timeline.block_gap_px,
        )
        payload = {
            "day": target_day.isoformat(),
            "timezone": calendar.name,
            "pixelsPerHour": scale,
            "results": {item_id: result.to_dict() for item_id, result in results.items()},
            "frames": {item_id: frame.to_dict() for item_id, frame in frames.items()},
        }
        typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))
        return

    if not results:
        console.print(f"[yellow]No items visible on {target_day.isoformat()}[/]")
        return

    titles = {item.id: item.title for item in items}
    intervals = engine.clip_items(items, window)
    starts = {interval.item_id: interval for interval in intervals}
    table = Table(title=f"{settings.timeline.title} · {target_day.isoformat()} ({calendar.name})")
    for header in ("id", "title", "time", "column", "top px", "height px"):
        table.add_column(header)
    for item_id, result in sorted(
        results.items(), key=lambda pair: (pair[1].top_offset_px, pair[1].column)
    ):
        interval = starts[item_id]
        time_range = (
            f"{'…' if result.spans_from_prev_day else ''}"
            f"{_format_moment(interval.visible_start, calendar.zone)}–"
            f"{_format_moment(interval.visible_end, calendar.zone)}"
            f"{'…' if result.spans_to_next_day else ''}"
        )
        table.add_row(
            item_id,
            titles.get(item_id, ""),
            time_range,
            f"{result.column + 1}/{result.column_count}",
            f"{result.top_offset_px:.1f}",
            f"{result.height_px:.1f}",
        )
    console.print(table)
    clusters = cluster_overlaps(intervals)
    console.print(
        f"[green]{len(results)} items[/] in {len(clusters)} clusters, "
        f"max overlap {max_overlap_depth(intervals)}"
    )


@app.command("validate")
def validate(
    items_path: Path = typer.Argument(..., help="JSON file with schedule items."),
) -> None:
    if not items_path.exists():
        console.print(f"[red]File not found:[/] {items_path}")
        raise typer.Exit(code=1)

    try:
        items: list[ScheduleItem] = FileSystemScheduleRepository().load_all(items_path)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    degenerate = [
        item.id for item in items if item.end_time is not None and not item.has_usable_end()
    ]
    console.print(f"[green]Valid schedule file:[/] {items_path} ({len(items)} items)")
    if degenerate:
        console.print(
            f"[yellow]{len(degenerate)} items end before they start and will use one hour:[/] "
            + ", ".join(degenerate)
        )


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    import uvicorn

    settings = load_settings(config)
    configure_logging(settings)
    uvicorn.run(create_app(settings), host=host, port=port)


if __name__ == "__main__":
    app()
