"""
Main CLI entry point for ytreader.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ytreader import __version__
from ytreader.cli.errors import run_command
from ytreader.cli.fleet_commands import fleet_app
from ytreader.config.settings import get_settings
from ytreader.exceptions import EXIT_CODE_GENERAL_ERROR
from ytreader.models.captions import ClosedCaptionTrackInfo
from ytreader.models.channel import ChannelExtended
from ytreader.models.video import Video, VideoItem
from ytreader.models.youtube_types import parse_video_id, validate_video_id
from ytreader.services.scraper import YtScraper
from ytreader.utils.log_setup import configure_logging

console = Console()

app = typer.Typer(
    name="ytreader",
    help="YouTube channel, video and caption reader",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(fleet_app, name="fleet", help="Crawl fleet commands")

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _scraper() -> YtScraper:
    return YtScraper.from_settings(get_settings())


def _resolve_video_id(value: str) -> str:
    """Accept either a bare video ID or any supported video URL."""
    return value if validate_video_id(value) else parse_video_id(value)


def _select_track(
    tracks: list[ClosedCaptionTrackInfo], language: str
) -> Optional[ClosedCaptionTrackInfo]:
    """Pick the track for ``language``, preferring manual over auto-generated."""
    matching = [t for t in tracks if t.language.code == language]
    if not matching:
        return None
    manual = [t for t in matching if not t.is_auto_generated]
    return (manual or matching)[0]


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]ytreader[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.command()
def channel(
    channel_id: str = typer.Argument(..., help="Channel ID (UC prefix)"),
) -> None:
    """
    Show channel title, logo and subscriber count.

    Examples:
        ytreader channel UCuAXFkgsw1L7xaCfnd5JJOw
    """

    async def channel_async() -> ChannelExtended:
        async with _scraper() as scraper:
            return await scraper.get_channel(channel_id)

    result = run_command(channel_async, title="Channel Failed")

    if result.is_restricted:
        console.print(
            Panel(
                f"[yellow]{escape(result.status_message or '')}[/yellow]",
                title=f"Channel {result.id}",
                border_style="yellow",
            )
        )
        return

    subscribers = (
        f"{result.subscriber_count:,}" if result.subscriber_count is not None else "-"
    )
    console.print(
        Panel(
            f"[bold]{escape(result.title or '-')}[/bold]\n"
            f"Subscribers: {subscribers}\n"
            f"Logo: {escape(result.logo_url or '-')}",
            title=f"Channel {result.id}",
            border_style="blue",
        )
    )


@app.command()
def video(
    video_id: str = typer.Argument(..., help="Video ID or watch URL"),
) -> None:
    """
    Show video metadata, caption tracks and recommendations.

    Examples:
        ytreader video dQw4w9WgXcQ
        ytreader video "https://youtu.be/dQw4w9WgXcQ"
    """

    async def video_async() -> Video:
        async with _scraper() as scraper:
            return await scraper.get_video(_resolve_video_id(video_id))

    result = run_command(video_async, title="Video Failed")
    stats = result.statistics

    console.print(
        Panel(
            f"[bold]{escape(result.title)}[/bold]\n"
            f"Author: {escape(result.author)}\n"
            f"Uploaded: {result.upload_date:%Y-%m-%d}\n"
            f"Duration: {result.duration}\n"
            f"Views: {stats.view_count:,}  Likes: {stats.like_count:,}  "
            f"Dislikes: {stats.dislike_count:,}\n"
            f"Keywords: {escape(', '.join(result.keywords)) or '-'}",
            title=f"Video {result.id}",
            border_style="blue",
        )
    )

    if result.caption_tracks:
        tracks = Table(title="Caption Tracks")
        tracks.add_column("Language", style="cyan")
        tracks.add_column("Name")
        tracks.add_column("Auto-generated", justify="center")
        for track in result.caption_tracks:
            tracks.add_row(
                track.language.code,
                escape(track.language.name),
                "yes" if track.is_auto_generated else "no",
            )
        console.print(tracks)

    if result.recommendations:
        recs = Table(title="Recommendations")
        recs.add_column("Video ID", style="cyan")
        recs.add_column("Title")
        recs.add_column("Channel")
        for rec in result.recommendations:
            recs.add_row(
                rec.to_video_id,
                escape(rec.to_video_title),
                escape(rec.to_channel_title),
            )
        console.print(recs)


@app.command()
def uploads(
    channel_id: str = typer.Argument(..., help="Channel ID (UC prefix)"),
    limit: int = typer.Option(
        50, "--limit", "-n", min=1, help="Maximum number of uploads to list"
    ),
) -> None:
    """
    List a channel's uploads in uploads playlist order.

    Examples:
        ytreader uploads UCuAXFkgsw1L7xaCfnd5JJOw --limit 20
    """

    async def uploads_async() -> list[VideoItem]:
        items: list[VideoItem] = []
        async with _scraper() as scraper:
            async for item in scraper.get_channel_uploads(channel_id):
                items.append(item)
                if len(items) >= limit:
                    break
        return items

    items = run_command(uploads_async, title="Uploads Failed")

    table = Table(title=f"Uploads for {channel_id}")
    table.add_column("Video ID", style="cyan")
    table.add_column("Uploaded")
    table.add_column("Title")
    table.add_column("Views", justify="right")
    for item in items:
        table.add_row(
            item.id,
            f"{item.upload_date:%Y-%m-%d}",
            escape(item.title),
            f"{item.statistics.view_count:,}",
        )
    console.print(table)
    console.print(f"[dim]{len(items)} upload(s)[/dim]")


@app.command()
def captions(
    video_id: str = typer.Argument(..., help="Video ID or watch URL"),
    language: str = typer.Option(
        "en", "--language", "-l", help="Caption language code"
    ),
) -> None:
    """
    Print the caption cues of a video in one language.

    Manually authored tracks are preferred over auto-generated ones.

    Examples:
        ytreader captions dQw4w9WgXcQ --language de
    """

    async def captions_async() -> tuple[Video, Optional[list[tuple[str, str]]]]:
        async with _scraper() as scraper:
            result = await scraper.get_video(_resolve_video_id(video_id))
            info = _select_track(result.caption_tracks, language)
            if info is None:
                return result, None
            track = await scraper.get_closed_caption_track(info)
            return result, [(str(c.offset), c.text) for c in track.captions]

    result, cues = run_command(captions_async, title="Captions Failed")

    if cues is None:
        available = ", ".join(sorted({t.language.code for t in result.caption_tracks}))
        console.print(
            f"[red]No '{language}' captions for {result.id}.[/red] "
            f"Available: {available or 'none'}"
        )
        raise typer.Exit(code=EXIT_CODE_GENERAL_ERROR)

    table = Table(title=f"{escape(result.title)} ({language})")
    table.add_column("Offset", style="cyan", no_wrap=True)
    table.add_column("Text")
    for offset, text in cues:
        table.add_row(offset, escape(text))
    console.print(table)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="TRACE, DEBUG, INFO, WARNING or ERROR"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also write logs to this file"
    ),
) -> None:
    """
    ytreader - YouTube channel, video and caption reader.

    Extracts channel metadata, uploads, video details and captions from
    public YouTube pages, and launches crawl worker fleets.
    """
    if version:
        console.print(f"ytreader v{__version__}")
        raise typer.Exit(code=0)

    if log_level is not None and log_level.upper() not in _LOG_LEVELS:
        raise typer.BadParameter(
            f"Invalid log level: {log_level}", param_hint="--log-level"
        )

    configure_logging(level=log_level or get_settings().log_level, log_file=log_file)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use 'ytreader --help' for available commands[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
