"""Command-line interface for the time logger."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .config import TrackerSettings
from .engine import InvalidActivityName, TimerState
from .exporting import export_log
from .models import format_duration
from .reporting import SummaryPrinter, render_running
from .server_runner import run_dashboard
from .session import TrackerSession

app = typer.Typer(help="Log time spent on named activities.")

logger = logging.getLogger(__name__)


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def session(
    export: bool = typer.Option(
        False,
        "--export",
        help="Write the log to timelog-YYYY-MM-DD.json when the session ends.",
    ),
    export_dir: Optional[Path] = typer.Option(
        None,
        "--export-dir",
        path_type=Path,
        help="Directory for the export file (implies --export).",
    ),
    tick_seconds: float = typer.Option(
        1.0,
        "--tick-interval",
        min=0.1,
        help="Seconds between elapsed-time refreshes.",
    ),
) -> None:
    """Time activities interactively; press Enter to stop each one."""
    settings = TrackerSettings.from_intervals(tick_seconds, export_dir=export_dir)
    tracker = _build_session(settings)
    try:
        _run_interactive(tracker)
    finally:
        tracker.close()

    SummaryPrinter(tracker.log, echo=typer.echo).print_log()

    if export or export_dir is not None:
        try:
            path = export_log(tracker.log, directory=settings.export_dir)
        except OSError as exc:
            typer.echo(f"Export failed: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        typer.echo(f"Exported to {path}")


@app.command("format")
def format_command(seconds: int = typer.Argument(..., min=0, help="Duration in seconds.")) -> None:
    """Print a duration the way logged entries display it."""
    typer.echo(format_duration(seconds))


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the dashboard."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the dashboard."
    ),
    tick_seconds: float = typer.Option(
        1.0,
        "--tick-interval",
        min=0.1,
        help="Seconds between elapsed-time refreshes.",
    ),
    open_browser: bool = typer.Option(
        True,
        "--open-browser/--no-open-browser",
        help="Automatically launch the dashboard in your default browser.",
    ),
) -> None:
    """Start the local dashboard."""
    run_dashboard(
        host=host,
        port=port,
        settings=TrackerSettings.from_intervals(tick_seconds),
        open_browser=open_browser,
    )


def _build_session(settings: TrackerSettings) -> TrackerSession:
    return TrackerSession.from_settings(settings)


def _run_interactive(tracker: TrackerSession) -> None:
    while True:
        try:
            name = typer.prompt(
                "What are you working on? (blank to finish)",
                default="",
                show_default=False,
            )
        except typer.Abort:
            break
        if not name.strip():
            break

        try:
            tracker.start(name)
        except InvalidActivityName:
            continue

        unsubscribe = tracker.engine.subscribe(_print_progress)
        _print_progress(tracker.engine.snapshot())
        try:
            typer.prompt("", default="", show_default=False, prompt_suffix="")
        except typer.Abort:
            logger.debug("Input closed while timing; stopping.")
        finally:
            unsubscribe()

        entry = tracker.stop()
        if entry is None:
            typer.echo("Discarded (under one second).")
        else:
            typer.echo(f"Logged {entry.name}: {entry.formatted_time}")


def _print_progress(state: TimerState) -> None:
    if state.is_running:
        typer.echo(f"\r{render_running(state)}  (Enter to stop)", nl=False)
