"""CLI entry point for kra-stats."""

import os

import click
import uvicorn

from .config import get_day_start_hour, get_history_path
from .errors import InvalidConfiguration, LogParseError, SourceUnavailable
from .history import load_history


@click.group()
def main():
    """Painting-time statistics from the Krita history log."""
    pass


@main.command()
@click.option("--port", default=8080, help="Port to serve on.")
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
@click.option("--history", "history_path", type=click.Path(dir_okay=False), default=None,
              help="History log to read (overrides KRA_STATS_HISTORY_PATH).")
@click.option("--day-start-hour", type=int, default=None,
              help="Hour a logical day begins (overrides KRA_STATS_DAY_START_HOUR).")
def serve(port: int, host: str, history_path: str | None, day_start_hour: int | None):
    """Check the history log, then start the JSON statistics feed."""
    # the server reads its configuration from the environment on every request
    if history_path is not None:
        os.environ["KRA_STATS_HISTORY_PATH"] = history_path
    if day_start_hour is not None:
        os.environ["KRA_STATS_DAY_START_HOUR"] = str(day_start_hour)

    try:
        start_hour = get_day_start_hour()
    except InvalidConfiguration as e:
        raise click.ClickException(str(e))

    path = get_history_path()
    try:
        history = load_history(path)
    except SourceUnavailable as e:
        click.echo(f"Warning: {e}; routes answer 404 until it exists", err=True)
    except LogParseError as e:
        raise click.ClickException(f"Corrupt history {path}: {e}")
    else:
        click.echo(f"Loaded {len(history)} sessions from {path}, days start at {start_hour}:00")

    click.echo(f"Starting kra-stats on http://{host}:{port}")
    uvicorn.run("kra_stats.server:app", host=host, port=port, reload=False)
