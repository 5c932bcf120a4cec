"""FastAPI JSON feed for kra-stats.

Every route reloads the history log, since the Krita plugin keeps appending
to it while the server runs.
"""

import logging
from datetime import datetime

from fastapi import FastAPI, HTTPException, Query

from .config import get_day_start_hour, get_history_path
from .core import DayRange, SessionRecord
from .day_boundary import day_range, recent_range, today, year_bounds
from .errors import InvalidConfiguration, LogParseError, SourceUnavailable
from .history import History, load_history
from .stats import (
    daily_totals,
    recent_daily_totals,
    resource_totals,
    summarize,
    to_minutes,
    year_totals,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="kra-stats", version="0.1.0")


def _start_hour() -> int:
    try:
        return get_day_start_hour()
    except InvalidConfiguration as e:
        logger.error("Invalid configuration: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


def _load() -> History:
    """Load the configured history, mapping failures to HTTP errors."""
    try:
        return load_history(get_history_path())
    except SourceUnavailable as e:
        logger.error("No history found: %s", e)
        raise HTTPException(status_code=404, detail=f"No history found: {e}")
    except LogParseError as e:
        logger.error("Corrupt history line: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


def _record_to_dict(record: SessionRecord) -> dict:
    """Convert a SessionRecord to a JSON-serializable dict."""
    return {
        "timestamp": record.timestamp.isoformat(),
        "resource_path": record.resource_path,
        "resource_id": record.resource_id,
        "duration_seconds": record.duration_seconds,
    }


def _range_to_dict(rng: DayRange) -> dict:
    return {"start": rng.start.isoformat(), "end": rng.end.isoformat()}


# ── Routes ───────────────────────────────────────────────────────


@app.get("/api/records")
async def get_records(
    start: datetime | None = Query(None, description="Inclusive lower bound"),
    end: datetime | None = Query(None, description="Inclusive upper bound"),
):
    """Return records whose timestamp lies in [start, end]."""
    # log timestamps are naive local time
    for bound in (start, end):
        if bound is not None and bound.tzinfo is not None:
            raise HTTPException(status_code=400, detail=f"{bound.isoformat()} must not carry a timezone")

    history = _load()
    rng = DayRange(start=start or datetime.min, end=end or datetime.max)
    if rng.start > rng.end:
        raise HTTPException(status_code=400, detail="start is after end")

    records = [_record_to_dict(r) for r in history.between_inclusive(rng)]
    return {"total": len(records), "records": records}


@app.get("/api/days")
async def get_days(days: int = Query(30, ge=1, le=3660)):
    """Return per-day totals for the most recent logical days, oldest first."""
    start_hour = _start_hour()
    history = _load()
    now = _now()
    current = today(start_hour, now)
    totals = recent_daily_totals(history, start_hour, days, now)

    return {
        "start_hour": start_hour,
        "today": current.isoformat(),
        "range": _range_to_dict(recent_range(start_hour, days, now)),
        "days": [
            {
                "date": day.isoformat(),
                "weekday": day.strftime("%a"),
                "range": _range_to_dict(day_range(start_hour, day)),
                "seconds": seconds,
                "minutes": to_minutes(seconds),
            }
            for day, seconds in totals.items()
        ],
    }


@app.get("/api/year")
async def get_year(year: int | None = Query(None, ge=1, le=9998)):
    """Return per-day minutes for a year plus its max/sum/average summary."""
    start_hour = _start_hour()
    history = _load()
    current = today(start_hour, _now())
    if year is None:
        year = current.year

    first, last = year_bounds(year)
    summary = summarize(daily_totals(history, start_hour, first, last, fill_empty=False))
    totals = year_totals(history, start_hour, year, until=current)

    return {
        "year": year,
        "summary": {
            "max": summary.max_minutes,
            "sum": summary.sum_minutes,
            "average": summary.average_minutes,
            "days": summary.days,
        },
        "days": [[day.isoformat(), to_minutes(seconds)] for day, seconds in totals.items()],
    }


@app.get("/api/resources")
async def get_resources(days: int | None = Query(None, ge=1, le=3660)):
    """Return total time per file, optionally limited to recent days."""
    history = _load()
    if days is None:
        records = iter(history)
    else:
        records = history.between_inclusive(recent_range(_start_hour(), days, _now()))

    return [
        {"resource": name, "seconds": seconds, "minutes": to_minutes(seconds)}
        for name, seconds in resource_totals(records).items()
    ]


def _now() -> datetime:
    """Return the current local time; patched in tests."""
    return datetime.now()
