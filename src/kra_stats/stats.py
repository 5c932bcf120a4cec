"""Aggregations over a History: per-day totals, summaries, per-file totals.

Totals are exact integer seconds. ``to_minutes`` is the only conversion to
minutes, and it floors, so a sum of per-day minutes never exceeds the
minutes of the summed seconds.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from .core import SessionRecord
from .day_boundary import belongs_to_day, iterate_days, span_range, today, year_bounds
from .errors import InvalidConfiguration
from .history import History


@dataclass
class DaySummary:
    """Max, sum, and average of daily totals, in whole minutes."""

    max_minutes: int
    sum_minutes: int
    average_minutes: int
    days: int


def to_minutes(seconds: int) -> int:
    return seconds // 60


def total_seconds(records: Iterable[SessionRecord]) -> int:
    return sum(r.duration_seconds for r in records)


def daily_totals(
    history: History,
    start_hour: int,
    from_date: date,
    to_date: date,
    fill_empty: bool = True,
) -> dict[date, int]:
    """Return seconds per logical day between ``from_date`` and ``to_date``.

    With ``fill_empty`` every day in the span is present (zero if idle);
    otherwise only days that have at least one record appear.
    """
    totals: dict[date, int] = {}
    if fill_empty:
        totals = {day: 0 for day, _ in iterate_days(start_hour, from_date, to_date)}

    for record in history.between_inclusive(span_range(start_hour, from_date, to_date)):
        day = belongs_to_day(start_hour, record.timestamp)
        totals[day] = totals.get(day, 0) + record.duration_seconds

    return dict(sorted(totals.items()))


def summarize(totals: dict[date, int]) -> DaySummary:
    """Summarize daily totals; the average is taken over the days given."""
    if not totals:
        return DaySummary(max_minutes=0, sum_minutes=0, average_minutes=0, days=0)

    sum_minutes = to_minutes(sum(totals.values()))
    return DaySummary(
        max_minutes=to_minutes(max(totals.values())),
        sum_minutes=sum_minutes,
        average_minutes=sum_minutes // len(totals),
        days=len(totals),
    )


def year_totals(
    history: History,
    start_hour: int,
    year: int,
    until: Optional[date] = None,
) -> dict[date, int]:
    """Return seconds per day of ``year`` for the days that have records.

    When ``until`` is given, idle days from January 1st through ``until`` are
    included with a zero total as well.
    """
    first, last = year_bounds(year)
    totals = daily_totals(history, start_hour, first, last, fill_empty=False)
    if until is not None and until >= first:
        for day, _ in iterate_days(start_hour, first, min(until, last)):
            totals.setdefault(day, 0)
        totals = dict(sorted(totals.items()))
    return totals


def recent_daily_totals(
    history: History,
    start_hour: int,
    num_days: int,
    now: Optional[datetime] = None,
) -> dict[date, int]:
    """Return zero-filled seconds per day for the last ``num_days`` logical days."""
    if num_days < 1:
        raise InvalidConfiguration(f"num_days must be at least 1, got {num_days}")
    last = today(start_hour, now)
    first = last - timedelta(days=num_days - 1)
    return daily_totals(history, start_hour, first, last)


def resource_totals(records: Iterable[SessionRecord]) -> dict[str, int]:
    """Return seconds per file, largest first.

    Files are keyed by path, or by id when the path never got resolved.
    """
    totals: dict[str, int] = {}
    for record in records:
        key = record.display_name
        totals[key] = totals.get(key, 0) + record.duration_seconds
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))
