"""Logical day arithmetic for days that start at a configurable hour.

A "logical day" is a calendar date whose span runs from ``start_hour:00:00``
on that date to one second before ``start_hour:00:00`` on the next date.
With ``start_hour=6``, a session at 2024-03-08 02:30 belongs to 2024-03-07.

All ranges are inclusive at both ends, at one-second resolution.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from .core import DayRange
from .errors import InvalidConfiguration

ONE_DAY = timedelta(days=1)
ONE_SECOND = timedelta(seconds=1)


def _check_start_hour(start_hour: int) -> None:
    if not 0 <= start_hour < 24:
        raise InvalidConfiguration(f"start_hour must be in [0, 24), got {start_hour}")


def belongs_to_day(start_hour: int, instant: datetime) -> date:
    """Return the logical day that ``instant`` falls in."""
    if instant.hour >= start_hour:
        return instant.date()
    return instant.date() - ONE_DAY


def day_range(start_hour: int, day: date) -> DayRange:
    """Return the inclusive range of a single logical day.

    For example, ``day_range(6, date(2023, 1, 15))`` is
    ``2023-01-15 06:00:00 .. 2023-01-16 05:59:59``.
    """
    _check_start_hour(start_hour)
    start = datetime.combine(day, time(hour=start_hour))
    return DayRange(start=start, end=start + ONE_DAY - ONE_SECOND)


def span_range(start_hour: int, from_date: date, to_date: date) -> DayRange:
    """Return the inclusive range covering ``from_date`` through ``to_date``."""
    if from_date > to_date:
        raise InvalidConfiguration(f"from_date {from_date} is after to_date {to_date}")
    return DayRange(
        start=day_range(start_hour, from_date).start,
        end=day_range(start_hour, to_date).end,
    )


def today(start_hour: int, now: Optional[datetime] = None) -> date:
    """Return the logical day containing ``now`` (local time by default)."""
    if now is None:
        now = datetime.now()
    return belongs_to_day(start_hour, now)


def recent_range(start_hour: int, num_days: int, now: Optional[datetime] = None) -> DayRange:
    """Return the range of the last ``num_days`` logical days, today included."""
    if num_days < 1:
        raise InvalidConfiguration(f"num_days must be at least 1, got {num_days}")
    last = today(start_hour, now)
    first = last - timedelta(days=num_days - 1)
    return span_range(start_hour, first, last)


def today_range(start_hour: int, now: Optional[datetime] = None) -> DayRange:
    return recent_range(start_hour, 1, now)


def year_bounds(year: int) -> tuple[date, date]:
    """Return the first and last calendar dates of ``year``."""
    return date(year, 1, 1), date(year, 12, 31)


def iterate_days(start_hour: int, from_date: date, to_date: date) -> Iterator[tuple[date, DayRange]]:
    """Yield ``(day, range)`` for every date from ``from_date`` to ``to_date`` inclusive."""
    _check_start_hour(start_hour)
    day = from_date
    while day <= to_date:
        yield day, day_range(start_hour, day)
        day += ONE_DAY
