"""Environment-driven configuration: history location and day-start hour."""

import os
import sys
from pathlib import Path

from .errors import InvalidConfiguration

DEFAULT_DAY_START_HOUR = 6


def get_history_path() -> Path:
    """Return the path to the Krita plugin's history log."""
    env = os.environ.get("KRA_STATS_HISTORY_PATH")
    if env:
        return Path(env)

    if sys.platform == "win32":
        return Path(os.environ.get("USERPROFILE", "")) / ".kra_history" / "history"
    else:  # macOS and Linux
        return Path.home() / ".kra_history" / "history"


def get_day_start_hour() -> int:
    """Return the hour at which a logical day begins."""
    env = os.environ.get("KRA_STATS_DAY_START_HOUR")
    if not env:
        return DEFAULT_DAY_START_HOUR

    try:
        hour = int(env)
    except ValueError as e:
        raise InvalidConfiguration(f"KRA_STATS_DAY_START_HOUR must be an integer, got {env!r}") from e
    if not 0 <= hour < 24:
        raise InvalidConfiguration(f"KRA_STATS_DAY_START_HOUR must be in [0, 24), got {hour}")
    return hour
