"""Core data models for kra-stats."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class SessionRecord:
    """One painting session read from the history log."""

    timestamp: datetime  # naive, local time
    resource_path: Optional[str]  # None when the line omitted it
    resource_id: str
    duration_seconds: int

    @property
    def display_name(self) -> str:
        return self.resource_path or self.resource_id


@dataclass(frozen=True)
class DayRange:
    """An inclusive [start, end] span covering one or more logical days."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def __iter__(self):
        yield self.start
        yield self.end
