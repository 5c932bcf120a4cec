"""Load the history log into an ordered, path-repaired record collection.

Later sessions on a file often log only its id, without the path. Ingestion
walks the log from the newest line backwards, remembering the latest known
path for every id, and fills missing paths from that mapping. So a gap takes
the path of the nearest later line naming its id, and a gap after the last
such line stays unresolved.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator

from .core import DayRange, SessionRecord
from .errors import SourceUnavailable
from .parser import parse_line
from .source import FileSource, HistorySource

logger = logging.getLogger(__name__)


class History:
    """Session records in log order (oldest first)."""

    def __init__(self, records: Iterable[SessionRecord]):
        self.records = tuple(records)

    def __iter__(self) -> Iterator[SessionRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        return f"History({len(self.records)} records)"

    def between_inclusive(self, day_range: DayRange) -> Iterator[SessionRecord]:
        """Yield records whose timestamp lies within ``day_range``, in log order."""
        start, end = day_range.start, day_range.end
        return (r for r in self.records if start <= r.timestamp <= end)


def load_history(source: HistorySource | Path | str | None = None) -> History:
    """Read, parse, and backfill the history log.

    ``source`` defaults to the configured history file. Raises
    SourceUnavailable if it cannot be read and a LogParseError subclass for
    the first bad line; no partial history is returned.
    """
    if source is None or isinstance(source, (str, Path)):
        source = FileSource(source)

    try:
        content = source.read_text()
    except SourceUnavailable as e:
        logger.warning("Failed to read history %s: %s", source.describe(), e)
        raise

    history = History(read_records(content))
    logger.debug("Loaded %d records from %s", len(history), source.describe())
    return history


def read_records(content: str) -> list[SessionRecord]:
    """Parse every non-blank line of ``content`` and backfill missing paths."""
    lines = [line.strip() for line in content.splitlines()]
    lines = [line for line in lines if line]

    records = []
    latest_path_by_id: dict[str, str] = {}
    filled = unresolved = 0

    for line in reversed(lines):
        record = parse_line(line)
        if record.resource_path is not None:
            latest_path_by_id[record.resource_id] = record.resource_path
        elif record.resource_id in latest_path_by_id:
            record.resource_path = latest_path_by_id[record.resource_id]
            filled += 1
        else:
            unresolved += 1
        records.append(record)

    records.reverse()
    if filled or unresolved:
        logger.debug("Backfilled %d paths, %d left unresolved", filled, unresolved)
    return records
