"""Parser for Krita history log lines.

Each line has four fields joined by ``##``::

    2024-03-07 22:50:48##D:/paintings/sketch.kra##d18810fd-f9de-4ea6-ae42-587ff2d7507a##180

The path field may be empty; the id and duration fields may not.
"""

from datetime import datetime

from .core import SessionRecord
from .errors import (
    InvalidDuration,
    InvalidTimestamp,
    MalformedLine,
    MissingDuration,
    MissingResourceId,
)

DELIMITER = "##"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_line(line: str) -> SessionRecord:
    """Parse a single history line into a SessionRecord.

    Raises a LogParseError subclass naming the failing field.
    """
    raw = line.strip()
    fields = raw.split(DELIMITER)
    if len(fields) != 4:
        raise MalformedLine(raw, f"found {len(fields)} fields")
    time_field, path_field, id_field, duration_field = fields

    try:
        timestamp = datetime.strptime(time_field, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise InvalidTimestamp(raw, str(e)) from e

    if not id_field.strip():
        raise MissingResourceId(raw)

    if not duration_field:
        raise MissingDuration(raw)
    if not (duration_field.isascii() and duration_field.isdigit()):
        raise InvalidDuration(raw, f"{duration_field!r} is not a non-negative integer")
    duration = int(duration_field)

    return SessionRecord(
        timestamp=timestamp,
        resource_path=path_field or None,
        resource_id=id_field,
        duration_seconds=duration,
    )


def format_line(record: SessionRecord) -> str:
    """Format a SessionRecord back into a history line."""
    return DELIMITER.join([
        record.timestamp.strftime(TIMESTAMP_FORMAT),
        record.resource_path or "",
        record.resource_id,
        str(record.duration_seconds),
    ])
