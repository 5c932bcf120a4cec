"""Exception hierarchy for kra-stats."""


class KraStatsError(Exception):
    """Base class for all kra-stats errors."""


class InvalidConfiguration(KraStatsError, ValueError):
    """A configuration value (e.g. the day-start hour) is out of range."""


class IngestError(KraStatsError):
    """Loading the history failed."""


class SourceUnavailable(IngestError):
    """The history source is missing or cannot be read."""

    def __init__(self, source: str, reason: str = ""):
        self.source = source
        message = f"{source} doesn't exist or has no permission"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class LogParseError(IngestError, ValueError):
    """A history line could not be parsed. Carries the offending line."""

    reason = "is illegal"

    def __init__(self, line: str, detail: str = ""):
        self.line = line
        message = f"'{line}' {self.reason}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MalformedLine(LogParseError):
    reason = "does not have exactly four '##'-separated fields"


class InvalidTimestamp(LogParseError):
    reason = "has an invalid timestamp"


class MissingResourceId(LogParseError):
    reason = "has empty file id"


class MissingDuration(LogParseError):
    reason = "has empty duration"


class InvalidDuration(LogParseError):
    reason = "has an invalid duration"
