"""Readable sources for the history log."""

from abc import ABC, abstractmethod
from pathlib import Path

from .config import get_history_path
from .errors import SourceUnavailable


class HistorySource(ABC):
    """Base class for places a history log can be read from.

    ``load_history`` only needs the full text of the log and a description
    to put in error messages, so tests can substitute an in-memory source.
    """

    @abstractmethod
    def describe(self) -> str:
        """Return a human-readable description used in diagnostics."""
        ...

    @abstractmethod
    def read_text(self) -> str:
        """Return the whole log. Raises SourceUnavailable on failure."""
        ...


class FileSource(HistorySource):
    """History log stored in a file, by default the configured location."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else get_history_path()

    def describe(self) -> str:
        return str(self.path)

    def read_text(self) -> str:
        try:
            if not self.path.is_file():
                raise SourceUnavailable(self.describe())
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailable(self.describe(), str(e)) from e


class TextSource(HistorySource):
    """History log held in memory."""

    def __init__(self, text: str, name: str = "<memory>"):
        self.text = text
        self.name = name

    def describe(self) -> str:
        return self.name

    def read_text(self) -> str:
        return self.text
