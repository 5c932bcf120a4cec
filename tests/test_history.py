"""Tests for history ingestion and range filtering."""

import logging
import os
from datetime import date, datetime

import pytest

from kra_stats.core import DayRange
from kra_stats.day_boundary import day_range
from kra_stats.errors import (
    IngestError,
    InvalidTimestamp,
    LogParseError,
    MissingResourceId,
    SourceUnavailable,
)
from kra_stats.history import History, load_history, read_records
from kra_stats.source import FileSource, TextSource


class TestBackfill:
    def test_gap_takes_nearest_later_path(self):
        content = "\n".join([
            "2024-03-07 10:00:00##A.kra##id1##10",
            "2024-03-07 11:00:00####id1##20",
            "2024-03-07 12:00:00##B.kra##id1##30",
            "2024-03-07 13:00:00####id1##5",
        ])
        records = read_records(content)
        # the newest gap is scanned before any path for id1 is known
        assert [r.resource_path for r in records] == ["A.kra", "B.kra", "B.kra", None]
        assert [r.duration_seconds for r in records] == [10, 20, 30, 5]

    def test_gap_before_first_name_is_filled_from_later_name(self):
        content = "\n".join([
            "2024-03-07 22:48:48####other-id##180",
            "2024-03-07 22:49:48##h1ello.kra##same-id##180",
            "2024-03-07 22:50:48####same-id##180",
            "2024-03-07 22:51:48##hello.kra##same-id##180",
        ])
        records = read_records(content)
        assert [r.resource_path for r in records] == [None, "h1ello.kra", "hello.kra", "hello.kra"]

    def test_gap_after_last_name_stays_absent(self):
        content = "\n".join([
            "2024-03-07 10:00:00##A.kra##id1##10",
            "2024-03-07 11:00:00####id1##20",
        ])
        records = read_records(content)
        assert [r.resource_path for r in records] == ["A.kra", None]

    def test_ids_are_independent(self):
        content = "\n".join([
            "2024-03-07 10:00:00####id1##10",
            "2024-03-07 11:00:00##two.kra##id2##20",
            "2024-03-07 12:00:00##one.kra##id1##30",
        ])
        records = read_records(content)
        assert [r.resource_path for r in records] == ["one.kra", "two.kra", "one.kra"]

    def test_blank_lines_skipped_and_order_kept(self, sample_text):
        records = read_records(sample_text)
        assert len(records) == 6
        assert [r.timestamp for r in records] == sorted(r.timestamp for r in records)

    def test_one_bad_line_fails_everything(self):
        content = "\n".join([
            "2024-03-07 10:00:00##A.kra##id1##10",
            "2024-03-07 11:00:00##A.kra####20",
            "2024-03-07 12:00:00##A.kra##id1##30",
        ])
        with pytest.raises(MissingResourceId) as exc:
            read_records(content)
        assert exc.value.line == "2024-03-07 11:00:00##A.kra####20"

    def test_empty_content(self):
        assert read_records("") == []
        assert read_records("\n   \n") == []


class TestLoadHistory:
    def test_load_from_path(self, history_file):
        history = load_history(history_file)
        assert len(history) == 6
        paths = [r.resource_path for r in history]
        assert paths == [
            "D:/paint/cat.kra",
            "D:/paint/cat.kra",
            "D:/paint/dog.kra",
            None,
            "D:/paint/cat.kra",
            None,
        ]

    def test_load_from_configured_path(self, history_env):
        history = load_history()
        assert len(history) == 6

    def test_load_from_text_source(self, sample_text):
        history = load_history(TextSource(sample_text))
        assert len(history) == 6

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "nope" / "history"
        with pytest.raises(SourceUnavailable) as exc:
            load_history(missing)
        assert exc.value.source == str(missing)
        assert not isinstance(exc.value, LogParseError)
        assert isinstance(exc.value, IngestError)

    def test_directory_is_unavailable(self, tmp_path):
        with pytest.raises(SourceUnavailable):
            load_history(FileSource(tmp_path))

    @pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores permissions")
    def test_unreadable_file(self, history_file):
        history_file.chmod(0)
        try:
            with pytest.raises(SourceUnavailable):
                load_history(history_file)
        finally:
            history_file.chmod(0o644)

    def test_name_too_long_is_unavailable(self, tmp_path):
        path = tmp_path / ("x" * 300) / "history"
        with pytest.raises(SourceUnavailable) as exc:
            load_history(path)
        assert exc.value.source == str(path)

    def test_invalid_utf8_is_unavailable(self, tmp_path):
        path = tmp_path / "history"
        path.write_bytes(b"\xff\xfe##")
        with pytest.raises(SourceUnavailable) as exc:
            load_history(path)
        assert isinstance(exc.value.__cause__, UnicodeDecodeError)

    def test_parse_error_propagates(self, tmp_path):
        path = tmp_path / "history"
        path.write_text("2024-03-07 10:00:00##A.kra##id1##10\nnot-a-date##A.kra##id1##10\n", encoding="utf-8")
        with pytest.raises(InvalidTimestamp):
            load_history(path)

    def test_logs_load(self, history_file, caplog):
        with caplog.at_level(logging.DEBUG, logger="kra_stats.history"):
            load_history(history_file)
        assert "Loaded 6 records" in caplog.text


class TestBetweenInclusive:
    def test_boundaries_are_inclusive(self, sample_text):
        history = load_history(TextSource(sample_text))
        rng = day_range(6, date(2024, 3, 7))
        records = list(history.between_inclusive(rng))
        assert [r.timestamp for r in records] == [
            datetime(2024, 3, 7, 6, 0, 0),
            datetime(2024, 3, 7, 22, 50, 48),
            datetime(2024, 3, 8, 5, 59, 59),
        ]

    def test_range_outside_records_is_empty(self, sample_text):
        history = load_history(TextSource(sample_text))
        assert list(history.between_inclusive(day_range(6, date(2020, 1, 1)))) == []
        assert list(history.between_inclusive(day_range(6, date(2030, 1, 1)))) == []

    def test_full_span_returns_everything_in_order(self, sample_text):
        history = load_history(TextSource(sample_text))
        everything = DayRange(start=datetime.min, end=datetime.max)
        assert list(history.between_inclusive(everything)) == list(history)

    def test_does_not_consume_history(self, sample_text):
        history = load_history(TextSource(sample_text))
        rng = day_range(6, date(2024, 3, 7))
        assert list(history.between_inclusive(rng)) == list(history.between_inclusive(rng))
        assert len(history) == 6

    def test_empty_history(self):
        assert list(History([]).between_inclusive(day_range(6, date(2024, 1, 1)))) == []
