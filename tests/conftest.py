"""Shared test fixtures for kra-stats."""

import pytest

SAMPLE_HISTORY = """\
2024-03-06 21:00:00##D:/paint/cat.kra##id-cat##600

2024-03-07 05:30:00####id-cat##300
2024-03-07 06:00:00##D:/paint/dog.kra##id-dog##1200
2024-03-07 22:50:48####id-dog##180
   2024-03-08 05:59:59##D:/paint/cat.kra##id-cat##59
2024-03-08 06:00:00####id-bird##45
"""


@pytest.fixture
def sample_text():
    return SAMPLE_HISTORY


@pytest.fixture
def history_file(tmp_path):
    """Write a small history log covering two logical days (start hour 6).

    - 2024-03-06: 21:00 cat (600) + 05:30 next morning cat (300) = 900
    - 2024-03-07: 06:00 dog (1200) + 22:50 dog (180) + 05:59:59 cat (59) = 1439
    - 2024-03-08: 06:00 bird (45), path never known
    """
    path = tmp_path / ".kra_history" / "history"
    path.parent.mkdir(parents=True)
    path.write_text(SAMPLE_HISTORY, encoding="utf-8")
    return path


@pytest.fixture
def history_env(history_file, monkeypatch):
    """Point configuration at the sample history with a 6 o'clock day start."""
    monkeypatch.setenv("KRA_STATS_HISTORY_PATH", str(history_file))
    monkeypatch.setenv("KRA_STATS_DAY_START_HOUR", "6")
    return history_file
