"""Shared test fixtures for eventchain tests."""

from datetime import datetime, timedelta

import pytest

from eventchain.markov.models import Event

# Field layout of the default export: name=2, run_id=5, category_id=6, timestamp=10
HEADER = "id;source;name;channel;user_id;experience_id;kind_id;device;lang;created_at;sent_at"

BASE_TIME = datetime(2022, 5, 10, 8, 0, 0)


def make_record(name, run_id, category_id, sent_at, delimiter=";"):
    """One raw record in the default layout; run/category may be any string."""
    fields = ["1", "app", name, "web", "42", str(run_id), str(category_id), "ios", "fr", "", sent_at]
    return delimiter.join(fields)


def make_events(data):
    """Create events from (name, run_id, day_offset) tuples."""
    return [
        Event(name=name, run_id=run_id, timestamp=BASE_TIME + timedelta(days=day))
        for name, run_id, day in data
    ]


@pytest.fixture
def record_file(tmp_path):
    """Write header + record lines to a file and return its path."""

    def _write(lines, header=HEADER, name="events.csv"):
        path = tmp_path / name
        path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep ~/.eventchain.toml, ./eventchain.toml and EVENTCHAIN_* out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in ("DELIMITER", "TABLE_DELIMITER", "BRACKETED", "START", "STOP", "MIN_WEIGHT",
                "OUTPUT_FORMAT", "COMMENT", "TIMESTAMP_FORMAT"):
        monkeypatch.delenv(f"EVENTCHAIN_{key}", raising=False)
    return tmp_path
