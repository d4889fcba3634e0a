"""Tests for the dashboard session lifecycle."""

import threading
import time

import pytest

from painlog import session as session_module
from painlog.engine.csv_loader import CsvParseError, UnsupportedFileTypeError
from painlog.session import SessionManager, build_session


@pytest.fixture
def manager():
    return SessionManager()


def test_build_session(example_csv_bytes):
    session = build_session("log.csv", "text/csv", example_csv_bytes)
    assert session.is_active
    assert session.file_name == "log.csv"
    assert session.has_data
    assert len(session.entries) == 3
    assert session.chart_data["area"]["data"] == [1, 2, 0, 0]
    assert session.to_dict()["aggregations"]["area_frequency"] == [1, 2, 0, 0]


def test_start_upload_sets_current(manager, example_csv_bytes):
    assert manager.current is None
    session = manager.start_upload("log.csv", "text/csv", example_csv_bytes)
    assert manager.current is session


def test_new_upload_disposes_previous(manager, example_csv_bytes):
    first = manager.start_upload("first.csv", "text/csv", example_csv_bytes)
    second = manager.start_upload("second.csv", "text/csv", example_csv_bytes)

    assert manager.current is second
    assert not first.is_active
    assert first.entries == []
    assert first.aggregations is None
    assert first.metrics == {}
    assert first.summary == {}
    assert first.chart_data == {}
    assert first.to_dict()["aggregations"] is None
    assert second.is_active


def test_failed_upload_keeps_previous(manager, example_csv_bytes):
    first = manager.start_upload("log.csv", "text/csv", example_csv_bytes)

    with pytest.raises(CsvParseError):
        manager.start_upload("bad.csv", "text/csv", b"date,time,area,pain_score\n1,2\n")
    with pytest.raises(UnsupportedFileTypeError):
        manager.start_upload("log.txt", "text/plain", example_csv_bytes)

    assert manager.current is first
    assert first.is_active


def test_reset_disposes_current(manager, example_csv_bytes):
    session = manager.start_upload("log.csv", "text/csv", example_csv_bytes)
    manager.reset()
    assert manager.current is None
    assert not session.is_active
    assert session.aggregations is None
    assert session.metrics == {}

    # Resetting again is a no-op
    manager.reset()
    assert manager.current is None


def test_dispose_twice_is_safe(example_csv_bytes):
    session = build_session("log.csv", "text/csv", example_csv_bytes)
    session.dispose()
    session.dispose()
    assert session.disposed


def test_concurrent_uploads_are_serialized(manager, example_csv_bytes, monkeypatch):
    running = []
    overlaps = []
    real_build = session_module.build_session

    def slow_build(*args):
        running.append(1)
        if len(running) > 1:
            overlaps.append(len(running))
        time.sleep(0.05)
        try:
            return real_build(*args)
        finally:
            running.pop()

    monkeypatch.setattr(session_module, "build_session", slow_build)
    threads = [
        threading.Thread(target=manager.start_upload, args=(f"log{i}.csv", "text/csv", example_csv_bytes))
        for i in range(3)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert overlaps == []
    assert manager.current.is_active
    assert manager.current.file_name in {"log0.csv", "log1.csv", "log2.csv"}
