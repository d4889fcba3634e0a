"""Unit tests for record validation and Entry construction."""

import time
from datetime import datetime

import pytest

from painlog.engine.models import Entry
from painlog.engine.record_validator import REQUIRED_FIELDS, build_entry, validate_records


def _record(**overrides):
    record = {"date": "2024-01-01", "time": "09:30", "area": 1, "pain_score": 2}
    record.update(overrides)
    return record


def test_build_entry_derives_timestamp_and_hour():
    entry = build_entry(_record())
    assert entry == Entry(date="2024-01-01", time="09:30", area=1, pain_score=2)
    assert entry.timestamp == datetime(2024, 1, 1, 9, 30)
    assert entry.hour == 9


@pytest.mark.parametrize("missing", REQUIRED_FIELDS)
def test_build_entry_missing_field_returns_none(missing):
    record = _record()
    del record[missing]
    assert build_entry(record) is None


@pytest.mark.parametrize("absent", REQUIRED_FIELDS)
def test_build_entry_absent_value_returns_none(absent):
    assert build_entry(_record(**{absent: None})) is None


def test_build_entry_accepts_integral_floats():
    entry = build_entry(_record(area=3.0, pain_score=4.0))
    assert entry.area == 3
    assert entry.pain_score == 4
    assert isinstance(entry.area, int)


@pytest.mark.parametrize("field_name, value", [("area", 1.5), ("pain_score", "high"), ("area", "back")])
def test_build_entry_non_integral_code_returns_none(field_name, value):
    assert build_entry(_record(**{field_name: value})) is None


def test_build_entry_keeps_out_of_range_codes():
    entry = build_entry(_record(area=7, pain_score=9))
    assert entry.area == 7
    assert entry.pain_score == 9


@pytest.mark.parametrize("field_name, value", [("date", "not a date"), ("time", "25:99")])
def test_build_entry_unparseable_timestamp_returns_none(field_name, value):
    assert build_entry(_record(**{field_name: value})) is None


def test_entry_rejects_unparseable_timestamp():
    with pytest.raises(ValueError):
        Entry(date="someday", time="noon-ish", area=0, pain_score=0)


def test_validate_records_filters_and_keeps_order():
    records = [
        _record(time="10:00"),
        _record(area=None),
        {"date": "2024-01-01", "time": "08:00", "area": 2},
        _record(time="07:00", note="extra column"),
    ]
    entries = validate_records(records)
    assert [e.time for e in entries] == ["10:00", "07:00"]


def test_validate_records_count_equal_when_nothing_missing():
    records = [_record(time=f"{h:02d}:00") for h in range(5)]
    assert len(validate_records(records)) == len(records)


def test_validate_records_empty():
    assert validate_records([]) == []


@pytest.mark.parametrize(
    "date, expected",
    [("01/13/2024", datetime(2024, 1, 13, 9, 0)), ("05/01/2024", datetime(2024, 5, 1, 9, 0))],
)
def test_slash_dates_are_month_first(date, expected):
    assert Entry(date=date, time="09:00", area=0, pain_score=0).timestamp == expected


def test_day_first_only_date_is_dropped():
    with pytest.raises(ValueError):
        Entry(date="13/01/2024", time="09:00", area=0, pain_score=0)
    assert build_entry(_record(date="13/01/2024")) is None


@pytest.fixture
def utc_local_time(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_offset_time_becomes_naive_local(utc_local_time):
    entry = Entry(date="2024-01-01", time="09:00+09:00", area=1, pain_score=1)
    assert entry.timestamp == datetime(2024, 1, 1, 0, 0)
    assert entry.timestamp.tzinfo is None
    assert entry.hour == 0
