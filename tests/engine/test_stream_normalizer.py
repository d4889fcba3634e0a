"""Unit tests for chronological ordering of entries."""

from painlog.engine.models import Entry
from painlog.engine.stream_normalizer import normalize_stream


def test_normalize_stream_sorts_by_timestamp():
    entries = [
        Entry(date="2024-01-02", time="08:00", area=0, pain_score=0),
        Entry(date="2024-01-01", time="21:00", area=1, pain_score=4),
        Entry(date="2024-01-01", time="09:00", area=1, pain_score=2),
    ]
    ordered = normalize_stream(entries)
    assert [(e.date, e.time) for e in ordered] == [
        ("2024-01-01", "09:00"),
        ("2024-01-01", "21:00"),
        ("2024-01-02", "08:00"),
    ]


def test_normalize_stream_is_stable_for_equal_timestamps():
    first = Entry(date="2024-01-01", time="09:00", area=1, pain_score=1)
    second = Entry(date="2024-01-01", time="09:00", area=2, pain_score=3)
    third = Entry(date="2024-01-01", time="09:00", area=3, pain_score=2)
    earlier = Entry(date="2024-01-01", time="08:00", area=0, pain_score=0)

    ordered = normalize_stream([first, second, earlier, third])
    assert ordered == [earlier, first, second, third]
    assert [e.area for e in ordered] == [0, 1, 2, 3]


def test_normalize_stream_does_not_mutate_input():
    entries = [
        Entry(date="2024-01-02", time="08:00", area=0, pain_score=0),
        Entry(date="2024-01-01", time="08:00", area=0, pain_score=0),
    ]
    snapshot = list(entries)
    normalize_stream(entries)
    assert entries == snapshot


def test_normalize_stream_empty():
    assert normalize_stream([]) == []
