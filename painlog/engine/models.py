"""
Data models for pain log records and aggregation views.

Defines the loosely typed raw record produced by the CSV loader, the strict
Entry that every later stage works on, and the four aggregation views.
"""

import warnings
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

import pandas as pd


# A single CSV cell after dynamic typing: Number, Text or Absent (None)
Scalar = Optional[Union[int, float, str]]
RawRecord = Mapping[str, Scalar]

AREA_LABELS = {
    0: "no pain",
    1: "lower back",
    2: "back",
    3: "shoulder",
}

PAIN_SCORE_LABELS = {
    0: "none",
    1: "mild",
    2: "moderate",
    3: "severe",
    4: "very severe",
}


def parse_local_timestamp(date: str, time: str) -> datetime:
    """
    Combine a date and a time-of-day string into a naive local datetime.

    The two parts are joined with a single space and parsed leniently
    ("2024-01-01 09:00", "01/02/2024 9:30 PM", ...). Slash dates are always
    month first: "05/01/2024" is May 1, and "13/01/2024" is rejected rather
    than read day first. Offsets such as "+09:00" are converted to the
    machine's local time and dropped.

    Raises:
        ValueError: If the combined string is not a recognizable date-time
    """
    combined = f"{date} {time}"
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            parsed = pd.to_datetime(combined, errors="coerce")
        except (TypeError, OverflowError) as e:
            raise ValueError(f"Unparseable date/time: {combined!r}") from e
    # pandas warns when it falls back to a day-first reading
    if any("dayfirst" in str(w.message) for w in caught):
        raise ValueError(f"Ambiguous day-first date/time: {combined!r}")
    if pd.isna(parsed):
        raise ValueError(f"Unparseable date/time: {combined!r}")

    timestamp = parsed.to_pydatetime()
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone().replace(tzinfo=None)
    return timestamp


@dataclass(frozen=True)
class Entry:
    """
    One validated pain-tracking record.

    Attributes:
        date: Calendar-day string exactly as logged (e.g. "2024-01-01")
        time: Time-of-day string exactly as logged (e.g. "09:00")
        area: Body-region code, normally 0-3 (see AREA_LABELS)
        pain_score: Pain intensity, normally 0-4 (see PAIN_SCORE_LABELS)
        timestamp: Local date-time derived from date and time
    """
    date: str
    time: str
    area: int
    pain_score: int
    timestamp: datetime = field(init=False, compare=False)

    def __post_init__(self):
        """Derive the timestamp; raises ValueError if date/time don't parse."""
        object.__setattr__(self, "timestamp", parse_local_timestamp(self.date, self.time))

    @property
    def hour(self) -> int:
        """Local hour of day, 0-23."""
        return self.timestamp.hour


@dataclass(frozen=True)
class DailyTrendPoint:
    day: str
    average: float


@dataclass(frozen=True)
class TimeSeriesPoint:
    timestamp: datetime
    pain_score: int


@dataclass(frozen=True)
class AggregationResult:
    """
    The four independent views computed from one ordered Entry sequence.

    Attributes:
        daily_trend: One point per distinct day, sorted by day
        area_frequency: Exactly four counts for area codes 0-3
        time_series: One point per entry, in chronological order
        hourly_average: Exactly 24 averages; hours without entries are 0.0
    """
    daily_trend: List[DailyTrendPoint]
    area_frequency: List[int]
    time_series: List[TimeSeriesPoint]
    hourly_average: List[float]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "daily_trend": [
                {"day": p.day, "average": p.average} for p in self.daily_trend
            ],
            "area_frequency": list(self.area_frequency),
            "time_series": [
                {"timestamp": p.timestamp.isoformat(), "pain_score": p.pain_score}
                for p in self.time_series
            ],
            "hourly_average": list(self.hourly_average),
        }


def entries_to_frame(entries: List[Entry]) -> pd.DataFrame:
    """Build a DataFrame with one row per entry, in the given order."""
    return pd.DataFrame(
        {
            "date": [e.date for e in entries],
            "area": [e.area for e in entries],
            "pain_score": [e.pain_score for e in entries],
            "hour": [e.hour for e in entries],
        }
    )
