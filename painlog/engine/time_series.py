"""
Time Series

Every entry as a (timestamp, pain score) point, for the scatter chart.
"""

from typing import List

from .models import Entry, TimeSeriesPoint


def compute_time_series(entries: List[Entry]) -> List[TimeSeriesPoint]:
    """One point per entry, same order; duplicates at the same instant are kept."""
    return [TimeSeriesPoint(timestamp=e.timestamp, pain_score=e.pain_score) for e in entries]
