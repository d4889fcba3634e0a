"""
Hourly Average

Average pain score by hour of day, with all calendar days merged into the
same 24 buckets. An hour with no entries reports 0.0. That is a default for
an empty bucket, not a recorded score of zero.
"""

from typing import List

from .models import Entry, entries_to_frame


HOURS_PER_DAY = 24


def compute_hourly_average(entries: List[Entry]) -> List[float]:
    """
    Compute the mean pain score for each hour of day.

    Args:
        entries: Ordered entries

    Returns:
        24 averages indexed by hour 0-23
    """
    if not entries:
        return [0.0] * HOURS_PER_DAY

    df = entries_to_frame(entries)
    hourly = df.groupby("hour")["pain_score"].mean()
    hourly = hourly.reindex(range(HOURS_PER_DAY), fill_value=0.0)
    return [float(avg) for avg in hourly]
