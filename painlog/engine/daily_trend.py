"""
Daily Trend

Average pain score per calendar day. Days are grouped by the exact date
string from the log, so "2024-01-01" and "2024/01/01" are different days.
Days without entries are simply absent; nothing is interpolated.
"""

from typing import List

from .models import DailyTrendPoint, Entry, entries_to_frame


def compute_daily_trend(entries: List[Entry]) -> List[DailyTrendPoint]:
    """
    Compute the mean pain score of each day present in the entries.

    Args:
        entries: Ordered entries

    Returns:
        One DailyTrendPoint per distinct date, sorted by date string
        (chronological for YYYY-MM-DD dates)
    """
    if not entries:
        return []

    df = entries_to_frame(entries)
    daily = df.groupby("date", sort=True)["pain_score"].mean()

    return [
        DailyTrendPoint(day=str(day), average=float(avg))
        for day, avg in daily.items()
    ]
