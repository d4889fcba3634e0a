"""
Area Frequency

How often each body area appears in the log. Only the four known area codes
are counted; anything else is left out of the counts (those entries still
show up in the time series).
"""

from typing import List

from .models import Entry, entries_to_frame


AREA_CODES = (0, 1, 2, 3)


def compute_area_frequency(entries: List[Entry]) -> List[int]:
    """
    Count entries per area code.

    Args:
        entries: Ordered entries

    Returns:
        Four counts, for area codes 0, 1, 2 and 3 in that order
    """
    if not entries:
        return [0] * len(AREA_CODES)

    counts = entries_to_frame(entries)["area"].value_counts()
    counts = counts.reindex(list(AREA_CODES), fill_value=0)
    return [int(c) for c in counts]
