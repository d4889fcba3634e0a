"""
Stream Normalizer

Puts validated entries in chronological order before aggregation. Entries
that share a timestamp keep the order they had in the file, so every
downstream grouping sees the same sequence for the same input.
"""

from typing import List

from .models import Entry


def normalize_stream(entries: List[Entry]) -> List[Entry]:
    """
    Sort entries by timestamp, ascending.

    Uses a stable sort; the input list is not modified.

    Args:
        entries: Validated entries in file order

    Returns:
        New list of the same entries, oldest first
    """
    return sorted(entries, key=lambda e: e.timestamp)
