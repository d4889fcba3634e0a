"""
Record Validator

Converts raw CSV records into strict Entry objects:
- Records missing date, time, area or pain_score are dropped
- Area and pain score codes must be whole numbers
- Date and time are combined into a local timestamp

Dropped records are not errors; they are skipped without telling the user.
"""

from typing import List, Optional

from .models import Entry, RawRecord, Scalar
from painlog.utils.logging import get_logger

logger = get_logger(__name__)


REQUIRED_FIELDS = ("date", "time", "area", "pain_score")


def _as_text(value: Scalar) -> str:
    # Dynamic typing may have turned e.g. "20240101" into an int
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_code(value: Scalar) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def build_entry(record: RawRecord) -> Optional[Entry]:
    """
    Build an Entry from one raw record.

    Args:
        record: Mapping of column name to scalar value

    Returns:
        The Entry, or None if a required field is absent or unusable
        (non-integral code, unparseable date/time)
    """
    if any(record.get(name) is None for name in REQUIRED_FIELDS):
        return None

    area = _as_code(record["area"])
    pain_score = _as_code(record["pain_score"])
    if area is None or pain_score is None:
        return None

    try:
        return Entry(
            date=_as_text(record["date"]),
            time=_as_text(record["time"]),
            area=area,
            pain_score=pain_score,
        )
    except ValueError:
        return None


def validate_records(records: List[RawRecord]) -> List[Entry]:
    """
    Keep only records that form a complete Entry, preserving order.

    Args:
        records: Raw records in file order

    Returns:
        List of entries; len(result) <= len(records)
    """
    entries = []
    for record in records:
        entry = build_entry(record)
        if entry is not None:
            entries.append(entry)

    dropped = len(records) - len(entries)
    if dropped:
        logger.debug("Dropped %d of %d records without usable required fields", dropped, len(records))
    return entries
