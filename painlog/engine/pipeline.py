"""
Main Pipeline Orchestrator

Orchestrates the pain log processing pipeline:
1. File type check and CSV ingestion (analyze_upload only)
2. Record validation and normalization
3. Chronological ordering
4. The four aggregation views
5. Summary metrics

Every run starts from scratch; nothing is kept between calls.
"""

from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
import statistics

from .models import AggregationResult, Entry, RawRecord
from .csv_loader import check_file_type, load_raw_records_from_upload
from .record_validator import validate_records
from .stream_normalizer import normalize_stream
from .daily_trend import compute_daily_trend
from .area_frequency import compute_area_frequency
from .time_series import compute_time_series
from .hourly_average import compute_hourly_average
from painlog.utils.logging import get_logger

logger = get_logger(__name__)


def format_date_for_summary(dt: datetime) -> str:
    """
    Format a date for summary text.

    Returns:
        Formatted string without a leading zero on the day: "Jan 5, 2024"
    """
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def format_period_description(
    first_ts: Optional[datetime],
    last_ts: Optional[datetime]
) -> str:
    """
    Format a human-readable description of the logged period.

    Args:
        first_ts: Earliest entry timestamp
        last_ts: Latest entry timestamp

    Returns:
        "on Jan 5, 2024" or "from Jan 5, 2024 to Jan 12, 2024"
    """
    if not first_ts or not last_ts:
        return "No entries"

    if first_ts.date() == last_ts.date():
        return f"on {format_date_for_summary(first_ts)}"
    return f"from {format_date_for_summary(first_ts)} to {format_date_for_summary(last_ts)}"


def aggregate(entries: List[Entry]) -> AggregationResult:
    """
    Compute all four views over ordered entries.

    The views don't depend on each other.
    """
    return AggregationResult(
        daily_trend=compute_daily_trend(entries),
        area_frequency=compute_area_frequency(entries),
        time_series=compute_time_series(entries),
        hourly_average=compute_hourly_average(entries),
    )


def run_pipeline(
    raw_records: List[RawRecord]
) -> Tuple[List[Entry], Dict[str, Any]]:
    """
    Run validation, ordering and aggregation on raw records.

    Args:
        raw_records: Records from the CSV loader, in file order

    Returns:
        Tuple of:
        - List of entries, sorted by timestamp
        - Dictionary containing:
          - has_data: False when no record survived validation
          - basic_metrics: record/entry/drop counts, day count, mean score
          - summary: period_description
          - aggregations: AggregationResult (zero views when has_data is False)
    """
    # Step 1: Validate and normalize records
    entries = validate_records(raw_records)

    # Step 2: Order chronologically
    entries = normalize_stream(entries)

    # Step 3: Aggregate
    aggregations = aggregate(entries)

    # Step 4: Summary
    basic_metrics = _compute_metrics(entries, raw_records)
    if entries:
        period_description = format_period_description(entries[0].timestamp, entries[-1].timestamp)
    else:
        period_description = format_period_description(None, None)

    logger.info(
        "Pipeline finished: %d records, %d entries, %d days",
        basic_metrics["num_raw_records"],
        basic_metrics["num_entries"],
        basic_metrics["num_days"],
    )

    return entries, {
        "has_data": bool(entries),
        "basic_metrics": basic_metrics,
        "summary": {
            "period_description": period_description,
        },
        "aggregations": aggregations,
    }


def analyze_upload(
    file_name: Optional[str],
    content_type: Optional[str],
    file_bytes: bytes
) -> Tuple[List[Entry], Dict[str, Any]]:
    """
    Run the complete pipeline on an uploaded file.

    Raises:
        UnsupportedFileTypeError: If the upload is not a CSV file
        CsvParseError: If the file can't be decoded or parsed
    """
    check_file_type(file_name, content_type)
    raw_records = load_raw_records_from_upload(file_bytes)
    return run_pipeline(raw_records)


def _compute_metrics(
    entries: List[Entry],
    raw_records: List[RawRecord]
) -> Dict[str, Any]:
    """
    Compute summary metrics for the entries.

    Returns a dictionary with:
    - Number of raw records and of entries kept
    - Number of records dropped during validation
    - Number of distinct days
    - Mean pain score over all entries
    """
    if not entries:
        metrics = _empty_metrics()
        metrics["num_raw_records"] = len(raw_records)
        metrics["num_dropped"] = len(raw_records)
        return metrics

    return {
        "num_raw_records": len(raw_records),
        "num_entries": len(entries),
        "num_dropped": len(raw_records) - len(entries),
        "num_days": len({e.date for e in entries}),
        "avg_pain_score": round(float(statistics.mean(e.pain_score for e in entries)), 3),
    }


def _empty_metrics() -> Dict[str, Any]:
    """Return empty metrics dictionary."""
    return {
        "num_raw_records": 0,
        "num_entries": 0,
        "num_dropped": 0,
        "num_days": 0,
        "avg_pain_score": 0.0,
    }
