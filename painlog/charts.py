"""
Chart payloads for the dashboard template.

Converts an AggregationResult into plain JSON-ready dicts that the Chart.js
code in dashboard.html draws directly. All y axes share the 0-4 pain scale.
"""

from typing import Any, Dict

from painlog.engine.models import AREA_LABELS, PAIN_SCORE_LABELS, AggregationResult
from painlog.engine.area_frequency import AREA_CODES
from painlog.engine.hourly_average import HOURS_PER_DAY

PAIN_SCORE_MAX = 4


def format_hour_label(hour: int) -> str:
    return f"{hour}h"


def pain_score_label(score: int) -> str:
    """Severity word for a score; empty string for codes outside 0-4."""
    return PAIN_SCORE_LABELS.get(score, "")


def build_chart_data(result: AggregationResult) -> Dict[str, Any]:
    """
    Build the data for the four dashboard charts.

    Returns:
        Dict with keys "daily" (line), "area" (doughnut), "time" (scatter)
        and "hourly" (bar)
    """
    return {
        "daily": {
            "labels": [p.day for p in result.daily_trend],
            "data": [round(p.average, 3) for p in result.daily_trend],
            "y_max": PAIN_SCORE_MAX,
        },
        "area": {
            "labels": [AREA_LABELS[code] for code in AREA_CODES],
            "data": list(result.area_frequency),
        },
        "time": {
            "points": [
                {
                    "x": p.timestamp.isoformat(),
                    "y": p.pain_score,
                    "label": pain_score_label(p.pain_score),
                }
                for p in result.time_series
            ],
            "y_max": PAIN_SCORE_MAX,
            "score_labels": {str(k): v for k, v in PAIN_SCORE_LABELS.items()},
        },
        "hourly": {
            "labels": [format_hour_label(h) for h in range(HOURS_PER_DAY)],
            "data": [round(avg, 3) for avg in result.hourly_average],
            "y_max": PAIN_SCORE_MAX,
        },
    }
