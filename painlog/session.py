"""
Dashboard session lifecycle.

A DashboardSession holds everything derived from one upload. The
SessionManager owns at most one live session: each successful upload
creates a fresh session and disposes the previous one, and reset disposes
the current one. A failed upload leaves the current session as it was.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from painlog.charts import build_chart_data
from painlog.engine.models import AggregationResult, Entry
from painlog.engine.pipeline import analyze_upload
from painlog.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class DashboardSession:
    """Derived data for one uploaded file."""
    file_name: str
    entries: List[Entry]
    aggregations: Optional[AggregationResult]
    metrics: Dict[str, Any]
    summary: Dict[str, Any]
    has_data: bool
    chart_data: Dict[str, Any]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    disposed: bool = False

    @property
    def is_active(self) -> bool:
        return not self.disposed

    def dispose(self) -> None:
        """Release all derived data. Safe to call more than once."""
        if self.disposed:
            return
        self.entries = []
        self.aggregations = None
        self.metrics = {}
        self.summary = {}
        self.chart_data = {}
        self.disposed = True
        logger.debug("Disposed session for %s", self.file_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active": self.is_active,
            "file_name": self.file_name,
            "created_at": self.created_at.isoformat(),
            "has_data": self.has_data,
            "metrics": self.metrics,
            "summary": self.summary,
            "aggregations": self.aggregations.to_dict() if self.aggregations is not None else None,
        }


def build_session(
    file_name: Optional[str],
    content_type: Optional[str],
    file_bytes: bytes
) -> DashboardSession:
    """
    Run the pipeline on an upload and wrap the results in a new session.

    Raises:
        UnsupportedFileTypeError: If the upload is not a CSV file
        CsvParseError: If the file can't be decoded or parsed
    """
    entries, results = analyze_upload(file_name, content_type, file_bytes)
    aggregations = results["aggregations"]
    return DashboardSession(
        file_name=file_name or "upload.csv",
        entries=entries,
        aggregations=aggregations,
        metrics=results["basic_metrics"],
        summary=results["summary"],
        has_data=results["has_data"],
        chart_data=build_chart_data(aggregations),
    )


class SessionManager:
    """
    Owns the live dashboard session.

    Uploads are serialized: the whole pipeline for one upload runs under a
    lock, and the new session replaces the old one only if it succeeds.
    The web routes that upload or reset are plain functions run in worker
    threads, so they contend on this lock like any other caller.
    """

    def __init__(self):
        self._current: Optional[DashboardSession] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[DashboardSession]:
        return self._current

    def start_upload(
        self,
        file_name: Optional[str],
        content_type: Optional[str],
        file_bytes: bytes
    ) -> DashboardSession:
        """
        Build a session for an upload and make it the current one.

        If building raises, the exception propagates and the current session
        is kept.
        """
        with self._lock:
            session = build_session(file_name, content_type, file_bytes)
            previous = self._current
            self._current = session
            if previous is not None:
                previous.dispose()
            logger.info("New session for %s (%d entries)", session.file_name, len(session.entries))
            return session

    def reset(self) -> None:
        """Dispose the current session, if any."""
        with self._lock:
            if self._current is not None:
                self._current.dispose()
            self._current = None
