# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure the `painlog` package is importable when running tests from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


EXAMPLE_CSV = (
    "date,time,area,pain_score\n"
    "2024-01-01,09:00,1,2\n"
    "2024-01-01,21:00,1,4\n"
    "2024-01-02,10:00,0,0\n"
)


@pytest.fixture
def example_csv_text() -> str:
    """Three-row log: two entries on Jan 1 (area 1), one on Jan 2 (area 0)."""
    return EXAMPLE_CSV


@pytest.fixture
def example_csv_bytes() -> bytes:
    return EXAMPLE_CSV.encode("utf-8")
