"""Fixtures for pytest to set up the testing environment."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from report_dates import ReportDates  # noqa: E402  pylint: disable=wrong-import-position


@pytest.fixture(name="report_dates")
def fixture_report_dates() -> ReportDates:
    """The dates used throughout the end-to-end scenario."""

    return ReportDates(study_year_start=date(2022, 9, 1), date_after_nova=date(2022, 10, 1))
