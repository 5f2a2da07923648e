"""Strict parsing of the two report dates given on the command line."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"
DATE_FORMAT_HINT = "YYYY-MM-DD"

# strptime accepts "2023-9-1", so the shape is checked first
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ReportDateError(ValueError):
    """Raised when a report date argument is not a valid ``YYYY-MM-DD`` date."""


@dataclass(frozen=True)
class ReportDates:
    """The two dates every report section is bounded by."""

    study_year_start: date
    date_after_nova: date


def parse_report_date(value: str, name: str) -> date:
    """Parse *value* as a calendar date, naming *name* in any error."""

    if not DATE_PATTERN.match(value):
        raise ReportDateError(
            f"{name} {value!r} does not match the format {DATE_FORMAT_HINT}"
        )
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise ReportDateError(f"{name} {value!r} is not a valid date: {exc}") from exc


def parse_report_dates(study_year_start: str, date_after_nova: str) -> ReportDates:
    """Parse both command-line dates; fails on the first invalid one."""

    return ReportDates(
        study_year_start=parse_report_date(study_year_start, "study_year_start"),
        date_after_nova=parse_report_date(date_after_nova, "date_after_nova"),
    )
