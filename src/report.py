"""Render the ALV metrics sections as text tables and print them in order."""

from __future__ import annotations

import logging
import sys
from dataclasses import astuple, dataclass, fields
from typing import Any, Callable, Sequence, TextIO

from tabulate import tabulate

import query_data
from query_data import CodeCount, JoinYearMembers, OnlyCount
from report_dates import ReportDates

LOG = logging.getLogger("alv_metrics.report")

TABLE_FORMAT = "psql"
CLOSING_LINE = "Done. Heel veel succes met de ALV ♡"


@dataclass(frozen=True)
class Section:
    """One labelled block of the report and the query that fills it."""

    label: str
    title: str
    row_type: type
    collect: Callable[[Any, ReportDates], Any]
    summed: bool = False
    sum_note: str = ""


SECTIONS: tuple[Section, ...] = (
    Section("A2", "Verdeling studies", CodeCount,
            lambda cur, d: query_data.study_distribution(cur), summed=True),
    Section("A3", "Nieuwe leden", OnlyCount,
            lambda cur, d: query_data.new_members(cur, d.study_year_start)),
    Section("A4", "Nieuwe bachelor", OnlyCount,
            lambda cur, d: query_data.new_bachelor_members(cur, d.study_year_start)),
    Section("A5", "Nieuwe master", OnlyCount,
            lambda cur, d: query_data.new_master_members(cur, d.study_year_start)),
    Section("A6", "Verdeling studies nieuwe leden", CodeCount,
            lambda cur, d: query_data.new_member_study_distribution(cur, d.study_year_start),
            summed=True),
    Section("A7", "Nieuwe actieve leden", OnlyCount,
            lambda cur, d: query_data.new_active_members(cur, d.study_year_start)),
    Section("A8", "Nieuwe leden sinds 2010", JoinYearMembers,
            lambda cur, d: query_data.members_per_join_year(cur, d.study_year_start),
            summed=True),
    Section("A11", "Verdeling nieuwe actieve leden", CodeCount,
            lambda cur, d: query_data.new_active_member_study_distribution(
                cur, d.study_year_start),
            summed=True,
            sum_note="(Kan anders zijn dan het getal van A7, i.v.m. dubbele studies)"),
    Section("A12", "Sjaars bij activiteiten", OnlyCount,
            lambda cur, d: query_data.new_members_at_activities(
                cur, d.study_year_start, d.date_after_nova)),
    Section("A13", "Leden bij Extern activiteiten", OnlyCount,
            lambda cur, d: query_data.extern_activity_members(cur, d.study_year_start)),
)


def count_field(row_type: type) -> str:
    """Name of the numeric column that is summed for ``row_type``."""

    return fields(row_type)[-1].name


def column_sum(rows: Sequence[Any], field: str) -> int:
    """Sum ``field`` over ``rows``; an empty sequence sums to 0."""

    return sum(getattr(row, field) for row in rows)


def render_table(rows: Sequence[Any], row_type: type) -> str:
    """Render dataclass ``rows`` as an aligned table with the field names as headers."""

    headers = [f.name for f in fields(row_type)]
    return tabulate([astuple(row) for row in rows], headers=headers, tablefmt=TABLE_FORMAT,
                    disable_numparse=True)


def format_section(section: Section, result: Any) -> str:
    """Format the heading, table and optional sum line of one section."""

    rows = result if isinstance(result, list) else [result]
    lines = [f"{section.label} - {section.title}", render_table(rows, section.row_type)]
    if section.summed:
        total = column_sum(rows, count_field(section.row_type))
        lines.append(f"Sum: {total} {section.sum_note}".rstrip())
    lines.append("")
    return "\n".join(lines)


def collect_and_print(conn, dates: ReportDates, out: TextIO | None = None) -> None:
    """
    Run every section in order, writing each one before the next query runs.

    Any database error propagates immediately; sections already written stay
    written.
    """

    out = out or sys.stdout
    with conn.cursor() as cur:
        for section in SECTIONS:
            LOG.debug("Running section %s", section.label)
            result = section.collect(cur, dates)
            print(format_section(section, result), file=out, flush=True)
    print(CLOSING_LINE, file=out, flush=True)
