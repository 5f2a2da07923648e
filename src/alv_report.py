"""Command-line entry point: print the ALV membership metrics report."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

import psycopg

from config import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_LEVEL_ENV,
    PROJECT_NAME,
    __author__,
    __version__,
)
from db import get_conn
from report import collect_and_print
from report_dates import ReportDateError, parse_report_dates

LOG = logging.getLogger("alv_metrics.main")


def build_parser() -> argparse.ArgumentParser:
    """Return the parser for the five positional arguments."""

    parser = argparse.ArgumentParser(
        prog=PROJECT_NAME,
        description="Print the membership metrics for the ALV.",
    )
    parser.add_argument("db_name", help="Name of the database, normally `koala`")
    parser.add_argument("db_user", help="Database user, normally `koala_manual`")
    parser.add_argument("db_password", help="Password of the database user")
    parser.add_argument(
        "study_year_start",
        help="Start of the study year, formatted as YYYY-MM-DD",
    )
    parser.add_argument(
        "date_after_nova",
        help="Day after the last NOVA activity, formatted as YYYY-MM-DD",
    )
    return parser


def resolve_log_level(raw_level: str | None) -> int | None:
    """Map a level name or number to a logging level; ``None`` if unknown."""

    raw_level = (raw_level or "").strip() or DEFAULT_LOG_LEVEL
    if raw_level.isdigit():
        return int(raw_level)
    level = logging.getLevelName(raw_level.upper())
    return level if isinstance(level, int) else None


def configure_logging() -> None:
    """Configure the root logger from ``LOG_LEVEL``, defaulting to INFO."""

    raw_level = os.getenv(LOG_LEVEL_ENV)
    level = resolve_log_level(raw_level)
    logging.basicConfig(
        level=logging.INFO if level is None else level,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    if level is None:
        LOG.warning("Unknown %s %r, using %s", LOG_LEVEL_ENV, raw_level, DEFAULT_LOG_LEVEL)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the report and return a process exit status."""

    args = build_parser().parse_args(argv)
    configure_logging()
    LOG.info("'%s' v%s by '%s'", PROJECT_NAME, __version__, __author__)

    try:
        dates = parse_report_dates(args.study_year_start, args.date_after_nova)
    except ReportDateError as exc:
        LOG.error("Invalid date argument: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        conn = get_conn(args.db_name, args.db_user, args.db_password)
    except psycopg.OperationalError as exc:
        LOG.error("Could not connect to database: %s", exc)
        print(f"Error: could not connect to database: {exc}", file=sys.stderr)
        return 1
    LOG.info("Connected to database")

    try:
        with conn:
            LOG.info("Collecting and printing metrics.")
            collect_and_print(conn, dates)
    except psycopg.Error as exc:
        LOG.error("Query failed: %s", exc)
        print(f"Error: query failed: {exc}", file=sys.stderr)
        return 1

    LOG.info("Done")
    return 0


def run() -> None:
    """Console script entry point."""

    sys.exit(main())


if __name__ == "__main__":
    run()
