"""Scripted query results shared across tests."""

from __future__ import annotations

from typing import Any

# One entry per execute() call, in report order (A13 executes twice)
SECTION_RESPONSES: list[Any] = [
    # A2
    [{"code": "INF", "count": 40}, {"code": "KI", "count": 25}, {"code": "MINF", "count": 7}],
    # A3
    {"count": 30},
    # A4
    {"count": 22},
    # A5
    {"count": 6},
    # A6
    [{"code": "INF", "count": 18}, {"code": "KI", "count": 12}],
    # A7
    {"count": 9},
    # A8
    [{"join_year": 2020, "members": 31}, {"join_year": 2021, "members": 0},
     {"join_year": 2022, "members": 30}],
    # A11
    [{"code": "INF", "count": 6}, {"code": "KI", "count": 4}],
    # A12
    {"count": 17},
    # A13 step one: candidate activities
    [{"id": 3, "name": "  ExTeRn Feest"}, {"id": 4, "name": "Interne Borrel"},
     {"id": 8, "name": "Extern: bedrijfsbezoek"}],
    # A13 step two
    {"count": 11},
]


def empty_section_responses() -> list[Any]:
    """Responses for a database in which no member qualifies anywhere."""

    return [
        [],
        {"count": 0},
        {"count": 0},
        {"count": 0},
        [],
        {"count": 0},
        [],
        [],
        {"count": 0},
        [],
        {"count": 0},
    ]
