''' Membership metrics queries for the ALV report '''

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from psycopg import sql

LOG = logging.getLogger("alv_metrics.queries")

# Study ids below this are bachelor programmes, the rest are master programmes
MASTER_STUDY_ID_THRESHOLD = 5
# educations.status value for a current enrolment
ACTIVE_EDUCATION_STATUS = 0
# First bucket of the join-year series (A8)
JOIN_HISTORY_START = date(2010, 8, 1)
# Activity names starting with this (case-insensitive, trimmed) are extern activities
EXTERN_PREFIX = "extern"


@dataclass
class CodeCount:
    """Distinct members per study code."""

    code: str
    count: int


@dataclass
class JoinYearMembers:
    """Distinct members who joined in the study year starting in ``join_year``."""

    join_year: int
    members: int


@dataclass
class OnlyCount:
    """A single distinct member count."""

    count: int


@dataclass
class IdName:
    """Activity id and name, used to pick out extern activities."""

    id: int
    name: str


_START = sql.Placeholder("study_year_start")
_ACTIVE = sql.Literal(ACTIVE_EDUCATION_STATUS)
_THRESHOLD = sql.Literal(MASTER_STUDY_ID_THRESHOLD)

STUDY_DISTRIBUTION = sql.SQL(
    """
    SELECT studies.code AS code, COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN educations ON members.id = educations.member_id
      JOIN studies ON educations.study_id = studies.id
    WHERE educations.status = {active}
    GROUP BY studies.code
    ORDER BY studies.code
    """
).format(active=_ACTIVE)

NEW_MEMBERS = sql.SQL(
    """
    SELECT COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN educations ON members.id = educations.member_id
      JOIN studies ON educations.study_id = studies.id
    WHERE educations.status = {active}
      AND members.join_date > {start}
    """
).format(active=_ACTIVE, start=_START)

NEW_BACHELOR_MEMBERS = sql.SQL(
    """
    SELECT COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN educations ON members.id = educations.member_id
    WHERE members.join_date > {start}
      AND educations.study_id < {threshold}
    """
).format(start=_START, threshold=_THRESHOLD)

NEW_MASTER_MEMBERS = sql.SQL(
    """
    SELECT COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN educations ON members.id = educations.member_id
    WHERE members.join_date > {start}
      AND educations.study_id >= {threshold}
    """
).format(start=_START, threshold=_THRESHOLD)

NEW_MEMBER_STUDY_DISTRIBUTION = sql.SQL(
    """
    SELECT studies.code AS code, COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN educations ON members.id = educations.member_id
      JOIN studies ON educations.study_id = studies.id
    WHERE educations.status = {active}
      AND members.join_date > {start}
    GROUP BY studies.code
    ORDER BY studies.code
    """
).format(active=_ACTIVE, start=_START)

NEW_ACTIVE_MEMBERS = sql.SQL(
    """
    SELECT COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN group_members ON members.id = group_members.member_id
    WHERE members.join_date > {start}
    """
).format(start=_START)

# Buckets are (series, series + 1 year]; the outer join keeps empty years at 0
MEMBERS_PER_JOIN_YEAR = sql.SQL(
    """
    SELECT
      EXTRACT(YEAR FROM series)::int AS join_year,
      COUNT(DISTINCT members.id) AS members
    FROM generate_series({history_start}::date, {start}::date, interval '1 year') AS series
      LEFT JOIN members
        ON members.join_date > series
       AND members.join_date <= series + interval '1 year'
    GROUP BY join_year
    ORDER BY join_year
    """
).format(history_start=sql.Placeholder("history_start"), start=_START)

NEW_ACTIVE_MEMBER_STUDY_DISTRIBUTION = sql.SQL(
    """
    SELECT studies.code AS code, COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN group_members ON members.id = group_members.member_id
      JOIN educations ON members.id = educations.member_id
      JOIN studies ON educations.study_id = studies.id
    WHERE educations.status = {active}
      AND members.join_date > {start}
    GROUP BY studies.code
    ORDER BY studies.code
    """
).format(active=_ACTIVE, start=_START)

NEW_MEMBERS_AT_ACTIVITIES = sql.SQL(
    """
    SELECT COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN participants ON members.id = participants.member_id
      JOIN activities ON participants.activity_id = activities.id
    WHERE members.join_date > {start}
      AND activities.start_date > {after}
    """
).format(start=_START, after=sql.Placeholder("date_after_nova"))

ACTIVITIES_AFTER = sql.SQL(
    """
    SELECT activities.id AS id, activities.name AS name
    FROM activities
    WHERE activities.start_date > {start}
    ORDER BY activities.id
    """
).format(start=_START)

MEMBERS_AT_ACTIVITIES = sql.SQL(
    """
    SELECT COUNT(DISTINCT members.id) AS count
    FROM members
      JOIN participants ON members.id = participants.member_id
    WHERE participants.activity_id = ANY({ids}::integer[])
    """
).format(ids=sql.Placeholder("activity_ids"))


def _one(cur, row_type):
    ''' Fetch exactly one row as ``row_type`` '''
    r = cur.fetchone()
    if r is None:
        raise LookupError(f"query for {row_type.__name__} returned no rows")
    return row_type(**r)


def _all(cur, row_type):
    ''' Fetch all rows as ``row_type`` instances '''
    return [row_type(**r) for r in cur.fetchall()]


def _start(study_year_start: date) -> dict[str, Any]:
    return {"study_year_start": study_year_start}


# A2
def study_distribution(cur) -> list[CodeCount]:
    """Members with an active education, per study code."""
    cur.execute(STUDY_DISTRIBUTION)
    return _all(cur, CodeCount)


# A3
def new_members(cur, study_year_start: date) -> OnlyCount:
    """Members with an active education who joined after ``study_year_start``."""
    cur.execute(NEW_MEMBERS, _start(study_year_start))
    return _one(cur, OnlyCount)


# A4
def new_bachelor_members(cur, study_year_start: date) -> OnlyCount:
    cur.execute(NEW_BACHELOR_MEMBERS, _start(study_year_start))
    return _one(cur, OnlyCount)


# A5
def new_master_members(cur, study_year_start: date) -> OnlyCount:
    cur.execute(NEW_MASTER_MEMBERS, _start(study_year_start))
    return _one(cur, OnlyCount)


# A6
def new_member_study_distribution(cur, study_year_start: date) -> list[CodeCount]:
    cur.execute(NEW_MEMBER_STUDY_DISTRIBUTION, _start(study_year_start))
    return _all(cur, CodeCount)


# A7
def new_active_members(cur, study_year_start: date) -> OnlyCount:
    """New members with at least one group membership, regardless of education."""
    cur.execute(NEW_ACTIVE_MEMBERS, _start(study_year_start))
    return _one(cur, OnlyCount)


# A8
def members_per_join_year(cur, study_year_start: date) -> list[JoinYearMembers]:
    """
    Distinct members per study year since ``JOIN_HISTORY_START``.

    Years without any new member are still returned, with a count of 0.
    """
    cur.execute(
        MEMBERS_PER_JOIN_YEAR,
        {"history_start": JOIN_HISTORY_START, "study_year_start": study_year_start},
    )
    return _all(cur, JoinYearMembers)


# A11
def new_active_member_study_distribution(cur, study_year_start: date) -> list[CodeCount]:
    """
    New active members with an active education, per study code.

    A member with several study codes appears under each of them, so the total
    can differ from :func:`new_active_members`.
    """
    cur.execute(NEW_ACTIVE_MEMBER_STUDY_DISTRIBUTION, _start(study_year_start))
    return _all(cur, CodeCount)


# A12
def new_members_at_activities(cur, study_year_start: date, date_after_nova: date) -> OnlyCount:
    """New members who attended an activity starting after ``date_after_nova``."""
    cur.execute(
        NEW_MEMBERS_AT_ACTIVITIES,
        {"study_year_start": study_year_start, "date_after_nova": date_after_nova},
    )
    return _one(cur, OnlyCount)


def is_extern_activity(name: str) -> bool:
    """Return ``True`` when *name* starts with the extern prefix, ignoring case and padding."""
    return name.lower().strip().startswith(EXTERN_PREFIX)


def extern_activity_ids(cur, study_year_start: date) -> list[int]:
    """Ids of extern activities starting after ``study_year_start``."""
    cur.execute(ACTIVITIES_AFTER, _start(study_year_start))
    activities = _all(cur, IdName)
    ids = [act.id for act in activities if is_extern_activity(act.name)]
    LOG.debug("%d of %d activities are extern", len(ids), len(activities))
    return ids


def members_at_activities(cur, activity_ids: list[int]) -> OnlyCount:
    """Distinct members who took part in any of ``activity_ids``; 0 for an empty list."""
    cur.execute(MEMBERS_AT_ACTIVITIES, {"activity_ids": list(activity_ids)})
    return _one(cur, OnlyCount)


# A13
def extern_activity_members(cur, study_year_start: date) -> OnlyCount:
    return members_at_activities(cur, extern_activity_ids(cur, study_year_start))
