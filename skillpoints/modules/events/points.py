"""
Point accumulation for one node of the skill hierarchy.

Each (user, node) pair owns one aggregate record (day = None, running total)
and at most one daily record per calendar day. This module decides which of
those rows must be inserted for an event; incrementing rows that already
exist is the storage collaborator's job.
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import List, Optional, Sequence

from skillpoints.domain.models import PointRecord, SkillNode


def truncate_to_day(timestamp: datetime, reference_tz: tzinfo) -> date:
    """Calendar date of `timestamp` in the reference time zone."""
    return timestamp.astimezone(reference_tz).date()


def _construct_user_points(
    node: Optional[SkillNode],
    user_id: str,
    project_id: str,
    day: Optional[date],
    points: int,
) -> PointRecord:
    return PointRecord(
        user_id=user_id,
        project_id=project_id,
        skill_id=node.skill_id if node else None,
        skill_ref_id=node.ref_id if node else None,
        points=points,
        day=day,
    )


def points_to_create(
    node: Optional[SkillNode],
    user_id: str,
    project_id: str,
    day: date,
    increment: int,
    existing_records: Sequence[PointRecord],
) -> List[PointRecord]:
    """
    New point rows needed for `node` (None or the project root for the project).

    Args:
        node: Node receiving points
        user_id: User earning the points
        project_id: Owning project
        day: Event day, already truncated in the reference time zone
        increment: Points awarded by the event
        existing_records: The user's existing rows for this node

    Returns:
        Up to two records: the aggregate row when the user has none yet, and
        a daily row when none exists for `day`.
    """
    if node is not None and node.is_project:
        node = None

    to_save: List[PointRecord] = []

    if not any(r.is_aggregate for r in existing_records):
        to_save.append(_construct_user_points(node, user_id, project_id, None, increment))

    if not any(r.day == day for r in existing_records):
        to_save.append(_construct_user_points(node, user_id, project_id, day, increment))

    return to_save


def points_to_increment(day: date, existing_records: Sequence[PointRecord]) -> List[PointRecord]:
    """Existing rows that must grow by the event's increment: the aggregate and `day`'s row."""
    return [r for r in existing_records if r.is_aggregate or r.day == day]
