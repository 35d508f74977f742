"""
Point and achievement records produced by the engine.

PointRecord and AchievementRecord are rows the storage collaborator persists;
CompletionNotice is a transient item handed to notification delivery.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from skillpoints.domain.models.skill import NodeKind


@dataclass(frozen=True)
class PointRecord:
    """
    Accumulated points for a (user, node) pair.

    `day` is None for the aggregate (running total) record and a calendar
    date for a daily record. `skill_ref_id` is None for the project root.
    """

    user_id: str
    project_id: str
    skill_id: Optional[str]
    skill_ref_id: Optional[int]
    points: int
    day: Optional[date] = None

    @property
    def is_aggregate(self) -> bool:
        return self.day is None


@dataclass(frozen=True)
class AchievementRecord:
    """A user reached `level` on a node at `achieved_on` with `points_when_achieved`."""

    user_id: str
    project_id: str
    skill_id: Optional[str]
    skill_ref_id: Optional[int]
    level: int
    points_when_achieved: int
    achieved_on: datetime


@dataclass(frozen=True)
class CompletionNotice:
    """One newly crossed level, for downstream notification."""

    level: int
    name: str
    kind: NodeKind
    id: str
