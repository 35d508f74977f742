"""
Collaborator interfaces for the skill event engine.

The engine performs no I/O of its own. Everything it needs beyond the loaded
snapshot is obtained through these interfaces, implemented by the surrounding
service (see `PerformedSkillRepository` for a SQLAlchemy-backed reference
implementation of the two query interfaces).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from skillpoints.domain.models import LevelThreshold


@dataclass(frozen=True)
class LevelInfo:
    """
    Resolved level for a score.

    Attributes
    ----------
    level : int
        Highest level reached; 0 when no threshold is met
    current_points : int
        Score the level was resolved for
    level_points : int
        Points at which the resolved level starts (0 for level 0)
    next_level_points : Optional[int]
        Points at which the next level starts; None at the top level
    """

    level: int
    current_points: int
    level_points: int
    next_level_points: Optional[int]


class LevelLookup(ABC):
    """Maps thresholds, total points and a score to a level."""

    @abstractmethod
    def get_level_info(
        self,
        project_id: str,
        thresholds: Sequence[LevelThreshold],
        total_points: int,
        current_score: int,
    ) -> LevelInfo:
        ...


class OccurrenceCounter(ABC):
    """Counts prior events for a (user, skill) pair."""

    @abstractmethod
    def count_occurrences(
        self,
        user_id: str,
        project_id: str,
        skill_id: str,
        start: datetime,
        end: datetime,
    ) -> int:
        """
        Number of prior events with a timestamp strictly inside (start, end).

        Both bounds are exclusive.
        """
        ...


class LatestEventTimestamp(ABC):
    """Finds the most recent contributing event for a node."""

    @abstractmethod
    def get_latest_performed_on(
        self,
        user_id: str,
        project_id: str,
        skill_ref_id: Optional[int],
    ) -> Optional[datetime]:
        """
        Latest performed-on time for events contributing to a node.

        `skill_ref_id=None` means any skill in the project; a container ref id
        means any skill directly under that container. Returns None when the
        user has no recorded events for the node.
        """
        ...
