"""
Skill hierarchy value objects.

Purpose
-------
Describe the three-level containment hierarchy (skill → subject → project)
and the level thresholds attached to its containers.

Non-Responsibilities
--------------------
- Skill definition CRUD (owned by the surrounding service)
- Persistence (handled by storage collaborators)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from skillpoints.modules.shared.exceptions import ConfigurationError, InvalidInputError


class NodeKind(Enum):
    """Kind of node in the skill hierarchy."""

    SKILL = "Skill"
    SKILLS_GROUP = "SkillsGroup"  # container without levels of its own
    SUBJECT = "Subject"
    PROJECT = "Project"


@dataclass(frozen=True)
class SkillNode:
    """
    Immutable value object for a skill, subject or project container.

    Attributes
    ----------
    ref_id : Optional[int]
        Stable reference id; None for the project root
    skill_id : Optional[str]
        Human id; None for the project root
    project_id : str
        Owning project
    name : str
        Display name
    kind : NodeKind
        Skill, Subject or Project
    total_points : int
        Total achievable points for the node
    point_increment : int
        Points awarded per event (skills only)
    point_increment_interval : int
        Dedup window in minutes; <= 0 disables dedup
    max_occurrences_within_interval : int
        Events allowed within the window before rejecting
    """

    ref_id: Optional[int]
    skill_id: Optional[str]
    project_id: str
    name: str
    kind: NodeKind
    total_points: int = 0
    point_increment: int = 0
    point_increment_interval: int = 0
    max_occurrences_within_interval: int = 1

    def __post_init__(self) -> None:
        if not self.project_id:
            raise InvalidInputError("project_id", "a node must belong to a project")
        if self.kind is NodeKind.PROJECT:
            if self.ref_id is not None or self.skill_id is not None:
                raise ConfigurationError(
                    "kind", "the project root cannot carry a skill reference"
                )
        elif self.ref_id is None or not self.skill_id:
            raise InvalidInputError(
                "skill_id", f"{self.kind.value} nodes require ref_id and skill_id"
            )

    @property
    def is_project(self) -> bool:
        return self.kind is NodeKind.PROJECT

    @property
    def time_window_enabled(self) -> bool:
        return self.point_increment_interval > 0

    @property
    def label(self) -> str:
        """Short identifier for logs and error details."""
        return self.skill_id or f"project:{self.project_id}"

    @classmethod
    def project_root(cls, project_id: str, name: str, total_points: int) -> SkillNode:
        """Build the root node of a project."""
        return cls(
            ref_id=None,
            skill_id=None,
            project_id=project_id,
            name=name,
            kind=NodeKind.PROJECT,
            total_points=total_points,
        )


@dataclass(frozen=True)
class LevelThreshold:
    """
    Minimum percentage of a node's total points required to reach a level.

    Attributes
    ----------
    skill_ref_id : Optional[int]
        Owning node; None for the project root
    level : int
        Ordinal level, starting at 1
    min_percentage : float
        Percent of total points (0-100) needed to reach the level
    """

    skill_ref_id: Optional[int]
    level: int
    min_percentage: float

    def __post_init__(self) -> None:
        if self.level < 1:
            raise ConfigurationError(
                "level", f"levels start at 1, got {self.level}"
            )
        if not (0 <= self.min_percentage <= 100):
            raise ConfigurationError(
                "min_percentage",
                f"level {self.level} percentage must be within 0-100, got {self.min_percentage}",
            )
