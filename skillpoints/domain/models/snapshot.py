"""
Loaded snapshot consumed by the engine.

Purpose
-------
Read-only view of everything the engine needs for one event, assembled by the
caller's storage/query collaborator: the performed skill, its ancestor
containers (innermost first), the user's existing point and achievement rows
for those nodes, the level thresholds, and the project's total points.

The engine never queries storage for this data. Anything missing here is a
caller bug and surfaces as NotFoundError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from skillpoints.domain.models.points import AchievementRecord, PointRecord
from skillpoints.domain.models.skill import LevelThreshold, NodeKind, SkillNode
from skillpoints.modules.shared.constants import OVERALL_ID
from skillpoints.modules.shared.exceptions import InvalidInputError, NotFoundError


@dataclass(frozen=True)
class LoadedSnapshot:
    """
    Immutable snapshot of the hierarchy around one performed skill.

    Attributes
    ----------
    project_id : str
        Project of the performed skill
    project_total_points : int
        Total achievable points in the project
    skill : SkillNode
        The performed skill
    parents : Tuple[SkillNode, ...]
        Ancestor containers, innermost first (project root excluded)
    user_points : Tuple[PointRecord, ...]
        Existing point rows for the user across the hierarchy
    user_achievements : Tuple[AchievementRecord, ...]
        Existing achievement rows for the user across the hierarchy
    levels : Tuple[LevelThreshold, ...]
        Level thresholds for every leveled node in the hierarchy
    project_name : str
        Display name of the project
    """

    project_id: str
    project_total_points: int
    skill: SkillNode
    parents: Tuple[SkillNode, ...] = ()
    user_points: Tuple[PointRecord, ...] = ()
    user_achievements: Tuple[AchievementRecord, ...] = ()
    levels: Tuple[LevelThreshold, ...] = ()
    project_name: str = OVERALL_ID
    _project_node: Optional[SkillNode] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for attr in ("parents", "user_points", "user_achievements", "levels"):
            object.__setattr__(self, attr, tuple(getattr(self, attr)))

        if self.skill.kind is not NodeKind.SKILL:
            raise InvalidInputError(
                "snapshot.skill", f"expected a Skill node, got {self.skill.kind.value}"
            )
        for node in (self.skill, *self.parents):
            if node.project_id != self.project_id:
                raise InvalidInputError(
                    "snapshot", f"{node.label} belongs to project {node.project_id}, not {self.project_id}"
                )
        for parent in self.parents:
            if parent.kind in (NodeKind.SKILL, NodeKind.PROJECT):
                raise InvalidInputError(
                    "snapshot.parents", f"{parent.label} is not a container ({parent.kind.value})"
                )

        object.__setattr__(
            self,
            "_project_node",
            SkillNode.project_root(self.project_id, self.project_name, self.project_total_points),
        )

    @property
    def project_node(self) -> SkillNode:
        return self._project_node  # type: ignore[return-value]

    def hierarchy(self) -> List[SkillNode]:
        """Skill, then ancestors innermost to outermost, then the project root."""
        return [self.skill, *self.parents, self.project_node]

    def get_user_points(self, skill_ref_id: Optional[int]) -> List[PointRecord]:
        return [p for p in self.user_points if p.skill_ref_id == skill_ref_id]

    def get_total_user_points(self, skill_ref_id: Optional[int]) -> Optional[PointRecord]:
        """The aggregate (day-less) record for a node, if one exists."""
        return next(
            (p for p in self.user_points if p.skill_ref_id == skill_ref_id and p.is_aggregate),
            None,
        )

    def get_user_achievements(self, skill_ref_id: Optional[int]) -> List[AchievementRecord]:
        return [a for a in self.user_achievements if a.skill_ref_id == skill_ref_id]

    def get_levels(self, node: SkillNode) -> List[LevelThreshold]:
        """
        Level thresholds for a leveled node.

        Raises
        ------
        NotFoundError
            If the snapshot carries no thresholds for the node
        """
        levels = [lvl for lvl in self.levels if lvl.skill_ref_id == node.ref_id]
        if not levels:
            raise NotFoundError("LevelThreshold", node.label)
        return levels
