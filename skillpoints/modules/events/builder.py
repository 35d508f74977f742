"""
Points and achievements assembly for one skill event.

Walks the hierarchy in a fixed order: the performed skill, its ancestor
containers innermost first, then the project root. It collects:

- point rows to insert for every node,
- existing point rows to increment for every node,
- achievement rows and completion notices for subjects and the project root.

Skills and skill groups accumulate points but never level up. The pipeline is
a pure function of (event, snapshot, collaborators); nothing is written here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import List

from skillpoints.core.logging.logger import get_logger
from skillpoints.domain.models import (
    AchievementRecord,
    CompletionNotice,
    IncomingEvent,
    LoadedSnapshot,
    NodeKind,
    PointRecord,
    SkillNode,
)
from skillpoints.modules.events.achievements import AchievedOnResolver, check_for_achievements
from skillpoints.modules.events.collaborators import LatestEventTimestamp, LevelLookup
from skillpoints.modules.events.points import points_to_create, points_to_increment, truncate_to_day
from skillpoints.modules.shared.constants import OVERALL_ID
from skillpoints.modules.shared.exceptions import NotFoundError
from skillpoints.modules.shared.validators import validate_point_increment

logger = get_logger(__name__)


@dataclass(frozen=True)
class DataToSave:
    """
    Everything the storage collaborator must write for one event.

    Attributes
    ----------
    point_increment : int
        Points to add to every row in `to_add_points_to`
    to_save : List[PointRecord]
        New point rows to insert
    to_add_points_to : List[PointRecord]
        Existing aggregate and same-day rows to increment
    user_achievements : List[AchievementRecord]
        New achievement rows to insert
    """

    point_increment: int
    to_save: List[PointRecord] = field(default_factory=list)
    to_add_points_to: List[PointRecord] = field(default_factory=list)
    user_achievements: List[AchievementRecord] = field(default_factory=list)


@dataclass(frozen=True)
class PointsAndAchievementsResult:
    data_to_save: DataToSave
    completion_items: List[CompletionNotice] = field(default_factory=list)


def _notice_for(node: SkillNode, achievement: AchievementRecord) -> CompletionNotice:
    if node.is_project:
        return CompletionNotice(
            level=achievement.level, name=OVERALL_ID, kind=NodeKind.PROJECT, id=OVERALL_ID
        )
    return CompletionNotice(
        level=achievement.level, name=node.name, kind=node.kind, id=node.skill_id
    )


def require_matching_snapshot(event: IncomingEvent, snapshot: LoadedSnapshot) -> None:
    """Raise NotFoundError unless the snapshot was loaded for the event's project and skill."""
    if snapshot.project_id != event.project_id:
        raise NotFoundError("Project", event.project_id)
    if snapshot.skill.skill_id != event.skill_id:
        raise NotFoundError("SkillNode", event.skill_id)


def build_points_and_achievements(
    event: IncomingEvent,
    snapshot: LoadedSnapshot,
    level_lookup: LevelLookup,
    latest_event_timestamp: LatestEventTimestamp,
    reference_tz: tzinfo,
) -> PointsAndAchievementsResult:
    """
    Decide every row one event creates or increments.

    Args:
        event: Admitted skill event
        snapshot: Hierarchy and existing rows for the event's skill
        level_lookup: Resolves scores to levels
        latest_event_timestamp: Used to back-date achievements of explicitly
            timestamped events
        reference_tz: Time zone whose calendar defines daily buckets

    Returns:
        PointsAndAchievementsResult with rows in hierarchy order.

    Raises:
        NotFoundError: If the snapshot is for another project or skill, or
            lacks thresholds for a leveled node
        ConfigurationError: If a node's points or thresholds are unusable
    """
    require_matching_snapshot(event, snapshot)
    skill = snapshot.skill

    increment = skill.point_increment
    validate_point_increment(increment, skill.label)

    day = truncate_to_day(event.timestamp, reference_tz)
    resolver = AchievedOnResolver(event, latest_event_timestamp)

    to_save: List[PointRecord] = []
    to_add_points_to: List[PointRecord] = []
    achievements: List[AchievementRecord] = []
    completion_items: List[CompletionNotice] = []

    for node in snapshot.hierarchy():
        existing = snapshot.get_user_points(node.ref_id)
        to_save.extend(
            points_to_create(node, event.user_id, event.project_id, day, increment, existing)
        )
        to_add_points_to.extend(points_to_increment(day, existing))

        if node.kind not in (NodeKind.SUBJECT, NodeKind.PROJECT):
            continue

        aggregate = snapshot.get_total_user_points(node.ref_id)
        new_achievements = check_for_achievements(
            node=node,
            user_id=event.user_id,
            existing_score=aggregate.points if aggregate else 0,
            increment=increment,
            thresholds=snapshot.get_levels(node),
            existing_achievements=snapshot.get_user_achievements(node.ref_id),
            achieved_on_resolver=resolver,
            level_lookup=level_lookup,
        )
        achievements.extend(new_achievements)
        completion_items.extend(_notice_for(node, a) for a in new_achievements)

    logger.debug(
        "Built points and achievements",
        extra={
            "to_save": len(to_save),
            "to_add_points_to": len(to_add_points_to),
            "achievements": len(achievements),
        },
    )

    return PointsAndAchievementsResult(
        data_to_save=DataToSave(
            point_increment=increment,
            to_save=to_save,
            to_add_points_to=to_add_points_to,
            user_achievements=achievements,
        ),
        completion_items=completion_items,
    )


class ResultAssembler:
    """Holds the engine's collaborators and assembles results event by event."""

    def __init__(
        self,
        level_lookup: LevelLookup,
        latest_event_timestamp: LatestEventTimestamp,
        reference_tz: tzinfo,
    ) -> None:
        self.level_lookup = level_lookup
        self.latest_event_timestamp = latest_event_timestamp
        self.reference_tz = reference_tz

    def build(self, event: IncomingEvent, snapshot: LoadedSnapshot) -> PointsAndAchievementsResult:
        return build_points_and_achievements(
            event, snapshot, self.level_lookup, self.latest_event_timestamp, self.reference_tz
        )
