"""
Achievement evaluation for leveled nodes (subjects and the project root).

Purpose
-------
Given a node's score before and after an event, record every level the event
crossed. One event may cross several levels at once (e.g. a back-fill job
applying many points); every intermediate level is recorded so a user's
levels always form the prefix 1..K.

Achievement timestamps
----------------------
When the reporter supplied the event timestamp, the event may not be the
most recent one contributing to the node. The achievement is then dated at
the latest contributing event, but never earlier than the triggering event.
When the timestamp defaulted to "now", it is used as is.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from skillpoints.core.logging.logger import get_logger
from skillpoints.domain.models import (
    AchievementRecord,
    IncomingEvent,
    LevelThreshold,
    SkillNode,
)
from skillpoints.modules.events.collaborators import LatestEventTimestamp, LevelLookup
from skillpoints.modules.shared.constants import MIN_RECORDED_LEVEL
from skillpoints.modules.shared.validators import validate_total_points

logger = get_logger(__name__)


class AchievedOnResolver:
    """Resolves the timestamp recorded on new achievements for one event."""

    def __init__(self, event: IncomingEvent, latest_event_timestamp: LatestEventTimestamp) -> None:
        self.event = event
        self.latest_event_timestamp = latest_event_timestamp

    def __call__(self, node: SkillNode) -> datetime:
        achieved_on = self.event.timestamp
        if not self.event.timestamp_provided:
            return achieved_on

        latest = self.latest_event_timestamp.get_latest_performed_on(
            self.event.user_id, self.event.project_id, node.ref_id
        )
        if latest is not None and latest.tzinfo is None:
            latest = latest.replace(tzinfo=timezone.utc)
        if latest is not None and latest > achieved_on:
            achieved_on = latest
        return achieved_on


def check_for_achievements(
    node: SkillNode,
    user_id: str,
    existing_score: int,
    increment: int,
    thresholds: Sequence[LevelThreshold],
    existing_achievements: Sequence[AchievementRecord],
    achieved_on_resolver: Callable[[SkillNode], datetime],
    level_lookup: LevelLookup,
    total_points: Optional[int] = None,
) -> List[AchievementRecord]:
    """
    New achievement rows for `node` after adding `increment` to its score.

    Args:
        node: Subject or project root being evaluated
        user_id: User earning the points
        existing_score: Aggregate points before this event (0 if none)
        increment: Points awarded by the event
        thresholds: Level ladder for the node
        existing_achievements: Levels the user already holds on the node
        achieved_on_resolver: Supplies the timestamp for new rows
        level_lookup: Resolves a score to a level
        total_points: Overrides `node.total_points` when given

    Returns:
        One record per level in (max achieved, new level], all sharing the same
        timestamp and `points_when_achieved`; empty when no new level is reached.

    Raises:
        ConfigurationError: If the node has no positive total or a broken ladder
    """
    total = node.total_points if total_points is None else total_points
    validate_total_points(total, node.label)

    current_score = existing_score + increment
    level_info = level_lookup.get_level_info(node.project_id, thresholds, total, current_score)

    if level_info.level < MIN_RECORDED_LEVEL:
        return []

    max_achieved = max((a.level for a in existing_achievements), default=0)
    if level_info.level <= max_achieved:
        return []

    achieved_on = achieved_on_resolver(node)
    res = []
    for level in range(max_achieved + 1, level_info.level + 1):
        achievement = AchievementRecord(
            user_id=user_id,
            project_id=node.project_id,
            skill_id=node.skill_id,
            skill_ref_id=node.ref_id,
            level=level,
            points_when_achieved=current_score,
            achieved_on=achieved_on,
        )
        logger.debug(f"Achieved new level [{achievement}]")
        res.append(achievement)

    return res
