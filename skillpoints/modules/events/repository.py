"""
SQLAlchemy-backed query collaborators.

Purpose
-------
Reference implementation of `OccurrenceCounter` and `LatestEventTimestamp`
over the `user_performed_skill` and `skill_relationship` tables, plus the
write used to append a performed event.

Design Notes
------------
- One repository instance is bound to one session, i.e. one unit of work.
  Serializing units of work for the same user is the caller's transaction
  concern.
- Timestamps are converted to UTC before they reach the database. Backends
  that drop the offset (SQLite) hand back naive values, which are marked UTC.
- Container lookups follow direct parent → child links only.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from skillpoints.core.logging.logger import get_logger
from skillpoints.database.models import SkillRelationship, UserPerformedSkill
from skillpoints.domain.models import IncomingEvent, SkillNode
from skillpoints.modules.events.collaborators import LatestEventTimestamp, OccurrenceCounter
from skillpoints.modules.shared.base_repository import BaseRepository

logger = get_logger(__name__)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PerformedSkillRepository(
    BaseRepository[UserPerformedSkill], OccurrenceCounter, LatestEventTimestamp
):
    """Performed-skill history for one session."""

    def __init__(self, session: Session) -> None:
        super().__init__(UserPerformedSkill, logger)
        self.session = session

    def count_occurrences(
        self,
        user_id: str,
        project_id: str,
        skill_id: str,
        start: datetime,
        end: datetime,
    ) -> int:
        return self.count(
            self.session,
            UserPerformedSkill.user_id == user_id,
            UserPerformedSkill.project_id == project_id,
            UserPerformedSkill.skill_id == skill_id,
            UserPerformedSkill.performed_on > _to_utc(start),
            UserPerformedSkill.performed_on < _to_utc(end),
        )

    def get_latest_performed_on(
        self,
        user_id: str,
        project_id: str,
        skill_ref_id: Optional[int],
    ) -> Optional[datetime]:
        stmt = (
            select(func.max(UserPerformedSkill.performed_on))
            .select_from(UserPerformedSkill)
            .where(
                UserPerformedSkill.user_id == user_id,
                UserPerformedSkill.project_id == project_id,
            )
        )
        if skill_ref_id is not None:
            stmt = stmt.join(
                SkillRelationship,
                SkillRelationship.child_ref_id == UserPerformedSkill.skill_ref_id,
            ).where(SkillRelationship.parent_ref_id == skill_ref_id)

        latest = self.session.execute(stmt).scalar_one_or_none()

        self.log.debug(
            "Repository.get_latest_performed_on",
            extra={"skill_ref_id": skill_ref_id, "found": latest is not None},
        )

        return _to_utc(latest) if latest is not None else None

    def record_performed(self, event: IncomingEvent, skill: SkillNode) -> UserPerformedSkill:
        """Append the event to the user's history."""
        row = UserPerformedSkill(
            user_id=event.user_id,
            project_id=event.project_id,
            skill_id=event.skill_id,
            skill_ref_id=skill.ref_id,
            performed_on=_to_utc(event.timestamp),
        )
        self.add(self.session, row)
        self.flush(self.session)
        return row

    def link(self, project_id: str, parent_ref_id: int, child_ref_ids: List[int]) -> List[SkillRelationship]:
        """Record that `child_ref_ids` sit directly under `parent_ref_id`."""
        rows = [
            SkillRelationship(project_id=project_id, parent_ref_id=parent_ref_id, child_ref_id=child)
            for child in child_ref_ids
        ]
        self.add_many(self.session, rows)
        self.flush(self.session)
        return rows

    def get_performed_events(self, user_id: str, project_id: str, skill_id: str) -> List[UserPerformedSkill]:
        """The user's history for one skill, oldest first."""
        return self.find_many_where(
            self.session,
            UserPerformedSkill.user_id == user_id,
            UserPerformedSkill.project_id == project_id,
            UserPerformedSkill.skill_id == skill_id,
            order_by=[UserPerformedSkill.performed_on],
        )
