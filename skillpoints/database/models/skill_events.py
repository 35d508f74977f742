"""
UserPerformedSkill and SkillRelationship: skill event history and containment.
Schema only.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from skillpoints.database.base import Base, IdMixin, TimestampMixin


class UserPerformedSkill(Base, IdMixin, TimestampMixin):
    """
    One reported "skill performed" event.
    `performed_on` is stored in UTC.
    """

    __tablename__ = "user_performed_skill"
    __table_args__ = (
        Index("ix_user_performed_skill_window", "user_id", "project_id", "skill_id", "performed_on"),
        Index("ix_user_performed_skill_ref", "user_id", "project_id", "skill_ref_id"),
    )

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    project_id: Mapped[str] = mapped_column(String(128), nullable=False)
    skill_id: Mapped[str] = mapped_column(String(128), nullable=False)
    skill_ref_id: Mapped[int] = mapped_column(Integer, nullable=False)
    performed_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SkillRelationship(Base, IdMixin):
    """
    Direct parent → child link between a container and a skill.
    """

    __tablename__ = "skill_relationship"
    __table_args__ = (
        UniqueConstraint("parent_ref_id", "child_ref_id", name="uq_skill_relationship_parent_child"),
        Index("ix_skill_relationship_parent", "parent_ref_id"),
    )

    project_id: Mapped[str] = mapped_column(String(128), nullable=False)
    parent_ref_id: Mapped[int] = mapped_column(Integer, nullable=False)
    child_ref_id: Mapped[int] = mapped_column(Integer, nullable=False)
