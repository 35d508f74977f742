"""
ORM models for the reference SQL adapter.

Exports:
- UserPerformedSkill
- SkillRelationship
"""

from .skill_events import SkillRelationship, UserPerformedSkill

__all__ = [
    "SkillRelationship",
    "UserPerformedSkill",
]
