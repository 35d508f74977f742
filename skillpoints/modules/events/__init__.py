"""
Skill Events Module
===================

Domain: Points, levels and achievements awarded for reported skill events

Services:
- SkillEventService: Gates an event and assembles the rows it produces

Pipeline steps:
- TimeWindowGate: Rejects duplicate events inside a skill's interval
- ResultAssembler: Points, achievements and completion notices per hierarchy
- PercentageLevelLookup: Default LevelLookup over percentage ladders

Storage:
- PerformedSkillRepository: SQLAlchemy-backed query collaborators
"""

from .builder import DataToSave, PointsAndAchievementsResult, ResultAssembler
from .collaborators import LatestEventTimestamp, LevelInfo, LevelLookup, OccurrenceCounter
from .levels import PercentageLevelLookup
from .repository import PerformedSkillRepository
from .service import SkillEventResult, SkillEventService
from .time_window import TimeWindowGate, TimeWindowResult

__all__ = [
    "DataToSave",
    "PointsAndAchievementsResult",
    "ResultAssembler",
    "LatestEventTimestamp",
    "LevelInfo",
    "LevelLookup",
    "OccurrenceCounter",
    "PercentageLevelLookup",
    "PerformedSkillRepository",
    "SkillEventResult",
    "SkillEventService",
    "TimeWindowGate",
    "TimeWindowResult",
]
