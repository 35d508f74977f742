"""
Domain models package.

Purpose
-------
Immutable value objects for the skill points engine. Services and the engine
pipeline consume and produce these; database models in
`skillpoints.database.models` are separate anemic schemas.
"""

from .event import IncomingEvent, utc_now
from .points import AchievementRecord, CompletionNotice, PointRecord
from .skill import LevelThreshold, NodeKind, SkillNode
from .snapshot import LoadedSnapshot

__all__ = [
    "IncomingEvent",
    "utc_now",
    "AchievementRecord",
    "CompletionNotice",
    "PointRecord",
    "LevelThreshold",
    "NodeKind",
    "SkillNode",
    "LoadedSnapshot",
]
