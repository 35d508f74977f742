"""
Incoming skill event.

Purpose
-------
Carry one "skill performed" report into the engine, together with whether its
timestamp was supplied by the reporter or defaulted to the time of receipt.
That flag drives achievement back-dating (see AchievedOnResolver).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from skillpoints.modules.shared.validators import validate_required_id, validate_timestamp


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IncomingEvent:
    """
    Immutable "skill performed" event.

    Attributes
    ----------
    user_id : str
        Reporting user, normalized to lower case
    project_id : str
        Project the skill belongs to
    skill_id : str
        Human id of the performed skill
    timestamp : datetime
        When the skill was performed (timezone aware)
    timestamp_provided : bool
        True if the reporter supplied the timestamp explicitly
    """

    user_id: str
    project_id: str
    skill_id: str
    timestamp: datetime
    timestamp_provided: bool = False

    def __post_init__(self) -> None:
        validate_required_id(self.user_id, "user_id")
        validate_required_id(self.project_id, "project_id")
        validate_required_id(self.skill_id, "skill_id")
        validate_timestamp(self.timestamp)

        object.__setattr__(self, "user_id", self.user_id.strip().lower())
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))

    @classmethod
    def create(
        cls,
        user_id: str,
        project_id: str,
        skill_id: str,
        timestamp: Optional[datetime] = None,
        now: Callable[[], datetime] = utc_now,
    ) -> IncomingEvent:
        """
        Build an event, defaulting the timestamp to `now()` when not supplied.

        Example
        -------
        >>> event = IncomingEvent.create("Alice", "proj", "skill1")
        >>> event.timestamp_provided
        False
        """
        if timestamp is None:
            return cls(user_id, project_id, skill_id, now(), timestamp_provided=False)
        return cls(user_id, project_id, skill_id, timestamp, timestamp_provided=True)
