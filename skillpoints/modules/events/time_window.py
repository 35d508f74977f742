"""
Time window gate for duplicate skill events.

Purpose
-------
Decide whether an incoming event may award points, given how many events the
same user already reported for the same skill around the event's timestamp.

Design Notes
------------
- Reported timestamps may lie in the past (e.g. an automated back-fill job),
  so the window is symmetric: [timestamp - interval, timestamp + interval].
- Bounds are exclusive; an earlier event exactly `interval` minutes away does
  not count.
- A count of zero never rejects, even when `max_occurrences_within_interval`
  is misconfigured to 0 or below.
- Rejection is a normal admission result, not an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from skillpoints.core.logging.logger import get_logger
from skillpoints.domain.models import SkillNode
from skillpoints.modules.events.collaborators import OccurrenceCounter
from skillpoints.modules.shared.constants import MINUTES_PER_HOUR

logger = get_logger(__name__)


@dataclass(frozen=True)
class TimeWindowResult:
    """Outcome of a time window check."""

    admit: bool
    reason: Optional[str] = None
    count: int = 0

    @property
    def full(self) -> bool:
        return not self.admit


DISABLED = TimeWindowResult(admit=True)


def pretty_print_interval(minutes: int) -> str:
    """
    Render an interval in minutes as hours and/or minutes.

    Example
    -------
    >>> pretty_print_interval(90)
    '1 hour 30 minutes'
    >>> pretty_print_interval(120)
    '2 hours'
    """
    hours, remainder = divmod(minutes, MINUTES_PER_HOUR)
    parts = []
    if hours > 0:
        parts.append(f"{hours} hour{'' if hours == 1 else 's'}")
    if remainder > 0:
        parts.append(f"{remainder} minute{'' if remainder == 1 else 's'}")
    return " ".join(parts)


def _build_message(node: SkillNode, count: int) -> str:
    msg = f"This skill was already performed within the last {pretty_print_interval(node.point_increment_interval)}"
    if count > 1:
        msg += f" ({count} out of {count} times)"
    return msg


def check_time_window(
    node: SkillNode,
    user_id: str,
    event_timestamp: datetime,
    occurrence_counter: OccurrenceCounter,
) -> TimeWindowResult:
    """
    Check whether `node` was already performed too often around `event_timestamp`.

    Args:
        node: Skill being reported
        user_id: Reporting user
        event_timestamp: When the skill was performed
        occurrence_counter: Counts prior events strictly inside the window

    Returns:
        DISABLED when the node has no window, otherwise a TimeWindowResult
        whose `reason` explains a rejection.
    """
    if not node.time_window_enabled:
        return DISABLED

    interval = timedelta(minutes=node.point_increment_interval)
    start = event_timestamp - interval
    end = event_timestamp + interval

    logger.debug(
        f"Looking for [{node.skill_id}] between [{start.isoformat()}] and [{end.isoformat()}]"
    )

    count = occurrence_counter.count_occurrences(
        user_id, node.project_id, node.skill_id, start, end
    )

    is_full = count > 0 and count >= node.max_occurrences_within_interval
    if not is_full:
        return TimeWindowResult(admit=True, count=count)

    return TimeWindowResult(admit=False, reason=_build_message(node, count), count=count)


class TimeWindowGate:
    """Binds an OccurrenceCounter so callers can gate events with one argument set."""

    def __init__(self, occurrence_counter: OccurrenceCounter) -> None:
        self.occurrence_counter = occurrence_counter

    def evaluate(self, node: SkillNode, user_id: str, event_timestamp: datetime) -> TimeWindowResult:
        return check_time_window(node, user_id, event_timestamp, self.occurrence_counter)
