"""
Skill event processing service.

Purpose
-------
Run one "skill performed" event through the engine: validate it against the
loaded snapshot, apply the time window gate, and assemble the rows to write
and the completion notices to send.

Responsibilities
----------------
- Bind event context (user, project, skill, operation) for every log record
- Reject events whose snapshot belongs to another project or skill
- Return rejections as results, not exceptions
- Log each outcome with the number of rows and levels produced

Non-Responsibilities
--------------------
- Loading the snapshot or persisting DataToSave (caller's unit of work)
- Sending notifications for completion notices

Design Notes
------------
- Synchronous and side-effect free apart from collaborator queries and logs.
- One service instance can process events for any number of users; it keeps
  no per-event state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import List, Optional

from skillpoints.core.config import Config
from skillpoints.core.logging.logger import LogContext, get_logger
from skillpoints.domain.models import CompletionNotice, IncomingEvent, LoadedSnapshot
from skillpoints.modules.events.builder import DataToSave, ResultAssembler, require_matching_snapshot
from skillpoints.modules.events.collaborators import (
    LatestEventTimestamp,
    LevelLookup,
    OccurrenceCounter,
)
from skillpoints.modules.events.levels import PercentageLevelLookup
from skillpoints.modules.events.time_window import TimeWindowGate
from skillpoints.modules.shared.base_service import BaseService
from skillpoints.modules.shared.exceptions import SkillPointsException


@dataclass(frozen=True)
class SkillEventResult:
    """
    Outcome of processing one skill event.

    Attributes
    ----------
    applied : bool
        False when the time window rejected the event
    explanation : str
        Human readable outcome
    data_to_save : Optional[DataToSave]
        Rows to write; None for rejected events
    completion_items : List[CompletionNotice]
        Levels completed by the event, in hierarchy order
    """

    applied: bool
    explanation: str
    data_to_save: Optional[DataToSave] = None
    completion_items: List[CompletionNotice] = field(default_factory=list)


class SkillEventService(BaseService):
    """
    Processes skill events against loaded snapshots.

    Args:
        occurrence_counter: Counts prior events inside a skill's time window
        latest_event_timestamp: Finds the latest contributing event of a node
        level_lookup: Resolves scores to levels (percentage ladder by default)
        reference_tz: Calendar used for daily buckets (Config.REFERENCE_TIMEZONE
            by default)
    """

    def __init__(
        self,
        occurrence_counter: OccurrenceCounter,
        latest_event_timestamp: LatestEventTimestamp,
        level_lookup: Optional[LevelLookup] = None,
        reference_tz: Optional[tzinfo] = None,
    ) -> None:
        super().__init__(get_logger(__name__))
        self.gate = TimeWindowGate(occurrence_counter)
        self.assembler = ResultAssembler(
            level_lookup=level_lookup or PercentageLevelLookup(),
            latest_event_timestamp=latest_event_timestamp,
            reference_tz=reference_tz or Config.reference_timezone(),
        )

    def process(self, event: IncomingEvent, snapshot: LoadedSnapshot) -> SkillEventResult:
        """
        Gate and assemble one event.

        Raises:
            NotFoundError: If the snapshot does not match the event, or lacks
                thresholds for a leveled node
            ConfigurationError: If the hierarchy's points or ladders are unusable
        """
        with LogContext(
            user_id=event.user_id,
            project_id=event.project_id,
            skill_id=event.skill_id,
            operation="process_skill_event",
        ):
            try:
                return self._process(event, snapshot)
            except SkillPointsException as e:
                self.log_error("process_skill_event", e, error_code=e.error_code)
                raise

    def report_skill(
        self,
        user_id: str,
        project_id: str,
        skill_id: str,
        snapshot: LoadedSnapshot,
        timestamp: Optional[datetime] = None,
    ) -> SkillEventResult:
        """Build the event from raw fields and process it."""
        event = IncomingEvent.create(user_id, project_id, skill_id, timestamp)
        return self.process(event, snapshot)

    def _process(self, event: IncomingEvent, snapshot: LoadedSnapshot) -> SkillEventResult:
        require_matching_snapshot(event, snapshot)

        window = self.gate.evaluate(snapshot.skill, event.user_id, event.timestamp)
        if not window.admit:
            self.log.info(
                "Skill event rejected by time window",
                extra={"occurrences": window.count},
            )
            return SkillEventResult(applied=False, explanation=window.reason or "")

        result = self.assembler.build(event, snapshot)
        data = result.data_to_save

        self.log_operation(
            "process_skill_event",
            points=data.point_increment,
            records_created=len(data.to_save),
            records_incremented=len(data.to_add_points_to),
            levels_achieved=len(data.user_achievements),
        )

        return SkillEventResult(
            applied=True,
            explanation="Skill event was applied",
            data_to_save=data,
            completion_items=result.completion_items,
        )
