"""
Unit tests for SkillEventService.

Covers applied and rejected events, snapshot mismatch errors, the raw-field
entry point and the log context bound while processing.
"""

import logging
from datetime import timezone

import pytest

from skillpoints.core.logging.logger import get_log_context
from skillpoints.domain.models import IncomingEvent, NodeKind
from skillpoints.modules.events.service import SkillEventService
from skillpoints.modules.shared.exceptions import NotFoundError
from tests.conftest import (
    PROJECT_ID,
    T0,
    USER_ID,
    FakeLatestEventTimestamp,
    FakeOccurrenceCounter,
    make_skill,
    make_snapshot,
    make_subject,
    minutes,
)


@pytest.fixture
def counter():
    return FakeOccurrenceCounter()


@pytest.fixture
def latest():
    return FakeLatestEventTimestamp()


@pytest.fixture
def service(counter, latest):
    return SkillEventService(counter, latest, reference_tz=timezone.utc)


def _event(timestamp=T0, skill_id="skill1"):
    return IncomingEvent(USER_ID, PROJECT_ID, skill_id, timestamp)


@pytest.mark.unit
class TestProcess:

    def test_admitted_event_is_applied(self, service):
        # Arrange
        snapshot = make_snapshot(parents=[make_subject()])

        # Act
        result = service.process(_event(), snapshot)

        # Assert
        assert result.applied
        assert result.explanation == "Skill event was applied"
        assert result.data_to_save.point_increment == 10
        assert len(result.data_to_save.to_save) == 6
        assert [n.kind for n in result.completion_items] == [NodeKind.SUBJECT, NodeKind.PROJECT]

    def test_rejected_event_skips_assembly(self, counter, latest, mocker):
        # Arrange
        counter.performed.append(("skill1", T0))
        service = SkillEventService(counter, latest, reference_tz=timezone.utc)
        build = mocker.spy(service.assembler, "build")
        snapshot = make_snapshot(skill=make_skill(interval=60))

        # Act
        result = service.process(_event(T0 + minutes(15)), snapshot)

        # Assert
        assert not result.applied
        assert result.explanation == "This skill was already performed within the last 1 hour"
        assert result.data_to_save is None
        assert result.completion_items == []
        build.assert_not_called()

    def test_event_outside_window_is_applied(self, counter, service):
        counter.performed.append(("skill1", T0))
        snapshot = make_snapshot(skill=make_skill(interval=60))

        result = service.process(_event(T0 + minutes(60)), snapshot)

        assert result.applied

    def test_snapshot_for_other_skill_raises_and_logs(self, service, caplog):
        # Arrange
        snapshot = make_snapshot()

        # Act
        with caplog.at_level(logging.ERROR):
            with pytest.raises(NotFoundError):
                service.process(_event(skill_id="other"), snapshot)

        # Assert
        assert "Service error during process_skill_event" in caplog.text

    def test_snapshot_for_other_project_raises_before_window_check(self, counter, service):
        # Arrange
        snapshot = make_snapshot(skill=make_skill(interval=60))
        event = IncomingEvent(USER_ID, "other", "skill1", T0)

        # Act
        with pytest.raises(NotFoundError) as exc_info:
            service.process(event, snapshot)

        # Assert
        assert exc_info.value.resource_type == "Project"
        assert counter.calls == []

    def test_log_context_is_bound_during_processing(self, service, mocker):
        # Arrange
        seen = {}

        def capture(operation, **context):
            seen.update(get_log_context())

        mocker.patch.object(service, "log_operation", side_effect=capture)

        # Act
        service.process(_event(), make_snapshot())

        # Assert
        assert seen["user_id"] == USER_ID
        assert seen["project_id"] == PROJECT_ID
        assert seen["skill_id"] == "skill1"
        assert seen["operation"] == "process_skill_event"
        assert get_log_context() == {}

    def test_default_level_lookup_and_time_zone(self, counter, latest):
        service = SkillEventService(counter, latest)

        assert service.assembler.reference_tz is timezone.utc
        assert service.assembler.level_lookup is not None


@pytest.mark.unit
class TestReportSkill:

    def test_builds_event_with_provided_timestamp(self, service, latest):
        # Arrange
        subject = make_subject()
        latest.latest[subject.ref_id] = T0 + minutes(5)

        # Act
        result = service.report_skill("ALICE", PROJECT_ID, "skill1", make_snapshot(parents=[subject]), T0)

        # Assert
        achievements = result.data_to_save.user_achievements
        assert achievements[0].user_id == "alice"
        assert achievements[0].achieved_on == T0 + minutes(5)

    def test_defaults_timestamp_to_now(self, service, latest):
        result = service.report_skill(USER_ID, PROJECT_ID, "skill1", make_snapshot())

        assert result.applied
        assert latest.calls == []
