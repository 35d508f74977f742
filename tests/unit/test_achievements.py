"""
Unit tests for achievement evaluation and achievement timestamps.
"""

from datetime import datetime

import pytest

from skillpoints.domain.models import IncomingEvent
from skillpoints.modules.events.achievements import AchievedOnResolver, check_for_achievements
from skillpoints.modules.events.levels import PercentageLevelLookup
from skillpoints.modules.shared.exceptions import ConfigurationError
from tests.conftest import (
    PROJECT_ID,
    T0,
    USER_ID,
    FakeLatestEventTimestamp,
    make_achievement,
    make_levels,
    make_subject,
    minutes,
)


def _event(provided: bool) -> IncomingEvent:
    return IncomingEvent(USER_ID, PROJECT_ID, "skill1", T0, timestamp_provided=provided)


@pytest.mark.unit
class TestAchievedOnResolver:

    def test_defaulted_timestamp_is_used_without_query(self, mocker):
        # Arrange
        latest = mocker.MagicMock()
        resolver = AchievedOnResolver(_event(provided=False), latest)

        # Act
        achieved_on = resolver(make_subject())

        # Assert
        assert achieved_on == T0
        latest.get_latest_performed_on.assert_not_called()

    def test_later_contributing_event_wins(self):
        # Arrange
        subject = make_subject()
        latest = FakeLatestEventTimestamp({subject.ref_id: T0 + minutes(5)})
        resolver = AchievedOnResolver(_event(provided=True), latest)

        # Act & Assert
        assert resolver(subject) == T0 + minutes(5)
        assert latest.calls == [subject.ref_id]

    def test_never_earlier_than_the_event(self):
        subject = make_subject()
        latest = FakeLatestEventTimestamp({subject.ref_id: T0 - minutes(5)})
        resolver = AchievedOnResolver(_event(provided=True), latest)

        assert resolver(subject) == T0

    def test_no_prior_events_uses_event_timestamp(self):
        resolver = AchievedOnResolver(_event(provided=True), FakeLatestEventTimestamp())

        assert resolver(make_subject()) == T0

    def test_naive_latest_is_read_as_utc(self):
        # Arrange
        subject = make_subject(ref_id=10)
        event = IncomingEvent(
            USER_ID, PROJECT_ID, "skill1", datetime(2024, 3, 10, 12, 0), timestamp_provided=True
        )
        latest = FakeLatestEventTimestamp({10: datetime(2024, 3, 10, 12, 5)})

        # Act
        achieved_on = AchievedOnResolver(event, latest)(subject)

        # Assert
        assert achieved_on == T0 + minutes(5)
        assert achieved_on.tzinfo is not None


@pytest.mark.unit
class TestCheckForAchievements:
    """Level crossings for a 100 point subject with levels at 10/25/45/67/92%."""

    @pytest.fixture
    def subject(self):
        return make_subject(total_points=100)

    def _check(self, subject, existing_score, increment, existing=(), resolver=None):
        return check_for_achievements(
            node=subject,
            user_id=USER_ID,
            existing_score=existing_score,
            increment=increment,
            thresholds=make_levels(subject.ref_id),
            existing_achievements=list(existing),
            achieved_on_resolver=resolver or (lambda node: T0),
            level_lookup=PercentageLevelLookup(),
        )

    def test_no_level_reached(self, subject, mocker):
        # Arrange
        resolver = mocker.MagicMock(return_value=T0)

        # Act
        achievements = self._check(subject, 0, 9, resolver=resolver)

        # Assert
        assert achievements == []
        resolver.assert_not_called()

    def test_first_level(self, subject):
        # Act
        achievements = self._check(subject, 0, 10)

        # Assert
        assert len(achievements) == 1
        first = achievements[0]
        assert first.level == 1
        assert first.points_when_achieved == 10
        assert first.skill_ref_id == subject.ref_id
        assert first.skill_id == subject.skill_id
        assert first.user_id == USER_ID
        assert first.achieved_on == T0

    def test_large_increment_records_every_crossed_level(self, subject):
        # Act
        achievements = self._check(subject, 0, 100)

        # Assert
        assert [a.level for a in achievements] == [1, 2, 3, 4, 5]
        assert {a.points_when_achieved for a in achievements} == {100}
        assert {a.achieved_on for a in achievements} == {T0}

    def test_only_levels_above_existing_are_recorded(self, subject):
        # Arrange
        existing = [make_achievement(subject, 1), make_achievement(subject, 2)]

        # Act
        achievements = self._check(subject, 30, 40, existing)

        # Assert
        assert [a.level for a in achievements] == [3, 4]

    def test_already_held_level_is_not_recorded_again(self, subject, mocker):
        # Arrange
        existing = [make_achievement(subject, level) for level in (1, 2, 3)]
        resolver = mocker.MagicMock(return_value=T0)

        # Act
        achievements = self._check(subject, 40, 10, existing, resolver)

        # Assert
        assert achievements == []
        resolver.assert_not_called()

    def test_resolver_called_once_per_crossing(self, subject, mocker):
        # Arrange
        resolver = mocker.MagicMock(return_value=T0 + minutes(5))

        # Act
        achievements = self._check(subject, 0, 50, resolver=resolver)

        # Assert
        resolver.assert_called_once_with(subject)
        assert {a.achieved_on for a in achievements} == {T0 + minutes(5)}

    def test_total_points_override(self, subject):
        achievements = check_for_achievements(
            node=subject,
            user_id=USER_ID,
            existing_score=0,
            increment=10,
            thresholds=make_levels(subject.ref_id),
            existing_achievements=[],
            achieved_on_resolver=lambda node: T0,
            level_lookup=PercentageLevelLookup(),
            total_points=1000,
        )

        assert achievements == []

    def test_positional_call_takes_project_from_node(self):
        # Arrange
        subject = make_subject(total_points=100, project_id="other-proj")

        # Act
        achievements = check_for_achievements(
            subject,
            USER_ID,
            0,
            10,
            make_levels(subject.ref_id),
            [],
            lambda node: T0,
            PercentageLevelLookup(),
        )

        # Assert
        assert [(a.project_id, a.level) for a in achievements] == [("other-proj", 1)]

    def test_zero_total_points_is_a_configuration_error(self):
        subject = make_subject(total_points=0)

        with pytest.raises(ConfigurationError):
            self._check(subject, 0, 10)
