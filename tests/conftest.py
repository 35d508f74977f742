"""
Pytest Configuration and Fixtures for the Skill Points Test Suite
=================================================================

Purpose
-------
Centralized fixtures and factories shared by unit and integration tests.

Responsibilities
----------------
- Test environment setup (no log files, testing environment)
- Hierarchy and snapshot factories for test data
- In-memory collaborator fakes for unit tests
- SQLite session management for integration tests

Architecture Notes
------------------
- Unit tests use fakes and mocks (fast, isolated)
- Integration tests use an in-memory SQLite engine with a clean schema per test
"""

from __future__ import annotations

import os

# Must be set before skillpoints is imported: config loads on import
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("REFERENCE_TIMEZONE", "UTC")

from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import Dict, Generator, List, Optional, Sequence, Tuple  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from skillpoints.core.logging import setup_logging, shutdown_logging  # noqa: E402
from skillpoints.database import create_session_factory  # noqa: E402
from skillpoints.domain.models import (  # noqa: E402
    AchievementRecord,
    LevelThreshold,
    LoadedSnapshot,
    NodeKind,
    PointRecord,
    SkillNode,
)
from skillpoints.modules.events.collaborators import (  # noqa: E402
    LatestEventTimestamp,
    OccurrenceCounter,
)

PROJECT_ID = "proj"
USER_ID = "alice"
T0 = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)

# Five levels at 10/25/45/67/92 percent
DEFAULT_PERCENTAGES = (10, 25, 45, 67, 92)


def pytest_configure(config):
    setup_logging()


def pytest_unconfigure(config):
    shutdown_logging()


# ============================================================================
# FACTORIES
# ============================================================================


def make_skill(
    ref_id: int = 1,
    skill_id: str = "skill1",
    total_points: int = 100,
    point_increment: int = 10,
    interval: int = 0,
    max_occurrences: int = 1,
    project_id: str = PROJECT_ID,
) -> SkillNode:
    return SkillNode(
        ref_id=ref_id,
        skill_id=skill_id,
        project_id=project_id,
        name=f"Skill {skill_id}",
        kind=NodeKind.SKILL,
        total_points=total_points,
        point_increment=point_increment,
        point_increment_interval=interval,
        max_occurrences_within_interval=max_occurrences,
    )


def make_subject(
    ref_id: int = 10,
    skill_id: str = "subj1",
    total_points: int = 100,
    kind: NodeKind = NodeKind.SUBJECT,
    project_id: str = PROJECT_ID,
) -> SkillNode:
    return SkillNode(
        ref_id=ref_id,
        skill_id=skill_id,
        project_id=project_id,
        name=f"Subject {skill_id}",
        kind=kind,
        total_points=total_points,
    )


def make_levels(
    ref_id: Optional[int], percentages: Sequence[float] = DEFAULT_PERCENTAGES
) -> List[LevelThreshold]:
    return [
        LevelThreshold(skill_ref_id=ref_id, level=i, min_percentage=pct)
        for i, pct in enumerate(percentages, start=1)
    ]


def make_snapshot(
    skill: Optional[SkillNode] = None,
    parents: Sequence[SkillNode] = (),
    project_total_points: int = 100,
    user_points: Sequence[PointRecord] = (),
    user_achievements: Sequence[AchievementRecord] = (),
    levels: Optional[Sequence[LevelThreshold]] = None,
) -> LoadedSnapshot:
    """Snapshot with default ladders for every subject and the project root."""
    skill = skill or make_skill()
    if levels is None:
        levels = make_levels(None)
        for parent in parents:
            if parent.kind is NodeKind.SUBJECT:
                levels += make_levels(parent.ref_id)
    return LoadedSnapshot(
        project_id=skill.project_id,
        project_total_points=project_total_points,
        skill=skill,
        parents=tuple(parents),
        user_points=tuple(user_points),
        user_achievements=tuple(user_achievements),
        levels=tuple(levels),
    )


def make_points(
    node: Optional[SkillNode],
    points: int,
    day=None,
    user_id: str = USER_ID,
) -> PointRecord:
    is_node = node is not None and not node.is_project
    return PointRecord(
        user_id=user_id,
        project_id=PROJECT_ID,
        skill_id=node.skill_id if is_node else None,
        skill_ref_id=node.ref_id if is_node else None,
        points=points,
        day=day,
    )


def make_achievement(
    node: Optional[SkillNode],
    level: int,
    achieved_on: datetime = T0,
    user_id: str = USER_ID,
) -> AchievementRecord:
    is_node = node is not None and not node.is_project
    return AchievementRecord(
        user_id=user_id,
        project_id=PROJECT_ID,
        skill_id=node.skill_id if is_node else None,
        skill_ref_id=node.ref_id if is_node else None,
        level=level,
        points_when_achieved=0,
        achieved_on=achieved_on,
    )


# ============================================================================
# COLLABORATOR FAKES (Unit Tests)
# ============================================================================


class FakeOccurrenceCounter(OccurrenceCounter):
    """Counts recorded timestamps strictly inside (start, end)."""

    def __init__(self, performed: Sequence[Tuple[str, datetime]] = ()) -> None:
        self.performed = list(performed)
        self.calls: List[Tuple[datetime, datetime]] = []

    def count_occurrences(self, user_id, project_id, skill_id, start, end) -> int:
        self.calls.append((start, end))
        return sum(1 for sid, ts in self.performed if sid == skill_id and start < ts < end)


class FakeLatestEventTimestamp(LatestEventTimestamp):
    """Returns a fixed latest timestamp per ref id and records every query."""

    def __init__(self, latest: Optional[Dict[Optional[int], datetime]] = None) -> None:
        self.latest = latest or {}
        self.calls: List[Optional[int]] = []

    def get_latest_performed_on(self, user_id, project_id, skill_ref_id):
        self.calls.append(skill_ref_id)
        return self.latest.get(skill_ref_id)


@pytest.fixture
def occurrence_counter() -> FakeOccurrenceCounter:
    return FakeOccurrenceCounter()


@pytest.fixture
def latest_event_timestamp() -> FakeLatestEventTimestamp:
    return FakeLatestEventTimestamp()


# ============================================================================
# DATABASE FIXTURES (Integration Tests)
# ============================================================================


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """
    Fresh in-memory SQLite database per test.

    Scope: function (new schema per test, clean slate)
    """
    factory = create_session_factory("sqlite+pysqlite:///:memory:", create_schema=True)
    session = factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        factory.kw["bind"].dispose()


def minutes(n: float) -> timedelta:
    return timedelta(minutes=n)
