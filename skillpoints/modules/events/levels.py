"""
Percentage-based level lookup.

A level is reached when the user's score is at least `min_percentage` percent
of the node's total points, and every lower level is reached as well.
Percentages are evaluated as exact decimals, so 10% of 250 points is exactly
25 points.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import List, Optional, Sequence

from skillpoints.domain.models import LevelThreshold
from skillpoints.modules.events.collaborators import LevelInfo, LevelLookup
from skillpoints.modules.shared.exceptions import ConfigurationError
from skillpoints.modules.shared.validators import validate_total_points


def points_required(total_points: int, min_percentage: float) -> int:
    """Smallest score that reaches `min_percentage` of `total_points`."""
    return math.ceil(Fraction(total_points) * Fraction(str(min_percentage)) / 100)


def sorted_thresholds(thresholds: Sequence[LevelThreshold]) -> List[LevelThreshold]:
    """
    Thresholds ordered by level, after checking they form a usable ladder.

    Raises:
        ConfigurationError: If the list is empty, levels are not 1..N without
            gaps or duplicates, or percentages do not strictly increase with level
    """
    if not thresholds:
        raise ConfigurationError("levels", "no level thresholds defined")

    ordered = sorted(thresholds, key=lambda t: t.level)
    levels = [t.level for t in ordered]
    if levels != list(range(1, len(ordered) + 1)):
        raise ConfigurationError(
            "levels", f"levels must be contiguous from 1, got {levels}"
        )

    for lower, higher in zip(ordered, ordered[1:]):
        if higher.min_percentage <= lower.min_percentage:
            raise ConfigurationError(
                "levels",
                f"level {higher.level} requires {higher.min_percentage}% which is not above "
                f"level {lower.level} ({lower.min_percentage}%)",
            )

    return ordered


class PercentageLevelLookup(LevelLookup):
    """Default LevelLookup: walks the threshold ladder until a level is not met."""

    def get_level_info(
        self,
        project_id: str,
        thresholds: Sequence[LevelThreshold],
        total_points: int,
        current_score: int,
    ) -> LevelInfo:
        validate_total_points(total_points, project_id)
        ordered = sorted_thresholds(thresholds)

        level = 0
        level_points = 0
        next_level_points: Optional[int] = None
        for threshold in ordered:
            required = points_required(total_points, threshold.min_percentage)
            if current_score < required:
                next_level_points = required
                break
            level = threshold.level
            level_points = required

        return LevelInfo(
            level=level,
            current_points=current_score,
            level_points=level_points,
            next_level_points=next_level_points,
        )
