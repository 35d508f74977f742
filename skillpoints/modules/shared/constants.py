"""
Skill points engine constants.

Values that define how the engine behaves from a learner's perspective.
Infrastructure settings (log level, database URL, time zone) live in
`skillpoints.core.config`.
"""

from __future__ import annotations

from typing import Final

# ============================================================================
# PROJECT ROOT
# ============================================================================

OVERALL_ID: Final[str] = "OVERALL"  # name and id of project-level notices

# ============================================================================
# LEVELS
# ============================================================================

MIN_RECORDED_LEVEL: Final[int] = 1  # level 0 is the initial state, never recorded

# ============================================================================
# TIME WINDOWS
# ============================================================================

MINUTES_PER_HOUR: Final[int] = 60
