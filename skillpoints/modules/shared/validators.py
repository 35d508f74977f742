"""
Validation helpers for the skill points engine.

Validators:
- Accept data to validate as parameters
- Raise specific domain exceptions on failure
- Return None on success (raise-on-error pattern)
- Never touch storage

Usage
-----
    from skillpoints.modules.shared.validators import validate_required_id

    validate_required_id(event.user_id, "user_id")
    # Raises: InvalidInputError when empty
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from datetime import datetime


def validate_required_id(value: Optional[str], field_name: str) -> None:
    """
    Validate that a required identifier is present and not blank.

    Raises:
        InvalidInputError: If value is None, empty or whitespace-only
    """
    from .exceptions import InvalidInputError

    if value is None or not str(value).strip():
        raise InvalidInputError(field_name, "a value is required")


def validate_timestamp(value: Optional[datetime], field_name: str = "timestamp") -> None:
    """
    Validate that an event timestamp was provided.

    Raises:
        InvalidInputError: If value is None
    """
    from .exceptions import InvalidInputError

    if value is None:
        raise InvalidInputError(field_name, "event timestamp cannot be null")


def validate_total_points(total_points: int, node_label: Any) -> None:
    """
    Validate that a node can be scored against.

    Raises:
        ConfigurationError: If total_points is zero or negative
    """
    from .exceptions import ConfigurationError

    if total_points <= 0:
        raise ConfigurationError(
            "total_points",
            f"{node_label} must have positive total points, got {total_points}",
            details={"node": node_label},
        )


def validate_point_increment(increment: int, node_label: Any) -> None:
    """
    Validate that a skill awards a positive number of points per event.

    Raises:
        ConfigurationError: If increment is zero or negative
    """
    from .exceptions import ConfigurationError

    if increment <= 0:
        raise ConfigurationError(
            "point_increment",
            f"{node_label} must award a positive point increment, got {increment}",
            details={"node": node_label},
        )
