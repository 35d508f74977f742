"""
Shared Module

Purpose
-------
Provides the foundations used by the engine modules:
- Domain exceptions and error handling
- Base service and repository patterns
- Engine constants
- Domain validation utilities

Architecture
------------
- BaseService: Foundation for service classes (structured logging)
- BaseRepository: Type-safe database access patterns
- Domain exceptions: Input, configuration and lookup errors
- Validators: Domain validation with structured error raising
- Constants: Fixed identifiers and units

This package imports nothing from skillpoints.core; the config layer depends
on it.
"""

from .base_repository import BaseRepository
from .base_service import BaseService
from .constants import MIN_RECORDED_LEVEL, MINUTES_PER_HOUR, OVERALL_ID
from .exceptions import (
    ConfigurationError,
    ErrorSeverity,
    InvalidInputError,
    NotFoundError,
    SkillPointsException,
    get_error_severity,
    is_transient_error,
    should_alert,
)

__all__ = [
    "BaseRepository",
    "BaseService",
    "MIN_RECORDED_LEVEL",
    "MINUTES_PER_HOUR",
    "OVERALL_ID",
    "ConfigurationError",
    "ErrorSeverity",
    "InvalidInputError",
    "NotFoundError",
    "SkillPointsException",
    "get_error_severity",
    "is_transient_error",
    "should_alert",
]
