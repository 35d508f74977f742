"""
Base Service Foundation

Purpose
-------
Provides the foundational class for services that drive the engine. Services
orchestrate the pure pipeline steps, enforce preconditions and log every
operation with structured context.

Design Notes
------------
This base class provides:
- Structured logging with operation context
- Error logging that keeps the exception type and message as fields

What this class does NOT do:
- Manage database sessions or transactions (the caller owns the unit of work)
- Contain points or level logic

Usage
-----
    class SkillEventService(BaseService):
        def __init__(self, occurrence_counter, latest_event_timestamp):
            super().__init__(get_logger(__name__))
            ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from logging import Logger


class BaseService:
    """
    Base class for engine services.

    Args:
        logger: Structured logger instance
    """

    def __init__(self, logger: Logger) -> None:
        self.log = logger

    def log_operation(self, operation: str, **context: Any) -> None:
        """
        Log a service operation with structured context.

        Args:
            operation: Name of the operation being performed
            **context: Additional context data
        """
        self.log.info(
            f"Service operation: {operation}",
            extra={"operation": operation, **context},
        )

    def log_error(self, operation: str, error: Exception, **context: Any) -> None:
        """
        Log a service error with full context.

        Args:
            operation: Name of the operation that failed
            error: The exception that occurred
            **context: Additional context data
        """
        self.log.error(
            f"Service error during {operation}: {str(error)}",
            extra={
                "operation": operation,
                "error_type": type(error).__name__,
                "error_message": str(error),
                **context,
            },
        )
