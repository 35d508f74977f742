"""
Skill Points Logging Infrastructure

Exports the structured logging subsystem and the log context helpers.
"""

from skillpoints.core.logging.logger import (
    LogContext,
    get_log_context,
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "get_log_context",
    "LogContext",
]
