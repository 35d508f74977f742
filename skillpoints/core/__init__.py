"""
Core infrastructure layer for the skill points engine.

Purpose
-------
Provide a single import surface for the infrastructure the engine runs on:

- Configuration management (Config, Environment)
- Logging (structured logging, logger factory, log context)

Non-Responsibilities
--------------------
- Points, levels or time window logic (see skillpoints.modules.events)
- Any side effects beyond simple re-exports and config validation;
  handlers are installed only when the host calls setup_logging()
"""

from skillpoints.core.config import Config, Environment
from skillpoints.core.logging import LogContext, get_logger, setup_logging, shutdown_logging

__all__ = [
    "Config",
    "Environment",
    "LogContext",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
]
