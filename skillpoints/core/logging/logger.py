"""
Skill Points Logging

Purpose
-------
Structured logging for the skill points engine. Engine modules only ask for
named loggers and bind event context; the host application decides when the
handlers are installed by calling `setup_logging()`. Importing the package
never touches the root logger.

Responsibilities
----------------
- Carry event context (user_id, project_id, skill_id, correlation_id,
  component, operation) in a ContextVar and copy it onto every record.
- Render records as JSON lines, merging `extra={...}` fields.
- Hand records to a bounded queue drained by a listener thread, so console
  and file I/O stay off the processing path.

Dependencies
------------
- skillpoints.core.config.Config
"""

from __future__ import annotations

import json
import logging
import queue
import sys
import uuid
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

from skillpoints.core.config import Config

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-40s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DAILY_BASENAME = "skillpoints_daily.json.log"

_event_context: ContextVar[Dict[str, Any]] = ContextVar("event_context", default={})

_queue_listener: Optional[QueueListener] = None
_queue_handler: Optional[QueueHandler] = None


def _level() -> int:
    return getattr(logging, str(Config.LOG_LEVEL).upper(), logging.INFO)


def _use_json() -> bool:
    if Config.LOG_JSON is None:
        return Config.is_production()
    return bool(Config.LOG_JSON)


# ============================================================================
# Filters & Formatters
# ============================================================================


class ContextFilter(logging.Filter):
    """Copy the current event context onto the record before it is queued."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = _event_context.get({})

        record.user_id = context.get("user_id", "N/A")
        record.project_id = context.get("project_id", "N/A")
        record.skill_id = context.get("skill_id", "N/A")
        record.correlation_id = context.get("correlation_id", "N/A")
        record.component = context.get("component") or record.name.split(".", 1)[0]
        record.operation = context.get("operation") or "N/A"
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


class JSONFormatter(logging.Formatter):
    STANDARD_ATTRS = frozenset(
        logging.LogRecord("", 0, "", 0, "", None, None).__dict__
    ) | {"message", "asctime", "taskName"}

    CONTEXT_ATTRS = (
        "user_id",
        "project_id",
        "skill_id",
        "correlation_id",
        "component",
        "operation",
    )

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr in self.CONTEXT_ATTRS:
            value = getattr(record, attr, None)
            if value not in (None, "N/A"):
                payload[attr] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.STANDARD_ATTRS
            and key not in self.CONTEXT_ATTRS
            and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, ensure_ascii=False, default=str)


class _DroppingQueueHandler(QueueHandler):
    """Drop records when the queue is full instead of blocking the caller."""

    dropped = 0

    def enqueue(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            self.dropped += 1
            sys.stderr.write("Skill points logging queue full; dropping log record.\n")


# ============================================================================
# Setup
# ============================================================================


def _build_console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if _use_json():
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _build_daily_file_handler() -> logging.Handler:
    logs_dir = Path(Config.LOGS_DIR).resolve()
    logs_dir.mkdir(parents=True, exist_ok=True)

    handler = TimedRotatingFileHandler(
        filename=str(logs_dir / DAILY_BASENAME),
        when="midnight",
        backupCount=1,
        encoding="utf-8",
        utc=True,
    )
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging() -> None:
    """
    Install the skill points handlers on the root logger.

    Called once by the host application (or the test suite). Calling it again
    while installed does nothing.
    """
    global _queue_listener, _queue_handler

    if _queue_handler is not None:
        return

    level = _level()
    handlers: List[logging.Handler] = [_build_console_handler()]
    if Config.LOG_TO_FILE:
        handlers.append(_build_daily_file_handler())
    for handler in handlers:
        handler.setLevel(level)

    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(Config.LOG_QUEUE_MAX_SIZE)
    _queue_listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _queue_listener.start()

    _queue_handler = _DroppingQueueHandler(log_queue)
    _queue_handler.setLevel(level)
    # Context lives on the calling thread, so it is captured before queueing
    _queue_handler.addFilter(ContextFilter())

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(_queue_handler)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging initialized",
        extra={
            "environment": Config.ENVIRONMENT,
            "log_level": logging.getLevelName(level),
            "json": _use_json(),
            "file": bool(Config.LOG_TO_FILE),
        },
    )


def shutdown_logging() -> None:
    """Flush queued records and remove the handlers installed by `setup_logging`."""
    global _queue_listener, _queue_handler

    if _queue_handler is None:
        return

    logging.getLogger().removeHandler(_queue_handler)
    if _queue_listener is not None:
        _queue_listener.stop()
        for handler in _queue_listener.handlers:
            handler.close()
    _queue_handler.close()
    _queue_listener = None
    _queue_handler = None


# ============================================================================
# Public API
# ============================================================================


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the context bound to the current execution context."""
    return dict(_event_context.get({}))


class LogContext:
    """
    Bind event context to every log record emitted inside the block.

    Usage
    -----
    >>> with LogContext(user_id="alice", project_id="proj", operation="report_skill"):
    ...     logger.info("processing")
    """

    def __init__(
        self,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
        skill_id: Optional[str] = None,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        self.context: Dict[str, Any] = {
            "user_id": user_id if user_id is not None else "N/A",
            "project_id": project_id if project_id is not None else "N/A",
            "skill_id": skill_id if skill_id is not None else "N/A",
            "component": component,
            "operation": operation,
            "correlation_id": correlation_id or uuid.uuid4().hex[:8],
            **extra,
        }
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        self._token = _event_context.set(self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _event_context.reset(self._token)
