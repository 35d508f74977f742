"""
Static configuration management for the skill points engine.

Purpose
-------
Provides centralized static configuration loaded from environment variables
with sensible defaults, type validation, and bounds checking.

Responsibilities
----------------
- Load configuration from environment variables with .env support
- Provide type-safe access to all static configuration values
- Resolve the reference time zone used for daily point buckets
- Track configuration loading metrics

Non-Responsibilities
--------------------
- Per-node configuration (point intervals, thresholds); those arrive with
  the loaded snapshot
- Secrets management (use environment variables)

Architecture Notes
------------------
- Singleton pattern via class methods (no instantiation)
- Auto-loads on module import via Config.validate()
- Metrics track which values came from environment vs defaults

Dependencies
------------
- python-dotenv: Environment variable loading
- zoneinfo: IANA time zone resolution

Environment Variables
---------------------
- ENVIRONMENT: Environment type (default: development)
- DEBUG: Debug mode flag (default: False)
- LOG_LEVEL: Logging level (default: INFO)
- LOG_JSON: Force JSON console logs (default: production only)
- LOG_TO_FILE: Keep a rotating JSON log file (default: False)
- LOGS_DIR: Directory for the log file (default: ./logs under the working directory)
- LOG_QUEUE_MAX_SIZE: Bound of the log record queue (default: 10000)
- REFERENCE_TIMEZONE: Time zone for daily buckets (default: UTC)
- DATABASE_URL: SQLAlchemy URL for the reference adapter
- DATABASE_ECHO: Echo SQL statements (default: False)
"""

import logging
import os
from datetime import datetime, timezone, tzinfo
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from skillpoints.modules.shared.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Deployment environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        Parse environment string safely with fallback.

        Example
        -------
        >>> Environment.from_string("production") == Environment.PRODUCTION
        True
        >>> Environment.from_string("invalid") == Environment.DEVELOPMENT
        True
        """
        try:
            return cls(value.lower())
        except ValueError:
            # Structured logger is not initialized during bootstrap
            logging.warning(f"Unknown environment '{value}', defaulting to development")
            return cls.DEVELOPMENT


# ============================================================================
# Configuration Metrics Tracker
# ============================================================================


class _ConfigLoadMetrics:
    """Tracks which values came from the environment and any validation errors."""

    def __init__(self):
        self.env_vars_loaded: Dict[str, bool] = {}
        self.validation_errors: Dict[str, str] = {}
        self.defaults_used: Dict[str, Any] = {}
        self.last_reload: Optional[str] = None

    def record_env_load(self, key: str, from_env: bool, value: Any, default: Any):
        self.env_vars_loaded[key] = from_env
        if not from_env:
            self.defaults_used[key] = default

    def record_validation_error(self, key: str, error: str):
        self.validation_errors[key] = error

    def get_summary(self) -> Dict[str, Any]:
        return {
            "total_configs": len(self.env_vars_loaded),
            "from_environment": sum(1 for v in self.env_vars_loaded.values() if v),
            "from_defaults": sum(1 for v in self.env_vars_loaded.values() if not v),
            "validation_errors": len(self.validation_errors),
            "defaults_used": list(self.defaults_used.keys()),
            "last_reload": self.last_reload,
        }


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config:
    """
    Centralized static configuration for the skill points engine.

    Usage
    -----
    >>> tz = Config.reference_timezone()
    >>> if Config.is_production():
    ...     logger.info("Running in production mode")
    """

    _metrics: Optional[_ConfigLoadMetrics] = None
    _enable_metrics: bool = True
    _validated: bool = False
    _timezone: Optional[tzinfo] = None

    # =========================================================================
    # Environment Configuration
    # =========================================================================

    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None
    LOG_TO_FILE: bool = False
    LOG_QUEUE_MAX_SIZE: int = 10_000

    # =========================================================================
    # Directory Configuration
    # =========================================================================

    LOGS_DIR: Path = Path("logs")

    # =========================================================================
    # Engine Configuration
    # =========================================================================

    REFERENCE_TIMEZONE: str = "UTC"

    # =========================================================================
    # Reference Adapter (SQL)
    # =========================================================================

    DATABASE_URL: str = "sqlite+pysqlite:///:memory:"
    DATABASE_ECHO: bool = False

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @classmethod
    def _init_metrics(cls):
        if cls._enable_metrics and cls._metrics is None:
            cls._metrics = _ConfigLoadMetrics()

    @classmethod
    def _safe_int(
        cls,
        key: str,
        default: int,
        min_val: Optional[int] = None,
        max_val: Optional[int] = None,
    ) -> int:
        """
        Safely parse integer from environment with validation.

        Out-of-range or unparsable values fall back to the default with a warning.
        """
        cls._init_metrics()

        raw_value = os.getenv(key)

        if raw_value is None:
            if cls._metrics:
                cls._metrics.record_env_load(key, False, default, default)
            return default

        try:
            value = int(raw_value)
        except ValueError:
            error = f"{key}='{raw_value}' is not a valid integer, using default {default}"
            logging.warning(error)
            if cls._metrics:
                cls._metrics.record_validation_error(key, error)
            return default

        if (min_val is not None and value < min_val) or (max_val is not None and value > max_val):
            error = f"{key}={value} is outside [{min_val}, {max_val}], using default {default}"
            logging.warning(error)
            if cls._metrics:
                cls._metrics.record_validation_error(key, error)
            return default

        if cls._metrics:
            cls._metrics.record_env_load(key, True, value, default)
        return value

    @classmethod
    def _safe_bool(cls, key: str, default: Optional[bool]) -> Optional[bool]:
        """
        Safely parse boolean from environment.

        Recognizes: true/false, yes/no, 1/0, on/off (case-insensitive).
        """
        cls._init_metrics()

        raw_value = os.getenv(key)

        if raw_value is None:
            if cls._metrics:
                cls._metrics.record_env_load(key, False, default, default)
            return default

        normalized = raw_value.lower().strip()
        true_values = {"true", "yes", "1", "on"}
        false_values = {"false", "no", "0", "off"}

        if normalized in true_values:
            value = True
        elif normalized in false_values:
            value = False
        else:
            error = f"{key}='{raw_value}' is not a valid boolean, using default {default}"
            logging.warning(error)
            if cls._metrics:
                cls._metrics.record_validation_error(key, error)
            return default

        if cls._metrics:
            cls._metrics.record_env_load(key, True, value, default)

        return value

    @classmethod
    def _safe_str(cls, key: str, default: str) -> str:
        """Safely get string from environment."""
        cls._init_metrics()

        value = os.getenv(key, default)
        from_env = key in os.environ

        if cls._metrics:
            cls._metrics.record_env_load(key, from_env, value, default)

        return value

    # =========================================================================
    # Configuration Loading
    # =========================================================================

    @classmethod
    def load(cls) -> None:
        """Load all configuration from environment variables with validation."""
        cls._init_metrics()

        cls.ENVIRONMENT = Environment.from_string(
            cls._safe_str("ENVIRONMENT", "development")
        ).value
        cls.DEBUG = bool(cls._safe_bool("DEBUG", False))
        cls.LOG_LEVEL = cls._safe_str("LOG_LEVEL", "INFO")
        cls.LOG_JSON = cls._safe_bool("LOG_JSON", None)
        cls.LOG_TO_FILE = bool(cls._safe_bool("LOG_TO_FILE", False))
        cls.LOGS_DIR = Path(cls._safe_str("LOGS_DIR", str(Path.cwd() / "logs")))
        cls.LOG_QUEUE_MAX_SIZE = cls._safe_int("LOG_QUEUE_MAX_SIZE", 10_000, min_val=1, max_val=1_000_000)

        cls.REFERENCE_TIMEZONE = cls._safe_str("REFERENCE_TIMEZONE", "UTC")
        cls._timezone = None

        cls.DATABASE_URL = cls._safe_str("DATABASE_URL", "sqlite+pysqlite:///:memory:")
        cls.DATABASE_ECHO = bool(cls._safe_bool("DATABASE_ECHO", False))

        if cls._metrics:
            cls._metrics.last_reload = datetime.now(timezone.utc).isoformat()

    @classmethod
    def validate(cls) -> None:
        """
        Validate critical configuration values on startup.

        Raises
        ------
        ConfigurationError:
            If the reference time zone is unknown while running in production.
        """
        if cls._validated:
            return

        logger = logging.getLogger(__name__)
        cls.load()

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if cls.LOG_LEVEL.upper() not in valid_log_levels:
            logger.warning(f"Invalid LOG_LEVEL '{cls.LOG_LEVEL}', using INFO")
            cls.LOG_LEVEL = "INFO"

        try:
            cls.reference_timezone()
        except ConfigurationError as e:
            if cls.is_production():
                raise
            logger.warning(f"{e}; falling back to UTC")
            cls.REFERENCE_TIMEZONE = "UTC"
            cls._timezone = timezone.utc

        if cls.is_production() and cls.DEBUG:
            logger.warning("DEBUG mode enabled in production!")

        cls._validated = True

        if cls._metrics and cls._metrics.validation_errors:
            logger.warning(f"Configuration warnings: {cls._metrics.validation_errors}")

    @classmethod
    def reference_timezone(cls) -> tzinfo:
        """
        Resolve REFERENCE_TIMEZONE into a tzinfo.

        Raises
        ------
        ConfigurationError:
            If the name is not a known IANA time zone.
        """
        if cls._timezone is not None:
            return cls._timezone

        name = cls.REFERENCE_TIMEZONE.strip()
        if name.upper() == "UTC":
            cls._timezone = timezone.utc
            return cls._timezone

        try:
            cls._timezone = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(
                "REFERENCE_TIMEZONE", f"unknown time zone '{name}'"
            ) from e
        return cls._timezone

    # =========================================================================
    # Environment Checks
    # =========================================================================

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_testing(cls) -> bool:
        return cls.ENVIRONMENT.lower() == "testing"

    # =========================================================================
    # Metrics & Summary
    # =========================================================================

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        """Get non-sensitive configuration summary for debugging."""
        return {
            "environment": cls.ENVIRONMENT,
            "debug": cls.DEBUG,
            "log_level": cls.LOG_LEVEL,
            "reference_timezone": cls.REFERENCE_TIMEZONE,
            "database_url_set": bool(cls.DATABASE_URL),
            "load": cls._metrics.get_summary() if cls._metrics else None,
        }


# Auto-validate on import
Config.validate()
