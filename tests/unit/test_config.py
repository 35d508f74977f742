"""
Unit tests for static configuration parsing.
"""

from datetime import timezone
from zoneinfo import ZoneInfo

import pytest

from skillpoints.core.config import Config
from skillpoints.modules.shared.exceptions import ConfigurationError


@pytest.fixture
def restore_config():
    """Put back the class-level settings a test reloads from a patched environment."""
    saved = {name: value for name, value in vars(Config).items() if name.isupper() or name == "_timezone"}
    yield
    for name, value in saved.items():
        setattr(Config, name, value)


@pytest.fixture
def fresh_timezone(monkeypatch):
    """Let a test change REFERENCE_TIMEZONE without leaking the cached tzinfo."""
    monkeypatch.setattr(Config, "_timezone", None)


@pytest.mark.unit
class TestConfig:

    def test_loaded_for_testing(self):
        assert Config.is_testing()
        assert Config.LOG_TO_FILE is False

    @pytest.mark.parametrize("raw, expected", [("yes", True), ("OFF", False), ("1", True)])
    def test_safe_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("SKILLPOINTS_FLAG", raw)

        assert Config._safe_bool("SKILLPOINTS_FLAG", None) is expected

    def test_safe_bool_invalid_falls_back(self, monkeypatch):
        monkeypatch.setenv("SKILLPOINTS_FLAG", "maybe")

        assert Config._safe_bool("SKILLPOINTS_FLAG", True) is True

    def test_log_queue_size_out_of_range_falls_back(self, monkeypatch, restore_config):
        monkeypatch.setenv("LOG_QUEUE_MAX_SIZE", "0")

        Config.load()

        assert Config.LOG_QUEUE_MAX_SIZE == 10_000

    def test_log_queue_size_from_environment(self, monkeypatch, restore_config):
        monkeypatch.setenv("LOG_QUEUE_MAX_SIZE", "500")

        Config.load()

        assert Config.LOG_QUEUE_MAX_SIZE == 500

    def test_file_logging_off_and_under_working_directory_by_default(
        self, monkeypatch, tmp_path, restore_config
    ):
        # Arrange
        monkeypatch.delenv("LOG_TO_FILE", raising=False)
        monkeypatch.delenv("LOGS_DIR", raising=False)
        monkeypatch.chdir(tmp_path)

        # Act
        Config.load()

        # Assert
        assert Config.LOG_TO_FILE is False
        assert Config.LOGS_DIR.resolve() == (tmp_path / "logs").resolve()

    def test_utc_reference_timezone(self, monkeypatch, fresh_timezone):
        monkeypatch.setattr(Config, "REFERENCE_TIMEZONE", "utc")

        assert Config.reference_timezone() is timezone.utc

    def test_named_reference_timezone(self, monkeypatch, fresh_timezone):
        monkeypatch.setattr(Config, "REFERENCE_TIMEZONE", "Europe/Berlin")

        assert Config.reference_timezone() == ZoneInfo("Europe/Berlin")

    def test_unknown_reference_timezone(self, monkeypatch, fresh_timezone):
        monkeypatch.setattr(Config, "REFERENCE_TIMEZONE", "Mars/Olympus")

        with pytest.raises(ConfigurationError) as exc_info:
            Config.reference_timezone()

        assert exc_info.value.config_key == "REFERENCE_TIMEZONE"

    def test_summary_has_no_database_url(self):
        summary = Config.get_config_summary()

        assert "database_url" not in summary
        assert summary["environment"] == "testing"
        assert summary["load"]["total_configs"] > 0
