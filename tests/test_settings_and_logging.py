"""
Unit tests for settings and logging configuration.
"""

import importlib
import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import MagicMock

import pytest

from machine_reservation import configs
from machine_reservation.infrastructure.settings import (
    Settings,
    SimulationSettings,
    get_settings,
    reset_settings,
)
from machine_reservation.loggers import LokiHandler, build_loki_payload, get_logger


# =============================================================================
# Settings Tests
# =============================================================================


class TestSettings:
    """Tests for Settings configuration."""

    def test_defaults(self):
        """Test default settings values."""
        settings = Settings.from_env({})

        assert settings.cache.capacity == 64
        assert settings.simulation.runs == 10000
        assert settings.simulation.iterations == 4
        assert settings.simulation.hardware_failure_rate == 0.05

    def test_environment_overrides(self):
        """Test environment variables override the defaults."""
        settings = Settings.from_env({configs.ENV_CACHE_CAPACITY: "8"})
        assert settings.cache.capacity == 8

    @pytest.mark.parametrize("value", ["0", "-3", "many"])
    def test_invalid_cache_capacity(self, value):
        """Test invalid capacity overrides are rejected."""
        with pytest.raises(ValueError):
            Settings.from_env({configs.ENV_CACHE_CAPACITY: value})

    def test_settings_singleton(self):
        """Test get_settings returns the same instance until reset."""
        reset_settings()
        first = get_settings()

        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first

    def test_inspect_share(self):
        """Test the inspect share is what reserve and start leave."""
        sim = SimulationSettings(reserve_share=0.4, start_share=0.3)
        assert sim.inspect_share == pytest.approx(0.3)


# =============================================================================
# Logging Tests
# =============================================================================


class TestLoggers:
    """Tests for logger construction and the Loki handler."""

    def test_loki_payload(self):
        """Test the Loki push payload shape."""
        payload = build_loki_payload("INFO", "hello", "machine_reservation")
        stream = payload["streams"][0]

        assert stream["stream"] == {"level": "INFO", "app": "machine_reservation"}
        assert stream["values"][0][1] == "hello"
        assert stream["values"][0][0].isdigit()

    def test_loki_handler_posts(self):
        """Test the Loki handler posts each record to its URL."""
        client = MagicMock()
        handler = LokiHandler("http://loki/push", "app", client=client)
        record = logging.LogRecord("test", logging.WARNING, __file__, 1, "boom", None, None)

        handler.emit(record)

        client.post.assert_called_once()
        args, kwargs = client.post.call_args
        assert args == ("http://loki/push",)
        assert kwargs["json"]["streams"][0]["stream"]["level"] == "WARNING"

    def test_loki_handler_swallows_send_errors(self, monkeypatch):
        """Test a failing push goes through handleError instead of raising."""
        client = MagicMock()
        client.post.side_effect = RuntimeError("down")
        handler = LokiHandler("http://loki/push", "app", client=client)
        handle_error = MagicMock()
        monkeypatch.setattr(handler, "handleError", handle_error)
        record = logging.LogRecord("test", logging.ERROR, __file__, 1, "boom", None, None)

        handler.emit(record)

        handle_error.assert_called_once_with(record)

    def test_console_only_by_default(self):
        """Test a logger without file or Loki gets only a console handler."""
        log = get_logger("test.console_only")

        assert len(log.handlers) == 1
        assert isinstance(log.handlers[0], logging.StreamHandler)

    def test_file_and_loki_handlers(self, tmp_path):
        """Test file and Loki handlers are attached when configured."""
        log_file = tmp_path / "logs" / "service.log"
        log = get_logger(
            "test.all_handlers",
            log_file=str(log_file),
            loki_url="http://localhost:3100/loki/api/v1/push",
        )
        try:
            kinds = {type(h) for h in log.handlers}
            assert RotatingFileHandler in kinds
            assert LokiHandler in kinds
            assert log_file.parent.is_dir()
        finally:
            for handler in list(log.handlers):
                handler.close()
                log.removeHandler(handler)

    def test_repeated_calls_do_not_duplicate_handlers(self):
        """Test asking for the same logger twice reuses its handlers."""
        first = get_logger("test.repeat")
        second = get_logger("test.repeat")

        assert first is second
        assert len(second.handlers) == 1

    def test_unknown_level_name_falls_back(self):
        """Test get_logger accepts an unknown level name."""
        log = get_logger("test.unknown_level", level="VERBOSE")
        assert log.level == logging.INFO

    def test_level_name_is_case_insensitive(self):
        """Test lower-case level names are accepted."""
        log = get_logger("test.lower_level", level="debug")
        assert log.level == logging.DEBUG


# =============================================================================
# Log Configuration Tests
# =============================================================================


class TestLogConfiguration:
    """Tests for log settings resolved from the environment."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("debug", "DEBUG"),
            (" Warning ", "WARNING"),
            ("ERROR", "ERROR"),
            ("VERBOSE", "INFO"),
            ("", "INFO"),
            (None, "INFO"),
        ],
    )
    def test_resolve_log_level(self, value, expected):
        """Test level names are normalized and unknown ones fall back."""
        assert configs.resolve_log_level(value) == expected

    def test_unknown_environment_level_does_not_break_import(self, monkeypatch):
        """Test an unknown level in the environment resolves to the default."""
        monkeypatch.setenv(configs.ENV_LOG_LEVEL, "VERBOSE")
        try:
            reloaded = importlib.reload(configs)
            assert reloaded.LOG_LEVEL == "INFO"
        finally:
            monkeypatch.undo()
            importlib.reload(configs)
