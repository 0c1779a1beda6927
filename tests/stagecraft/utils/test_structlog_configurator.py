import json
import logging
import os

import pytest
import structlog

from stagecraft.models.logging_config import LoggingConfig
from stagecraft.utils.structlog_configurator import (
    _add_static_context,
    _configure_processors,
    _use_json,
    configure_structlog,
    get_logger,
    is_development_environment,
)


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore global logging state changed by configure_structlog."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    structlog.reset_defaults()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestEnvironmentDetection:
    """Test environment detection functions."""

    def test_is_development_environment(self, mocker):
        """Should return True when STAGECRAFT_ENV is development."""
        mocker.patch.dict(os.environ, {"STAGECRAFT_ENV": "development"})
        assert is_development_environment() is True

    def test_is_development_environment_default(self, mocker):
        """Should default to production."""
        mocker.patch.dict(os.environ, {}, clear=True)
        assert is_development_environment() is False


class TestRendering:
    """Test JSON vs console rendering decisions."""

    def test_explicit_json(self, mocker):
        """Should honour an explicit json_logs setting outside development."""
        mocker.patch("sys.stderr.isatty", return_value=True)
        assert _use_json(LoggingConfig(json_logs=True), is_development=False) is True
        assert _use_json(LoggingConfig(json_logs=False), is_development=False) is False

    def test_auto_detect_tty(self, mocker):
        """Should use console output for terminals and JSON otherwise."""
        isatty = mocker.patch("sys.stderr.isatty", return_value=True)
        assert _use_json(LoggingConfig(), is_development=False) is False
        isatty.return_value = False
        assert _use_json(LoggingConfig(), is_development=False) is True

    def test_development_env_override(self, mocker):
        """Should allow JSON output in development through the environment."""
        mocker.patch.dict(os.environ, {"STAGECRAFT_JSON_LOGS": "true"})
        assert _use_json(LoggingConfig(), is_development=True) is True

    def test_development_defaults_to_console(self, mocker):
        """Should render human-readable output in development."""
        mocker.patch.dict(os.environ, {}, clear=True)
        assert _use_json(LoggingConfig(), is_development=True) is False


class TestProcessors:
    """Test processor configuration."""

    def test_static_context(self):
        """Should add static fields to every event."""
        processor = _add_static_context({"service": "stagecraft"})
        assert processor(None, "info", {"event": "x"}) == {"event": "x", "service": "stagecraft"}

    def test_json_renderer_last(self):
        """Should end the chain with the JSON renderer when JSON is requested."""
        processors = _configure_processors(LoggingConfig(json_logs=True), is_development=False)
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_last(self):
        """Should end the chain with the console renderer otherwise."""
        processors = _configure_processors(LoggingConfig(json_logs=False), is_development=False)
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_callsite_parameters(self):
        """Should include caller info only when requested."""
        without = _configure_processors(LoggingConfig(json_logs=True), is_development=False)
        with_caller = _configure_processors(
            LoggingConfig(json_logs=True, include_caller=True), is_development=False
        )
        assert len(with_caller) == len(without) + 1
        assert any(
            isinstance(p, structlog.processors.CallsiteParameterAdder) for p in with_caller
        )


class TestConfigureStructlog:
    """Test full logging configuration."""

    def test_stdlib_records_rendered_as_json(self, mocker, capsys):
        """Should render standard library log records through structlog."""
        mocker.patch.dict(os.environ, {}, clear=True)

        configure_structlog(LoggingConfig(level="info", json_logs=True))
        logging.getLogger("stagecraft.test").info("Loaded %s config", "v1alpha3")

        lines = [line for line in capsys.readouterr().err.splitlines() if line]
        event = json.loads(lines[-1])
        assert event["event"] == "Loaded v1alpha3 config"
        assert event["level"] == "info"
        assert event["service"] == "stagecraft"
        assert "timestamp" in event

    def test_level_filtering(self, mocker, capsys):
        """Should drop records below the configured level."""
        mocker.patch.dict(os.environ, {}, clear=True)

        configure_structlog(LoggingConfig(level="warning", json_logs=True))
        logging.getLogger("stagecraft.test").info("hidden")

        assert "hidden" not in capsys.readouterr().err

    def test_get_logger(self):
        """Should return a structlog logger."""
        logger = get_logger("stagecraft.test")
        assert hasattr(logger, "info")
