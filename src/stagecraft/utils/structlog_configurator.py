"""Structlog-based logging configuration for stagecraft.

Library modules log through the standard ``logging`` module; this configures
structlog as the renderer for the process. Output goes to stderr so that
command output on stdout stays machine readable.

Rendering:
- Development (STAGECRAFT_ENV=development): human-readable console output
  unless STAGECRAFT_JSON_LOGS=true
- Otherwise: JSON when stderr is not a terminal, console output when it is
"""

import logging
import os
import sys
from collections.abc import Callable
from typing import Any

import structlog

from stagecraft.models.logging_config import LoggingConfig


def is_development_environment() -> bool:
    """Check if running in a development checkout."""
    return os.environ.get("STAGECRAFT_ENV", "production") == "development"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _use_json(config: LoggingConfig, is_development: bool) -> bool:
    """Decide between JSON and human-readable rendering."""
    if is_development:
        if os.environ.get("STAGECRAFT_JSON_LOGS", "false").lower() == "true":
            return True
        return bool(config.json_logs)

    if config.json_logs is not None:
        return config.json_logs

    return not sys.stderr.isatty()


def _configure_processors(config: LoggingConfig, is_development: bool) -> list:
    """Configure structlog processors."""
    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(dict(config.extra_fields)),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if _use_json(config, is_development):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=is_development))

    return processors


def _configure_handlers(config: LoggingConfig, processors: list) -> None:
    """Route standard library log records through the structlog renderer."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.level, logging.WARNING)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=processors[:-1],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            processors[-1],
        ],
    )
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(log_level)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)


def configure_structlog(config: LoggingConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The LoggingConfig instance containing logging settings.
    """
    is_development = is_development_environment()
    processors = _configure_processors(config, is_development)

    structlog.configure(
        processors=[*processors[:-1], structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.level, logging.WARNING)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config, processors)

    logger = structlog.get_logger(__name__)
    logger.debug(
        "Structured logging configured",
        log_level=config.level,
        development=is_development,
        json_output=config.json_logs,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
