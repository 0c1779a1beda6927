"""Logging settings for the stagecraft tool itself."""

import os

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value.lower() in ("1", "true", "yes", "on")


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "WARNING"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "stagecraft"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        """Build logging settings from STAGECRAFT_* environment variables."""
        settings: dict[str, object] = {}
        if level := os.getenv("STAGECRAFT_LOG_LEVEL"):
            settings["level"] = level
        json_logs = _env_flag("STAGECRAFT_JSON_LOGS")
        if json_logs is not None:
            settings["json_logs"] = json_logs
        include_caller = _env_flag("STAGECRAFT_LOG_CALLER")
        if include_caller is not None:
            settings["include_caller"] = include_caller
        return cls(**settings)
