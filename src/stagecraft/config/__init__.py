"""stagecraft configuration package.

This package provides versioned pipeline configuration handling with:
- apiVersion resolution against a registry of schema versions
- Per-version parsing and default values
- Structural tag validation
- Step-by-step migration to the latest schema version
"""

from .errors import (
    ConfigError,
    ConfigValidationError,
    DocumentReadError,
    FutureConfigError,
    MalformedDocumentError,
    MalformedVersionError,
    SchemaParseError,
    StaleConfigError,
    UnknownVersionError,
    UpgradeError,
)
from .manager import ConfigManager
from .schema import (
    SCHEMA_VERSIONS,
    check_version_is_latest,
    parse_config,
    upgrade_steps,
    upgrade_to_latest,
)
from .versioned import VersionedConfig, dump_config

__all__ = [
    "SCHEMA_VERSIONS",
    "ConfigError",
    "ConfigManager",
    "ConfigValidationError",
    "DocumentReadError",
    "FutureConfigError",
    "MalformedDocumentError",
    "MalformedVersionError",
    "SchemaParseError",
    "StaleConfigError",
    "UnknownVersionError",
    "UpgradeError",
    "VersionedConfig",
    "check_version_is_latest",
    "dump_config",
    "parse_config",
    "upgrade_steps",
    "upgrade_to_latest",
]
