"""Configuration management with version support."""

import logging
import shutil
from pathlib import Path

from stagecraft.config.errors import ConfigError, ConfigValidationError
from stagecraft.config.probe import probe_version
from stagecraft.config.reader import STDIN_SOURCE, is_url, read_configuration
from stagecraft.config.schema import (
    SCHEMA_VERSIONS,
    check_version_is_latest,
    parse_config,
    upgrade_to_latest,
)
from stagecraft.config.versioned import VersionedConfig, dump_config
from stagecraft.config.yamltags import TagViolationError, process_struct
from stagecraft.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading, checking, saving and migration."""

    def __init__(self, path_resolver: PathResolver | None = None, source: str | None = None):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
            source: Config file path, URL or "-" for stdin. Defaults to the
                path resolver's pipeline config path.
        """
        self.path_resolver = path_resolver or PathResolver()
        self.source = source or str(self.path_resolver.get_pipeline_config_path())
        self.registry = SCHEMA_VERSIONS
        self._data: bytes | None = None

    @property
    def latest_version(self) -> str:
        """The schema version configs are upgraded to."""
        return self.registry.latest.version

    def read(self) -> bytes:
        """Read the raw configuration document.

        The document is read once and reused until the next ``save``, so a
        stdin source can back several operations.
        """
        if self._data is None:
            self._data = read_configuration(self.source)
        return self._data

    def load(self, apply_defaults: bool = True) -> VersionedConfig:
        """Load the configuration in the schema version it declares.

        Args:
            apply_defaults: Fill unset optional fields with version defaults

        Returns:
            VersionedConfig: Parsed and validated configuration
        """
        config = parse_config(self.read(), apply_defaults, self.registry)
        logger.info("Loaded %s config from %s", config.get_version(), self.source)
        return config

    def load_latest(self, apply_defaults: bool = True) -> VersionedConfig:
        """Load the configuration and upgrade it to the latest schema version.

        With ``apply_defaults`` the defaults of the declared version are applied
        before upgrading and those of the latest version afterwards.
        """
        config = upgrade_to_latest(self.load(apply_defaults), self.registry)
        if apply_defaults:
            config.set_defaults()
        return config

    def check(self) -> None:
        """Check that the configuration uses the latest schema version.

        Raises:
            StaleConfigError: If the config should be migrated with ``fix``
            FutureConfigError: If the config is newer than this build
        """
        check_version_is_latest(probe_version(self.read()), self.registry)

    def fix(self, overwrite: bool = False) -> str:
        """Upgrade the configuration to the latest schema version.

        Defaults are not applied, so the result contains only values that were
        present in the original document or introduced by an upgrade step.

        Args:
            overwrite: Write the upgraded config back to its file, keeping a backup

        Returns:
            str: The upgraded configuration as YAML
        """
        config = self.load(apply_defaults=False)
        if config.get_version() == self.latest_version:
            logger.info("Config is already at latest version %s", self.latest_version)
        else:
            config = upgrade_to_latest(config, self.registry)

        if overwrite:
            self.save(config)

        return dump_config(config)

    def save(self, config: VersionedConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save

        Raises:
            ConfigValidationError: If the config violates structural constraints
            ConfigError: If the source is not a local file
            PermissionError: If config file cannot be written
        """
        if self.source == STDIN_SOURCE or is_url(self.source):
            raise ConfigError(f"cannot write config to '{self.source}'")

        try:
            process_struct(config)
        except TagViolationError as e:
            raise ConfigValidationError(config.get_version(), e.violations) from e

        config_path = Path(self.source)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            backup_path = self.path_resolver.get_backup_path(config_path)
            try:
                shutil.copy2(config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        config_path.write_text(dump_config(config))
        self._data = None
        logger.info("Configuration saved successfully to %s", config_path)
