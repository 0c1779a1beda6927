"""Resolution, validation and migration of versioned pipeline configs.

``SCHEMA_VERSIONS`` is the process-wide table of known schema versions. It is
declared below as an explicit list and is complete as soon as this module has
been imported; nothing registers versions afterwards.
"""

import logging
from collections.abc import Iterator

import yaml

from stagecraft.config import apiversion, yamltags
from stagecraft.config.errors import (
    ConfigValidationError,
    FutureConfigError,
    SchemaParseError,
    StaleConfigError,
    UnknownVersionError,
    UpgradeError,
)
from stagecraft.config.probe import probe_version
from stagecraft.config.registry import VersionEntry, VersionRegistry
from stagecraft.config.versioned import VersionedConfig
from stagecraft.config.versions import v1alpha1, v1alpha2, v1alpha3

logger = logging.getLogger(__name__)

SCHEMA_VERSIONS = VersionRegistry(
    [
        VersionEntry(v1alpha1.VERSION, v1alpha1.PipelineConfig),
        VersionEntry(v1alpha2.VERSION, v1alpha2.PipelineConfig),
        VersionEntry(v1alpha3.VERSION, v1alpha3.PipelineConfig),
    ]
)


def parse_config(
    data: bytes, apply_defaults: bool, registry: VersionRegistry = SCHEMA_VERSIONS
) -> VersionedConfig:
    """Parse a document with the rules of the schema version it declares.

    The returned config is always of the declared version; nothing is upgraded.

    Args:
        data: Raw YAML document
        apply_defaults: Let the version module fill unset optional fields
        registry: Schema versions to resolve against

    Returns:
        VersionedConfig: Populated and validated config

    Raises:
        MalformedDocumentError: If no apiVersion can be read
        UnknownVersionError: If the apiVersion is not registered
        SchemaParseError: If the content is invalid for that version
        ConfigValidationError: If structural tag constraints are violated
    """
    version = probe_version(data)

    factory = registry.find(version)
    if factory is None:
        raise UnknownVersionError(version)

    config = factory()
    try:
        config.parse(data, apply_defaults)
    except (yaml.YAMLError, ValueError, TypeError) as e:
        raise SchemaParseError(version, str(e)) from e

    try:
        yamltags.process_struct(config)
    except yamltags.TagViolationError as e:
        raise ConfigValidationError(version, e.violations) from e

    logger.debug("Parsed %s config (defaults applied: %s)", version, apply_defaults)
    return config


def upgrade_steps(
    config: VersionedConfig, registry: VersionRegistry = SCHEMA_VERSIONS
) -> Iterator[VersionedConfig]:
    """Yield each config produced on the way from ``config`` to the latest version.

    Yields nothing when ``config`` is already latest. Every call starts a fresh
    sequence from ``config``, which is never modified.

    Raises:
        UpgradeError: If a single upgrade step fails
        RuntimeError: If a version module breaks the upgrade chain
    """
    latest = registry.latest.version
    max_steps = len(registry) - 1
    current = config
    steps = 0

    while current.get_version() != latest:
        if steps == max_steps:
            raise RuntimeError(
                f"upgrade chain from {config.get_version()} did not reach {latest} "
                f"within {max_steps} steps"
            )

        from_version = current.get_version()
        try:
            upgraded = current.upgrade()
        except (ValueError, TypeError, KeyError) as e:
            raise UpgradeError(from_version, str(e)) from e

        if upgraded.get_version() not in registry:
            raise RuntimeError(
                f"{from_version} upgraded to unregistered version {upgraded.get_version()}"
            )

        logger.info("Upgraded config from %s to %s", from_version, upgraded.get_version())
        current = upgraded
        steps += 1
        yield current


def upgrade_to_latest(
    config: VersionedConfig, registry: VersionRegistry = SCHEMA_VERSIONS
) -> VersionedConfig:
    """Upgrade a config, one version at a time, to the latest schema version.

    Returns:
        VersionedConfig: The latest-version config, or ``config`` itself if it is
            already latest

    Raises:
        UpgradeError: If any upgrade step fails; no intermediate result is returned
    """
    result = config
    for result in upgrade_steps(config, registry):
        pass
    return result


def check_version_is_latest(
    version: str, registry: VersionRegistry = SCHEMA_VERSIONS
) -> None:
    """Check that a given api version is the most recent one.

    Raises:
        MalformedVersionError: If ``version`` is not a valid api version
        StaleConfigError: If ``version`` is older than the latest version
        FutureConfigError: If ``version`` is newer than the latest version
    """
    parsed = apiversion.parse(version)
    latest = registry.latest.version
    parsed_latest = apiversion.must_parse(latest)

    if parsed < parsed_latest:
        raise StaleConfigError(version, latest)

    if parsed > parsed_latest:
        raise FutureConfigError(version, latest)
