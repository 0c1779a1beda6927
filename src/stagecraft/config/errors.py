"""Exceptions raised while resolving, validating and upgrading pipeline configs.

Every failure aborts the current operation. Collaborator errors are chained
with ``raise ... from err`` so the original cause stays available on
``__cause__``.
"""


class ConfigError(Exception):
    """Base class for all configuration errors."""


class DocumentReadError(ConfigError):
    """The configuration document could not be read from its source."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"read stagecraft config '{source}': {reason}")


class MalformedDocumentError(ConfigError):
    """The document does not declare a usable apiVersion."""


class UnknownVersionError(ConfigError):
    """The declared apiVersion has no registered schema."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"unknown api version: '{version}'")


class SchemaParseError(ConfigError):
    """The document content is invalid for its declared schema version."""

    def __init__(self, version: str, reason: str):
        self.version = version
        super().__init__(f"unable to parse config ({version}): {reason}")


class ConfigValidationError(ConfigError):
    """One or more structural tag constraints were violated."""

    def __init__(self, version: str, violations: list[str]):
        self.version = version
        self.violations = list(violations)
        details = "; ".join(self.violations)
        super().__init__(f"invalid config ({version}): {details}")


class UpgradeError(ConfigError):
    """A single upgrade step failed."""

    def __init__(self, from_version: str, reason: str):
        self.from_version = from_version
        super().__init__(f"transforming stagecraft config from {from_version}: {reason}")


class MalformedVersionError(ConfigError):
    """An apiVersion string is not a valid version identifier."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"parsing api version: invalid version '{version}'")


class StaleConfigError(ConfigError):
    """The document predates the latest schema version."""

    def __init__(self, version: str, latest: str):
        self.version = version
        self.latest = latest
        super().__init__("config version out of date: run `stagecraft fix`")


class FutureConfigError(ConfigError):
    """The document is newer than anything this build understands."""

    def __init__(self, version: str, latest: str):
        self.version = version
        self.latest = latest
        super().__init__(
            "config version is too new for this version of stagecraft: upgrade stagecraft"
        )
