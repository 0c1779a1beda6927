"""Registry of known configuration schema versions."""

from collections.abc import Callable, Iterable, Iterator
from typing import NamedTuple

from stagecraft.config import apiversion
from stagecraft.config.versioned import VersionedConfig

ConfigFactory = Callable[[], VersionedConfig]


class VersionEntry(NamedTuple):
    """A schema version and the factory producing an empty config for it."""

    version: str
    factory: ConfigFactory


class VersionRegistry:
    """Read-only table of schema versions, oldest first.

    The table is fixed at construction and exposes no way to modify it, so a
    registry can be shared freely once built.
    """

    def __init__(self, entries: Iterable[VersionEntry]):
        """Initialize the registry.

        Args:
            entries: Version entries in release order, oldest to newest

        Raises:
            ValueError: If the table is empty, a version is registered twice, or a
                registered version is not a well-formed api version
        """
        self._entries: tuple[VersionEntry, ...] = tuple(entries)
        if not self._entries:
            raise ValueError("No configuration versions registered")

        self._by_version: dict[str, VersionEntry] = {}
        for entry in self._entries:
            if entry.version in self._by_version:
                raise ValueError(f"Duplicate config version: {entry.version}")
            self._by_version[entry.version] = entry

        self._latest = max(self._entries, key=lambda e: apiversion.must_parse(e.version))

    def find(self, version: str) -> ConfigFactory | None:
        """Get the factory for a version, or None if it is not registered."""
        entry = self._by_version.get(version)
        return entry.factory if entry else None

    @property
    def latest(self) -> VersionEntry:
        """The newest registered version, which every upgrade chain ends at."""
        return self._latest

    @property
    def versions(self) -> list[str]:
        """Registered versions in registration order."""
        return [entry.version for entry in self._entries]

    def __contains__(self, version: object) -> bool:
        return version in self._by_version

    def __iter__(self) -> Iterator[VersionEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
