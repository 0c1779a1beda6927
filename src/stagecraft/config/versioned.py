"""Base classes shared by every schema version."""

from typing import Any, ClassVar, Literal

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SchemaModel(BaseModel):
    """Base for all schema models: camelCase YAML keys, unknown keys rejected.

    Field names are accepted only when models are built in code; ``parse``
    reads documents by YAML key alone.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class VersionedConfig(SchemaModel):
    """A pipeline configuration document of one specific schema version.

    Instances start empty (every field ``None``) and are populated by ``parse``.
    ``upgrade`` never mutates ``self``; it builds a fresh instance of the next
    schema version.
    """

    version: ClassVar[str]

    api_version: str | None = None
    kind: Literal["Config"] | None = None

    def get_version(self) -> str:
        """Return the schema version this class implements."""
        return self.version

    def parse(self, data: bytes, apply_defaults: bool) -> None:
        """Populate this config from a raw YAML document.

        Args:
            data: Raw YAML document
            apply_defaults: Fill unset optional fields with this version's defaults

        Raises:
            yaml.YAMLError: If the document is not valid YAML
            pydantic.ValidationError: If the content does not match the schema
            TypeError: If the document is not a mapping
        """
        document = yaml.safe_load(data)
        if not isinstance(document, dict):
            raise TypeError(f"expected a mapping, got {type(document).__name__}")

        parsed = self.model_validate(document, by_alias=True, by_name=False)
        for name in type(self).model_fields:
            setattr(self, name, getattr(parsed, name))

        if apply_defaults:
            self.set_defaults()

    def set_defaults(self) -> None:
        """Fill unset optional fields with documented defaults."""
        if self.kind is None:
            self.kind = "Config"

    def upgrade(self) -> "VersionedConfig":
        """Convert this config into the next schema version."""
        raise NotImplementedError(f"{self.version} has no upgrade target")

    def to_dict(self) -> dict[str, Any]:
        """Return the document as plain data with YAML key names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def dump_config(config: VersionedConfig) -> str:
    """Serialize a config to YAML, preserving schema field order."""
    return yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False)
