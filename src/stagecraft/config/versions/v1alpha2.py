"""Pipeline configuration schema v1alpha2.

Tag policies became structs so taggers can carry options later, artifacts
renamed ``imageName`` to ``image`` and gained build arguments.
"""

from typing import ClassVar

from pydantic import Field

from stagecraft.config.versioned import SchemaModel, VersionedConfig
from stagecraft.config.versions import v1alpha3

VERSION = "v1alpha2"

_TAGGER = {"yamltags": "oneOf=tag"}
_DEPLOYER = {"yamltags": "oneOf=deployType"}


class ShaTagger(SchemaModel):
    """Tag images with the digest of their content."""


class GitTagger(SchemaModel):
    """Tag images with the current git commit."""


class TagPolicy(SchemaModel):
    sha256: ShaTagger | None = Field(default=None, json_schema_extra=_TAGGER)
    git_commit: GitTagger | None = Field(default=None, json_schema_extra=_TAGGER)


class Artifact(SchemaModel):
    image: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})
    workspace: str | None = None
    dockerfile_path: str | None = None
    build_args: dict[str, str] | None = None


class BuildConfig(SchemaModel):
    tag_policy: TagPolicy | None = None
    artifacts: list[Artifact] | None = None


class KubectlDeploy(SchemaModel):
    manifests: list[str] | None = None


class HelmRelease(SchemaModel):
    name: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})
    chart_path: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})
    values_files: list[str] | None = None


class HelmDeploy(SchemaModel):
    releases: list[HelmRelease] | None = None


class DeployConfig(SchemaModel):
    kubectl: KubectlDeploy | None = Field(default=None, json_schema_extra=_DEPLOYER)
    helm: HelmDeploy | None = Field(default=None, json_schema_extra=_DEPLOYER)


class PipelineConfig(VersionedConfig):
    """A v1alpha2 pipeline document."""

    version: ClassVar[str] = VERSION

    name: str | None = None
    build: BuildConfig | None = None
    deploy: DeployConfig | None = None

    def set_defaults(self) -> None:
        super().set_defaults()
        if self.build is None:
            return
        if self.build.tag_policy is None:
            self.build.tag_policy = TagPolicy(sha256=ShaTagger())
        for artifact in self.build.artifacts or []:
            if artifact.workspace is None:
                artifact.workspace = "."
            if artifact.dockerfile_path is None:
                artifact.dockerfile_path = "Dockerfile"

    def upgrade(self) -> v1alpha3.PipelineConfig:
        """Upgrade to v1alpha3, moving the pipeline name under ``metadata``."""
        metadata = None
        if self.name is not None:
            metadata = v1alpha3.Metadata(name=self.name)

        build = None
        if self.build is not None:
            build = v1alpha3.BuildConfig.model_validate(self.build.model_dump())

        deploy = None
        if self.deploy is not None:
            deploy = v1alpha3.DeployConfig.model_validate(self.deploy.model_dump())

        return v1alpha3.PipelineConfig(
            api_version=v1alpha3.VERSION,
            kind=self.kind,
            metadata=metadata,
            build=build,
            deploy=deploy,
        )
