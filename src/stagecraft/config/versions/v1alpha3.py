"""Pipeline configuration schema v1alpha3 (latest).

Moves the pipeline name into a ``metadata`` block and introduces pluggable
builders: images are built either locally or on Google Cloud Build.
"""

from typing import ClassVar

from pydantic import Field

from stagecraft.config.versioned import SchemaModel, VersionedConfig

VERSION = "v1alpha3"

_TAGGER = {"yamltags": "oneOf=tag"}
_DEPLOYER = {"yamltags": "oneOf=deployType"}


class Metadata(SchemaModel):
    name: str | None = None


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


class LocalBuild(SchemaModel):
    """Build with the local Docker daemon."""

    push: bool | None = None


class GoogleCloudBuild(SchemaModel):
    """Build remotely on Google Cloud Build."""

    project_id: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})


class BuildConfig(SchemaModel):
    tag_policy: TagPolicy | None = None
    artifacts: list[Artifact] | None = None
    local: LocalBuild | None = Field(
        default=None, json_schema_extra={"yamltags": "excludes=google_cloud_build"}
    )
    google_cloud_build: GoogleCloudBuild | None = None


class KubectlDeploy(SchemaModel):
    manifests: list[str] | None = None


class HelmRelease(SchemaModel):
    name: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})
    chart_path: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})
    values_files: list[str] | None = None
    namespace: str | None = None


class HelmDeploy(SchemaModel):
    releases: list[HelmRelease] | None = None


class DeployConfig(SchemaModel):
    kubectl: KubectlDeploy | None = Field(default=None, json_schema_extra=_DEPLOYER)
    helm: HelmDeploy | None = Field(default=None, json_schema_extra=_DEPLOYER)


class PipelineConfig(VersionedConfig):
    """A v1alpha3 pipeline document."""

    version: ClassVar[str] = VERSION

    metadata: Metadata | None = None
    build: BuildConfig | None = None
    deploy: DeployConfig | None = None

    def set_defaults(self) -> None:
        super().set_defaults()
        if self.build is None:
            return
        if self.build.tag_policy is None:
            self.build.tag_policy = TagPolicy(sha256=ShaTagger())
        if self.build.local is None and self.build.google_cloud_build is None:
            self.build.local = LocalBuild()
        if self.build.local is not None and self.build.local.push is None:
            self.build.local.push = True
        for artifact in self.build.artifacts or []:
            if artifact.workspace is None:
                artifact.workspace = "."
            if artifact.dockerfile_path is None:
                artifact.dockerfile_path = "Dockerfile"
