"""Pipeline configuration schema v1alpha1.

The first published schema. Tag policies are plain strings and the pipeline
name lives at the top level of the document.
"""

from typing import ClassVar, Literal

from pydantic import Field

from stagecraft.config.versioned import SchemaModel, VersionedConfig
from stagecraft.config.versions import v1alpha2

VERSION = "v1alpha1"


class Artifact(SchemaModel):
    """An image to build."""

    image_name: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})
    workspace: str | None = None
    dockerfile_path: str | None = None


class BuildConfig(SchemaModel):
    """How images are built."""

    tag_policy: Literal["sha256", "gitCommit"] | None = None
    artifacts: list[Artifact] | None = None


class KubectlDeploy(SchemaModel):
    """Deploy with plain Kubernetes manifests."""

    manifests: list[str] | None = None


class HelmRelease(SchemaModel):
    """A single Helm release."""

    name: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})
    chart_path: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})
    values_files: list[str] | None = None


class HelmDeploy(SchemaModel):
    """Deploy with Helm."""

    releases: list[HelmRelease] | None = None


class DeployConfig(SchemaModel):
    """How built images are deployed. Exactly one deployer may be configured."""

    kubectl: KubectlDeploy | None = Field(
        default=None, json_schema_extra={"yamltags": "oneOf=deployType"}
    )
    helm: HelmDeploy | None = Field(
        default=None, json_schema_extra={"yamltags": "oneOf=deployType"}
    )


class PipelineConfig(VersionedConfig):
    """A v1alpha1 pipeline document."""

    version: ClassVar[str] = VERSION

    name: str | None = None
    build: BuildConfig | None = None
    deploy: DeployConfig | None = None

    def set_defaults(self) -> None:
        super().set_defaults()
        if self.build is None:
            return
        if self.build.tag_policy is None:
            self.build.tag_policy = "sha256"
        for artifact in self.build.artifacts or []:
            if artifact.workspace is None:
                artifact.workspace = "."
            if artifact.dockerfile_path is None:
                artifact.dockerfile_path = "Dockerfile"

    def upgrade(self) -> v1alpha2.PipelineConfig:
        """Upgrade to v1alpha2.

        String tag policies become tagger structs and ``imageName`` is renamed
        to ``image``.
        """
        build = None
        if self.build is not None:
            build = v1alpha2.BuildConfig(
                tag_policy=_upgrade_tag_policy(self.build.tag_policy),
                artifacts=_upgrade_artifacts(self.build.artifacts),
            )

        deploy = None
        if self.deploy is not None:
            deploy = v1alpha2.DeployConfig.model_validate(self.deploy.model_dump())

        return v1alpha2.PipelineConfig(
            api_version=v1alpha2.VERSION,
            kind=self.kind,
            name=self.name,
            build=build,
            deploy=deploy,
        )


def _upgrade_tag_policy(policy: str | None) -> v1alpha2.TagPolicy | None:
    if policy == "sha256":
        return v1alpha2.TagPolicy(sha256=v1alpha2.ShaTagger())
    if policy == "gitCommit":
        return v1alpha2.TagPolicy(git_commit=v1alpha2.GitTagger())
    return None


def _upgrade_artifacts(artifacts: list[Artifact] | None) -> list[v1alpha2.Artifact] | None:
    if artifacts is None:
        return None
    return [
        v1alpha2.Artifact(
            image=artifact.image_name,
            workspace=artifact.workspace,
            dockerfile_path=artifact.dockerfile_path,
        )
        for artifact in artifacts
    ]
