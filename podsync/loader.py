"""
Installation Document

JSON input contract: the resolved target graph plus the sandbox state.

Example:
    {
        "manifest_path": "Podfile",
        "user_build_configurations": {"Debug": "debug", "Release": "release"},
        "sandbox": {"root": "Pods", "changed": ["AFNetworking"], "local_pods": {"Core": "../Core"}},
        "aggregates": [
            {
                "name": "App",
                "label": "Pods-App",
                "platform": {"family": "ios", "deployment_target": "8.0"},
                "pods": [
                    {"label": "Pods-App-AFNetworking", "package_name": "AFNetworking", "dependencies": []}
                ]
            }
        ]
    }
"""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from podsync.common.exceptions import InvalidConfigurationError
from podsync.domain.platform import Platform, PlatformFamily, Version
from podsync.domain.sandbox import Sandbox, SandboxState
from podsync.domain.specs import AggregateSpec, PodSpec
from podsync.graph.models import ConfigurationType


class PlatformModel(BaseModel):
    family: PlatformFamily
    deployment_target: str | None = None

    @field_validator("deployment_target")
    @classmethod
    def validate_deployment_target(cls, v: str | None) -> str | None:
        if v is not None:
            Version.parse(v)
        return v

    def to_platform(self) -> Platform:
        return Platform.of(self.family, self.deployment_target)


class PodModel(BaseModel):
    label: str = Field(..., min_length=1)
    package_name: str = Field(..., min_length=1)
    platform: PlatformModel | None = Field(None, description="Defaults to the aggregate platform")
    dependencies: list[str] = Field(default_factory=list)


class AggregateModel(BaseModel):
    name: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    platform: PlatformModel
    is_empty: bool = False
    pods: list[PodModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_empty_has_no_pods(self) -> "AggregateModel":
        if self.is_empty and self.pods:
            raise ValueError(f"Aggregate {self.name!r} is marked empty but lists pods")
        return self


class SandboxModel(BaseModel):
    root: str
    added: list[str] = Field(default_factory=list)
    changed: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)
    local_pods: dict[str, str] = Field(default_factory=dict)


class InstallationDocument(BaseModel):
    manifest_path: str | None = None
    user_build_configurations: dict[str, ConfigurationType] = Field(default_factory=dict)
    sandbox: SandboxModel
    aggregates: list[AggregateModel] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Path | str) -> "InstallationDocument":
        """
        Raises:
            InvalidConfigurationError: unreadable or invalid document
        """
        path = Path(path)
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise InvalidConfigurationError(f"Cannot read installation document {path}") from e
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Invalid installation document {path}", details={"errors": e.error_count()}
            ) from e

    def build_sandbox(self, base_dir: Path | None = None, project_file_name: str | None = None) -> Sandbox:
        """Sandbox with `root` resolved against `base_dir` (the document directory)."""
        root = Path(self.sandbox.root)
        if base_dir is not None and not root.is_absolute():
            root = base_dir / root
        sandbox = Sandbox(
            root=root,
            state=SandboxState.of(self.sandbox.added, self.sandbox.changed, self.sandbox.deleted),
            local_pods={name: Path(p) for name, p in self.sandbox.local_pods.items()},
        )
        if project_file_name:
            sandbox.project_file_name = project_file_name
        return sandbox

    def build_specs(self) -> list[AggregateSpec]:
        """
        Aggregate specs with their pod specs. Pods sharing a label across
        aggregates become a single PodSpec, so they share one binding.
        """
        pods_by_label: dict[str, PodSpec] = {}
        aggregates = []
        for aggregate_model in self.aggregates:
            platform = aggregate_model.platform.to_platform()
            pods = []
            for pod_model in aggregate_model.pods:
                pod = pods_by_label.get(pod_model.label)
                if pod is None:
                    pod = PodSpec(
                        name=pod_model.package_name,
                        label=pod_model.label,
                        platform=pod_model.platform.to_platform() if pod_model.platform else platform,
                        dependencies=list(pod_model.dependencies),
                        package_name=pod_model.package_name,
                    )
                    pods_by_label[pod_model.label] = pod
                pods.append(pod)
            aggregates.append(
                AggregateSpec(
                    name=aggregate_model.name,
                    label=aggregate_model.label,
                    platform=platform,
                    dependencies=[pod.package_name for pod in pods],
                    pod_targets=pods,
                    is_empty=aggregate_model.is_empty,
                )
            )
        return aggregates
