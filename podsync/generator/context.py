"""
Reconcile Context

Explicit state threaded through every stage of a run.
"""

from dataclasses import dataclass, field

from podsync.common.exceptions import ConsistencyError
from podsync.config.groups import ProjectConfig
from podsync.domain.sandbox import Sandbox
from podsync.domain.specs import AggregateSpec, PodSpec, TargetSpec, all_pod_specs
from podsync.graph.models import ConfigurationType, ProjectGraph


@dataclass
class ReconcileContext:
    """
    Attributes:
        sandbox: Sandbox of the installation
        aggregates: Desired aggregate specs (pod specs hang off them)
        user_build_configurations: User configuration name -> type
        config: Project generation settings
        manifest_path: Path of the manifest that produced the specs
        graph: Project graph, set by the prepare stage
        new_project: True when the graph was created from scratch
    """

    sandbox: Sandbox
    aggregates: list[AggregateSpec]
    user_build_configurations: dict[str, ConfigurationType] = field(default_factory=dict)
    config: ProjectConfig = field(default_factory=ProjectConfig)
    manifest_path: str | None = None
    graph: ProjectGraph | None = None
    new_project: bool = False

    @property
    def pod_specs(self) -> list[PodSpec]:
        return all_pod_specs(self.aggregates)

    @property
    def all_specs(self) -> list[TargetSpec]:
        return [*self.aggregates, *self.pod_specs]

    def pods_for_package(self, name: str) -> list[PodSpec]:
        return [pod for pod in self.pod_specs if pod.package_name == name]

    def require_graph(self) -> ProjectGraph:
        if self.graph is None:
            raise ConsistencyError("Project graph is not prepared")
        return self.graph
