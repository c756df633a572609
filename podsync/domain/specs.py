"""
Target Specs

Desired build units produced by the dependency resolver.

- AggregateSpec: one per user target, links the pod targets it depends on
- PodSpec: the build unit of one package (per platform variant)

Specs are immutable except for the set-once binding to a build target id
in the project graph.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from podsync.common.exceptions import BindingError
from podsync.domain.platform import Platform


class TargetKind(str, Enum):
    """Target spec variant"""

    AGGREGATE = "aggregate"
    POD = "pod"


@dataclass(eq=False, kw_only=True)
class TargetSpec:
    """
    Shared capability set of both spec kinds.

    Attributes:
        name: Spec name (aggregate definition name, or package name)
        label: Unique build identifier, matched against target labels on reopen
        platform: Target platform
        dependencies: Ordered dependency names
        target_id: Bound build target id (None while unbound)
    """

    kind: ClassVar[TargetKind]

    name: str
    label: str
    platform: Platform
    dependencies: list[str] = field(default_factory=list)
    target_id: str | None = field(default=None, init=False)

    @property
    def is_bound(self) -> bool:
        return self.target_id is not None

    def bind(self, target_id: str) -> None:
        """
        Bind this spec to a build target.

        Raises:
            BindingError: the spec is already bound
        """
        if self.target_id is not None:
            raise BindingError(
                f"{self.label} is already bound",
                details={"bound": self.target_id, "requested": target_id},
            )
        self.target_id = target_id

    def unbind(self) -> None:
        """Release the binding after the bound target was removed from the graph."""
        self.target_id = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.label} target={self.target_id}>"


@dataclass(eq=False, kw_only=True)
class PodSpec(TargetSpec):
    """Build unit compiled for one package. `dependencies` are package names."""

    kind: ClassVar[TargetKind] = TargetKind.POD

    package_name: str


@dataclass(eq=False, kw_only=True)
class AggregateSpec(TargetSpec):
    """Composite build unit linking the pod targets of one user target."""

    kind: ClassVar[TargetKind] = TargetKind.AGGREGATE

    pod_targets: list[PodSpec] = field(default_factory=list)
    is_empty: bool = False

    def pod_for_package(self, package_name: str) -> PodSpec | None:
        """Sibling pod spec by package name, first match in declaration order."""
        return next((pod for pod in self.pod_targets if pod.package_name == package_name), None)


def all_pod_specs(aggregates: list[AggregateSpec]) -> list[PodSpec]:
    """Pod specs across all aggregates, each spec once, in declaration order."""
    seen: set[int] = set()
    pods: list[PodSpec] = []
    for aggregate in aggregates:
        for pod in aggregate.pod_targets:
            if id(pod) not in seen:
                seen.add(id(pod))
                pods.append(pod)
    return pods
