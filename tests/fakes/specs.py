"""
Spec factories
"""

from podsync.domain.platform import Platform
from podsync.domain.specs import AggregateSpec, PodSpec


def make_pod(package_name: str, *dependencies: str, family: str = "ios", version: str = "8.0", label=None) -> PodSpec:
    return PodSpec(
        name=package_name,
        label=label or f"Pods-{package_name}",
        platform=Platform.of(family, version),
        dependencies=list(dependencies),
        package_name=package_name,
    )


def make_aggregate(
    name: str,
    pods: list[PodSpec] | None = None,
    family: str = "ios",
    version: str = "8.0",
    is_empty: bool = False,
) -> AggregateSpec:
    pods = pods or []
    return AggregateSpec(
        name=name,
        label=f"Pods-{name}",
        platform=Platform.of(family, version),
        dependencies=[pod.package_name for pod in pods],
        pod_targets=pods,
        is_empty=is_empty,
    )
