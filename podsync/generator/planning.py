"""
Reconciliation plan

Deterministic diffs between the sandbox state, the desired specs and the
bindings found in the project.
"""

from podsync.domain.sandbox import SandboxState
from podsync.domain.specs import AggregateSpec, PodSpec


def packages_to_remove(state: SandboxState, new_project: bool) -> list[str]:
    """Deleted and changed packages, sorted. Nothing to remove from a new project."""
    if new_project:
        return []
    return sorted(state.deleted | state.changed)


def packages_to_install(pod_specs: list[PodSpec], state: SandboxState, new_project: bool) -> list[str]:
    """
    Packages to (re)install, sorted.

    - new project: every package of the desired pod specs
    - reopened project: added + changed + packages with an unbound pod spec
    """
    if new_project:
        return sorted({pod.package_name for pod in pod_specs})
    missing = {pod.package_name for pod in pod_specs if not pod.is_bound}
    return sorted(state.added | state.changed | missing)


def targets_to_install(aggregates: list[AggregateSpec], new_project: bool) -> list[AggregateSpec]:
    """Non-empty aggregate specs sorted by name; on reopen only the unbound ones."""
    selected = []
    for aggregate in sorted(aggregates, key=lambda a: a.name):
        if aggregate.is_empty:
            continue
        if new_project or not aggregate.is_bound:
            selected.append(aggregate)
    return selected
