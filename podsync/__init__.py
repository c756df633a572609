"""
podsync - Pods project reconciliation.

Converges a persisted build project with the targets produced by the
dependency resolver:

- domain/: target specs, platforms, sandbox state
- graph/: project graph arena and JSON project store
- generator/: staged reconciliation pipeline
"""

from podsync.domain import AggregateSpec, Platform, PodSpec, Sandbox, SandboxState
from podsync.generator import ReconcileResult, Reconciler
from podsync.graph import ProjectGraph, ProjectStore

__version__ = "0.1.0"

__all__ = [
    "AggregateSpec",
    "Platform",
    "PodSpec",
    "ProjectGraph",
    "ProjectStore",
    "ReconcileResult",
    "Reconciler",
    "Sandbox",
    "SandboxState",
]
