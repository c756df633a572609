"""
Domain models: platforms, target specs, sandbox state.
"""

from podsync.domain.platform import Platform, PlatformFamily, Version
from podsync.domain.sandbox import Sandbox, SandboxState
from podsync.domain.specs import AggregateSpec, PodSpec, TargetKind, TargetSpec, all_pod_specs

__all__ = [
    "AggregateSpec",
    "Platform",
    "PlatformFamily",
    "PodSpec",
    "Sandbox",
    "SandboxState",
    "TargetKind",
    "TargetSpec",
    "Version",
    "all_pod_specs",
]
