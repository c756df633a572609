"""
Project graph: arena models and the JSON project store.
"""

from podsync.graph.models import (
    BUILTIN_CONFIGURATIONS,
    BuildConfiguration,
    BuildTarget,
    ConfigurationType,
    PackageGroup,
    ProductReference,
    ProjectGraph,
    SupportFilesGroup,
)
from podsync.graph.store import ProjectStore

__all__ = [
    "BUILTIN_CONFIGURATIONS",
    "BuildConfiguration",
    "BuildTarget",
    "ConfigurationType",
    "PackageGroup",
    "ProductReference",
    "ProjectGraph",
    "ProjectStore",
    "SupportFilesGroup",
]
