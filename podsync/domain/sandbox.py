"""
Sandbox

Installation record of the previous run plus on-disk package locations.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from podsync.graph.models import ProjectGraph


@dataclass(frozen=True)
class SandboxState:
    """Package names changed since the previous installation. Fixed for the duration of a run."""

    added: frozenset[str] = frozenset()
    changed: frozenset[str] = frozenset()
    deleted: frozenset[str] = frozenset()

    @classmethod
    def of(cls, added=(), changed=(), deleted=()) -> "SandboxState":
        return cls(added=frozenset(added), changed=frozenset(changed), deleted=frozenset(deleted))


@dataclass
class Sandbox:
    """
    Sandbox directory of an installation.

    Attributes:
        root: Sandbox root; downloaded packages live in `root/<name>`
        state: Added/changed/deleted package names
        local_pods: Locally sourced packages, name -> source directory
        project_file_name: File name of the persisted project inside `root`
        project: Project graph of the current run, set during preparation
    """

    root: Path
    state: SandboxState = field(default_factory=SandboxState)
    local_pods: dict[str, Path] = field(default_factory=dict)
    project_file_name: str = "Pods.project.json"
    project: "ProjectGraph | None" = None

    @property
    def project_path(self) -> Path:
        return self.root / self.project_file_name

    def is_local(self, name: str) -> bool:
        return name in self.local_pods

    def source_path(self, name: str) -> Path:
        """Source directory of a package: the local path, or the downloaded copy."""
        if name in self.local_pods:
            path = Path(self.local_pods[name])
            return path if path.is_absolute() else self.root / path
        return self.root / name
