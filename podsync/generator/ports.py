"""
Collaborator Protocols

Contracts of the collaborators the reconciler delegates to. Both are
expected to be idempotent.

Implementations:
- podsync.generator.collaborators.FileReferencesInstaller
- podsync.generator.collaborators.SupportFilesGenerator
"""

from typing import Protocol

from podsync.domain.sandbox import Sandbox
from podsync.domain.specs import PodSpec, TargetSpec
from podsync.graph.models import ProjectGraph


class FileReferenceInstallerPort(Protocol):
    def install_file_references(self, sandbox: Sandbox, pod_specs: list[PodSpec]) -> None:
        """Install file references for the pod specs of one package"""
        ...


class SupportFileGeneratorPort(Protocol):
    def generate_support_files(self, target: TargetSpec, graph: ProjectGraph) -> None:
        """Generate the support files of one target"""
        ...
