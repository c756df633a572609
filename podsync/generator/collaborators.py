"""
Default collaborators

FileReferencesInstaller: registers package source files in the package group
SupportFilesGenerator: registers per-target support files
"""

from podsync.common.exceptions import ConsistencyError, MissingSourceError
from podsync.common.observability import get_logger
from podsync.domain.sandbox import Sandbox
from podsync.domain.specs import PodSpec, TargetKind, TargetSpec
from podsync.graph.models import ProjectGraph

logger = get_logger(__name__)


class FileReferencesInstaller:
    """Walks each package source directory into its package group."""

    def install_file_references(self, sandbox: Sandbox, pod_specs: list[PodSpec]) -> None:
        """
        Raises:
            MissingSourceError: a package source directory does not exist
            ConsistencyError: the sandbox has no project, or the package has no group
        """
        if sandbox.project is None:
            raise ConsistencyError("Sandbox has no project to install file references into")

        for name in sorted({pod.package_name for pod in pod_specs}):
            source = sandbox.source_path(name)
            if not source.is_dir():
                raise MissingSourceError(f"Source directory of {name} not found", details={"path": str(source)})

            group = sandbox.project.package_group(name)
            if group is None:
                raise ConsistencyError(f"No group for package {name}")

            group.files = sorted(
                path.relative_to(source).as_posix()
                for path in source.rglob("*")
                if path.is_file() and not any(part.startswith(".") for part in path.relative_to(source).parts)
            )
            logger.debug("file_references_installed", package=name, files=len(group.files))


class SupportFilesGenerator:
    """Registers the xcconfig, dummy source and kind-specific support files of a target."""

    def generate_support_files(self, target: TargetSpec, graph: ProjectGraph) -> None:
        group = graph.support_files_group(target.label)
        files = [f"{target.label}.xcconfig", f"{target.label}-dummy.m"]
        if target.kind == TargetKind.POD:
            files.append(f"{target.label}-prefix.pch")
        else:
            files.append(f"{target.label}-acknowledgements.plist")
        group.files = sorted(files)
        logger.debug("support_files_generated", target=target.label, files=len(files))
