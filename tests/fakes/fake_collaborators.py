"""
Fake collaborators for unit testing.

Record every call instead of touching the file system.
"""

from podsync.common.exceptions import MissingSourceError


class RecordingFileInstaller:
    """
    FileReferenceInstallerPort Fake 구현.

    Usage:
        installer = RecordingFileInstaller(files={"A": ["A.m", "A.h"]})
    """

    def __init__(self, files: dict[str, list[str]] | None = None, missing: set[str] | None = None):
        self.files = files or {}
        self.missing = missing or set()
        self.calls: list[tuple[str, ...]] = []

    def install_file_references(self, sandbox, pod_specs) -> None:
        self.calls.append(tuple(pod.label for pod in pod_specs))
        for name in {pod.package_name for pod in pod_specs}:
            if name in self.missing:
                raise MissingSourceError(f"Source directory of {name} not found")
            group = sandbox.project.package_group(name)
            group.files = sorted(self.files.get(name, [f"{name}.m", f"{name}.h"]))


class RecordingSupportGenerator:
    """SupportFileGeneratorPort Fake 구현."""

    def __init__(self):
        self.generated: list[str] = []

    def generate_support_files(self, target, graph) -> None:
        self.generated.append(target.label)
