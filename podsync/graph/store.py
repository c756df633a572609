"""
Project Store

Reads and writes the persisted project graph as JSON.

Writes are atomic (temp file + replace), so a failed save never leaves a
half-written project behind.
"""

import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from podsync.common.exceptions import ProjectIOError
from podsync.common.observability import get_logger
from podsync.graph.models import ProjectGraph

logger = get_logger(__name__)


class ProjectStore:
    """
    JSON project file store.

    Usage:
        store = ProjectStore(sandbox.project_path)
        graph = store.open() if store.exists() else store.new()
        ...
        store.save(graph)
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def new(self) -> ProjectGraph:
        return ProjectGraph.new(str(self.path))

    def open(self) -> ProjectGraph:
        """
        Load the project graph.

        Raises:
            ProjectIOError: file unreadable or not a valid project
        """
        try:
            payload = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ProjectIOError(f"Failed to read project {self.path}", details={"error": str(e)}) from e

        try:
            graph = ProjectGraph.model_validate_json(payload)
        except ValidationError as e:
            raise ProjectIOError(
                f"Invalid project file {self.path}", details={"errors": e.error_count()}
            ) from e

        logger.debug("project_opened", path=str(self.path), targets=len(graph.targets))
        return graph

    def save(self, graph: ProjectGraph) -> None:
        """
        Serialize and write the project graph.

        Raises:
            ProjectIOError: write failed (the previous file is left untouched)
        """
        graph.prepare_for_serialization()
        payload = graph.model_dump_json(indent=2)

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ProjectIOError(f"Failed to write project {self.path}", details={"error": str(e)}) from e

        logger.info("project_written", path=str(self.path), targets=len(graph.targets))
