"""
Pipeline Stages

Stage enum, run result and the stage decorator.

Usage:
    @stage_execution(ReconcileStage.SYNC_LINKS)
    def sync_links(self, ctx, result):
        # Only write the core logic
        ...
"""

import functools
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from podsync.common.observability import get_logger

logger = get_logger(__name__)


class ReconcileStage(str, Enum):
    """Reconciliation stages, in execution order."""

    PREPARE = "prepare"
    SYNC_PACKAGES = "sync_packages"
    SYNC_AGGREGATES = "sync_aggregates"
    WIRE_DEPENDENCIES = "wire_dependencies"
    SYNC_LINKS = "sync_links"
    PERSIST = "persist"


@dataclass
class ReconcileResult:
    """Result of one reconciliation run."""

    new_project: bool = False
    packages_removed: list[str] = field(default_factory=list)
    packages_installed: list[str] = field(default_factory=list)
    targets_installed: list[str] = field(default_factory=list)
    targets_created: int = 0
    targets_removed: int = 0
    edges_added: int = 0
    links_added: int = 0
    persisted: bool = False
    stage_durations: dict[str, float] = field(default_factory=dict)

    @property
    def is_noop(self) -> bool:
        """True when the run changed no target, edge or link."""
        return not (self.targets_created or self.targets_removed or self.edges_added or self.links_added)

    def summary(self) -> dict:
        return {
            "new_project": self.new_project,
            "packages_removed": self.packages_removed,
            "packages_installed": self.packages_installed,
            "targets_installed": self.targets_installed,
            "targets_created": self.targets_created,
            "targets_removed": self.targets_removed,
            "edges_added": self.edges_added,
            "links_added": self.links_added,
            "persisted": self.persisted,
        }


def stage_execution(stage: ReconcileStage):
    """
    Decorator for pipeline stage execution.

    Automatically handles:
    - Start/end logging
    - Timing measurement
    - Error logging (the error is re-raised; stages never continue past a failure)

    The decorated method takes (self, ctx, result) and records its duration in
    result.stage_durations.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, ctx, result, *args, **kwargs):
            logger.info("stage_started", stage=stage.value)
            stage_start = datetime.now()

            try:
                return_value = func(self, ctx, result, *args, **kwargs)
                logger.info("stage_completed", stage=stage.value)
                return return_value

            except Exception as e:
                logger.error("stage_failed", stage=stage.value, error=str(e), exc_info=True)
                raise

            finally:
                result.stage_durations[stage.value] = (datetime.now() - stage_start).total_seconds()

        wrapper.stage = stage
        return wrapper

    return decorator
