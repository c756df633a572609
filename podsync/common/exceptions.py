"""
Podsync Exception Hierarchy

표준화된 예외 계층으로 일관된 에러 처리를 제공합니다.

사용 가이드:
    1. 예상된 부재 (unmatched spec, missing group) → 로그 후 계속
    2. 일관성 위반 → 즉시 raise (실행 중단)
    3. 외부 에러 → 커스텀 예외로 래핑

예시:
    try:
        path.write_text(payload)
    except OSError as e:
        raise ProjectIOError("Failed to write project") from e
"""

from typing import Any


class PodsyncError(Exception):
    """Base exception for all podsync errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize podsync error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Consistency Errors
# ============================================================


class ConsistencyError(PodsyncError):
    """The desired target graph and the project graph disagree. Fatal for the run."""

    pass


class UnboundTargetError(ConsistencyError):
    """A spec that must own a build target has none."""

    pass


class UnresolvedDependencyError(ConsistencyError):
    """A pod dependency has no sibling pod target in the same aggregate."""

    pass


class BindingError(PodsyncError):
    """A spec was bound to a second build target."""

    pass


# ============================================================
# Graph Errors
# ============================================================


class GraphError(PodsyncError):
    """Project graph integrity failures."""

    pass


class DuplicateTargetError(GraphError):
    """A build target with the same label already exists."""

    pass


class UnknownTargetError(GraphError):
    """A target id is not present in the graph."""

    pass


# ============================================================
# Infrastructure Errors
# ============================================================


class ProjectIOError(PodsyncError):
    """Reading or writing the project file failed."""

    pass


class MissingSourceError(PodsyncError):
    """A package source directory does not exist."""

    pass


class InvalidConfigurationError(PodsyncError):
    """Invalid configuration or installation document."""

    pass
