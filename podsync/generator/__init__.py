"""
Pods project generator.

- reconciler: the staged reconciliation run
- target_builder: build target construction
- planning: package and target diffs
"""

from podsync.generator.context import ReconcileContext
from podsync.generator.pipeline import ReconcileResult, ReconcileStage, stage_execution
from podsync.generator.reconciler import Reconciler

__all__ = [
    "ReconcileContext",
    "ReconcileResult",
    "ReconcileStage",
    "Reconciler",
    "stage_execution",
]
