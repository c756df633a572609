"""
Common utilities.

Cross-cutting concerns (logging, exceptions) that all layers may import.
"""

from podsync.common.observability import add_context, clear_context, get_logger, setup_logging

__all__ = [
    "add_context",
    "clear_context",
    "get_logger",
    "setup_logging",
]
