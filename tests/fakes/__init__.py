"""
Test Fakes Module

Recording collaborators and spec factories for reconciler tests.
"""

from tests.fakes.fake_collaborators import RecordingFileInstaller, RecordingSupportGenerator
from tests.fakes.specs import make_aggregate, make_pod

__all__ = [
    "RecordingFileInstaller",
    "RecordingSupportGenerator",
    "make_aggregate",
    "make_pod",
]
