"""
Public test utilities for django-repository-pipes.
"""

from .harness import RecordingPipe, override_repository_settings

__all__ = [
    "RecordingPipe",
    "override_repository_settings",
]
