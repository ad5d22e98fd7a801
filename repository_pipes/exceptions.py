"""
Custom exceptions for repositories and their pipelines.

Unknown actions and unknown pipe groups are not errors: they resolve to an
empty list of pipes. The exceptions below cover genuine misconfiguration.
Errors raised by pipes or by the ORM are never wrapped.
"""

from typing import Any, Optional


class RepositoryError(Exception):
    """Base exception for repository errors."""

    def __init__(self, message: str, repository: Optional[str] = None):
        self.repository = repository
        super().__init__(message)


class ImproperlyConfiguredRepository(RepositoryError):
    """Raised when a repository class or the library settings are invalid."""

    def __init__(
        self,
        message: str,
        repository: Optional[str] = None,
        setting: Optional[str] = None,
    ):
        self.setting = setting
        super().__init__(message, repository)


class PipeResolutionError(RepositoryError):
    """Raised when a pipe identifier cannot be turned into a handler."""

    def __init__(self, message: str, pipe: Optional[Any] = None):
        self.pipe = pipe
        super().__init__(message)
