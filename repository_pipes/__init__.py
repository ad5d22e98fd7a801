"""
Repositories with action pipelines for Django models.

Usage:
    from repository_pipes import Repository
    from repository_pipes.pipes import EncryptPasswordPipe

    class UserRepository(Repository):
        model = User
        uses_transaction = True
        pipes = {"save": [EncryptPasswordPipe]}

    user = UserRepository().save({"username": "ada", "password": "secret"})
"""

from .defaults import LIBRARY_VERSION as __version__
from .exceptions import (
    ImproperlyConfiguredRepository,
    PipeResolutionError,
    RepositoryError,
)
from .repository import Repository

__all__ = [
    "__version__",
    "Repository",
    "RepositoryError",
    "ImproperlyConfiguredRepository",
    "PipeResolutionError",
]
