"""
Validation of the library settings.
"""

import logging
from typing import Any, List, Optional

from .exceptions import ImproperlyConfiguredRepository, PipeResolutionError
from .pipeline import resolve_pipe
from .settings import RepositorySettings, get_repository_settings

logger = logging.getLogger(__name__)


def validate_settings(settings: Optional[RepositorySettings] = None) -> None:
    """
    Check that the transaction pipe and every global pipe can be resolved.

    Raises:
        ImproperlyConfiguredRepository: On the first invalid setting
    """
    settings = settings or get_repository_settings()

    if not isinstance(settings.global_pipes, (list, tuple)):
        raise ImproperlyConfiguredRepository(
            "global_pipes must be a list of pipes", setting="global_pipes"
        )

    checks: List[tuple[str, Any]] = [
        ("global_pipes", pipe) for pipe in settings.global_pipes
    ]
    if settings.transaction_pipe is not None:
        checks.insert(0, ("transaction_pipe", settings.transaction_pipe))

    for setting, pipe in checks:
        try:
            resolve_pipe(pipe)
        except PipeResolutionError as exc:
            raise ImproperlyConfiguredRepository(
                f"Invalid {setting} entry {pipe!r}: {exc}", setting=setting
            ) from exc


def validate_configuration(settings: Optional[RepositorySettings] = None) -> bool:
    """Validate settings, logging instead of raising."""
    try:
        validate_settings(settings)
        return True
    except ImproperlyConfiguredRepository as exc:
        logger.error("Configuration validation failed: %s", exc)
        return False
