"""
RepositorySettings implementation.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from django.conf import settings as django_settings

from .defaults import LIBRARY_DEFAULTS, SETTINGS_NAME, merge_settings


def _get_project_settings() -> dict[str, Any]:
    """Get the REPOSITORY_PIPES dict from Django settings."""
    project_settings = getattr(django_settings, SETTINGS_NAME, None) or {}
    if not isinstance(project_settings, dict):
        return {}
    return project_settings


@dataclass
class RepositorySettings:
    """Settings consumed by repositories, pipelines and the bundled pipes."""

    transaction_pipe: Any = "repository_pipes.pipes.TransactionPipe"
    transaction_using: Optional[str] = None
    global_pipes: List[Any] = field(default_factory=list)
    password_field: str = "password"
    password_confirmation_field: str = "password_confirm"
    log_pipe_stacks: bool = False

    @classmethod
    def load(cls) -> "RepositorySettings":
        merged = merge_settings(LIBRARY_DEFAULTS, _get_project_settings())
        valid_fields = set(cls.__dataclass_fields__.keys())
        return cls(**{k: v for k, v in merged.items() if k in valid_fields})


def get_repository_settings() -> RepositorySettings:
    """Return the current settings; read on every call so overrides apply."""
    return RepositorySettings.load()
