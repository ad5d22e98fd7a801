"""
Default configuration for the django-repository-pipes library.

Projects override any of these keys through the ``REPOSITORY_PIPES`` dict in
their Django settings. Keys that are not listed here are ignored.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"

SETTINGS_NAME = "REPOSITORY_PIPES"


LIBRARY_DEFAULTS: dict[str, Any] = {
    # Pipe placed at position 0 of the stack when a transaction is enabled
    "transaction_pipe": "repository_pipes.pipes.TransactionPipe",
    # Database alias used by TransactionPipe when the pipe has no argument
    "transaction_using": None,
    # Pipes applied to every save and delete, right after the transaction pipe
    "global_pipes": [],
    # EncryptPasswordPipe keys
    "password_field": "password",
    "password_confirmation_field": "password_confirm",
    # Log every built pipe stack at INFO instead of DEBUG
    "log_pipe_stacks": False,
}


def merge_settings(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge settings dictionaries, later ones taking precedence."""
    result: dict[str, Any] = {}
    for config in configs:
        if config:
            result.update(config)
    return result
