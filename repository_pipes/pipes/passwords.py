"""
Password hashing pipe.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional

from django.contrib.auth.hashers import make_password

from ..settings import get_repository_settings
from .base import Pipe


class EncryptPasswordPipe(Pipe):
    """
    Hash the password in a save payload.

    When the payload holds the password key, the confirmation key is dropped
    and the password is replaced by ``make_password(password)``. Payloads
    without a password, and payloads that are not mappings (delete), pass
    through untouched.

    Keys default to the ``password_field`` and ``password_confirmation_field``
    settings; subclasses may pin them with the class attributes.
    """

    name = "encrypt_password"

    password_key: Optional[str] = None
    confirmation_key: Optional[str] = None

    def get_keys(self) -> tuple[str, str]:
        settings = get_repository_settings()
        return (
            self.password_key or settings.password_field,
            self.confirmation_key or settings.password_confirmation_field,
        )

    def handle(self, payload: Any, next_pipe: Callable[[Any], Any], *arguments: Any) -> Any:
        if not isinstance(payload, Mapping):
            return next_pipe(payload)

        password_key, confirmation_key = self.get_keys()
        if password_key not in payload:
            return next_pipe(payload)

        data = dict(payload)
        data.pop(confirmation_key, None)
        data[password_key] = make_password(data[password_key])
        return next_pipe(data)
