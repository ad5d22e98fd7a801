"""
Primitive repository actions.
"""

from enum import Enum
from typing import Optional, Union


class Action(str, Enum):
    """Lifecycle actions that carry their own pipes."""

    CREATE = "create"
    SAVE = "save"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def coerce(cls, value: Union["Action", str, None]) -> Optional["Action"]:
        """
        Return the Action matching ``value``.

        Unknown names return None instead of raising, so callers can treat
        them as contributing no pipes.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


PRIMITIVE_ACTIONS = tuple(Action)

# Both of these end in a generic save, so they also receive the save pipes.
SAVE_FUNNELLED_ACTIONS = (Action.CREATE, Action.UPDATE)
