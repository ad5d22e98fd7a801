"""
Transaction pipe.

Runs the remainder of the pipeline inside a database transaction.
"""

import logging
from typing import Any, Callable, Optional

from django.db import transaction

from ..settings import get_repository_settings
from .base import Pipe

logger = logging.getLogger(__name__)


class TransactionPipe(Pipe):
    """
    Wrap the rest of the chain in ``transaction.atomic``.

    The transaction commits when the chain returns and rolls back when any
    later pipe or the terminal operation raises; the exception is re-raised
    unchanged.

    The database alias is taken from the first pipe argument
    (``"repository_pipes.pipes.TransactionPipe:replica"``), then from the
    ``transaction_using`` setting, then Django's default database.
    """

    name = "transaction"

    def __init__(self, using: Optional[str] = None):
        self.using = using

    def get_using(self, *arguments: Any) -> Optional[str]:
        if arguments:
            return arguments[0]
        if self.using is not None:
            return self.using
        return get_repository_settings().transaction_using

    def handle(self, payload: Any, next_pipe: Callable[[Any], Any], *arguments: Any) -> Any:
        using = self.get_using(*arguments)
        logger.debug("Opening transaction on database '%s'", using or "default")
        with transaction.atomic(using=using):
            return next_pipe(payload)
