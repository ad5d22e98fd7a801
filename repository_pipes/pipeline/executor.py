"""
Pipeline executor.

Threads a payload through an ordered chain of pipes and finally into a
destination callable. The chain is composed right-to-left, so the first
pipe of the stack is the outermost one.
"""

import logging
from typing import Any, Callable, Iterable, List, Tuple

from django.utils.module_loading import import_string

from ..exceptions import PipeResolutionError

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


def parse_pipe_string(identifier: str) -> Tuple[str, Tuple[str, ...]]:
    """
    Split ``"dotted.path.Pipe:arg1,arg2"`` into its path and arguments.

    Args:
        identifier: Pipe string with optional arguments

    Returns:
        (dotted path, tuple of string arguments)
    """
    path, _, raw_arguments = identifier.partition(":")
    arguments = tuple(
        argument.strip() for argument in raw_arguments.split(",") if argument.strip()
    )
    return path.strip(), arguments


def pipe_identity(pipe: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """
    Return a comparable key for a pipe identifier.

    A dotted string and the object it imports compare equal, so
    ``"app.pipes.Audit"`` and ``Audit`` are the same pipe. Strings that do
    not import are kept as they are; Pipeline.run reports them.
    """
    if not isinstance(pipe, str):
        return pipe, ()
    path, arguments = parse_pipe_string(pipe)
    try:
        return import_string(path), arguments
    except ImportError:
        return pipe, ()


def resolve_pipe(pipe: Any) -> Tuple[Handler, Tuple[Any, ...]]:
    """
    Turn a pipe identifier into a handler and its extra arguments.

    Supported identifiers:
    - a class with a ``handle`` method (instantiated without arguments)
    - an object with a ``handle`` method
    - a plain callable taking ``(payload, next_pipe)``
    - a dotted import path, optionally followed by ``:arg1,arg2``

    Args:
        pipe: The pipe identifier

    Returns:
        (handler, arguments) where the handler is called as
        ``handler(payload, next_pipe, *arguments)``

    Raises:
        PipeResolutionError: If the identifier cannot be resolved
    """
    arguments: Tuple[Any, ...] = ()

    if isinstance(pipe, str):
        path, arguments = parse_pipe_string(pipe)
        try:
            pipe = import_string(path)
        except ImportError as exc:
            raise PipeResolutionError(
                f"Could not import pipe '{path}': {exc}", pipe=path
            ) from exc

    if isinstance(pipe, type):
        if not callable(getattr(pipe, "handle", None)):
            raise PipeResolutionError(
                f"Pipe class {pipe.__name__} does not define handle()", pipe=pipe
            )
        pipe = pipe()

    handle = getattr(pipe, "handle", None)
    if callable(handle):
        return handle, arguments
    if callable(pipe):
        return pipe, arguments

    raise PipeResolutionError(f"Cannot use {pipe!r} as a pipe", pipe=pipe)


class Pipeline:
    """
    Executes an ordered chain of pipes around a destination.

    Each pipe receives the payload and a ``next_pipe`` callable. It may
    change the payload before forwarding it, or return early without
    calling ``next_pipe``; in that case its return value is the result.
    Exceptions are never caught here.

    Example:
        result = Pipeline([TransactionPipe, EncryptPasswordPipe]).run(
            {"password": "secret"},
            lambda data: User.objects.create(**data),
        )
    """

    def __init__(self, pipes: Iterable[Any]):
        """
        Initialize pipeline.

        Args:
            pipes: Ordered pipe identifiers, outermost first
        """
        self.pipes: List[Any] = list(pipes)

    def run(self, payload: Any, destination: Callable[[Any], Any]) -> Any:
        """
        Send the payload through every pipe, then to the destination.

        All pipes are resolved before the first one runs, so a broken
        identifier fails without side effects.

        Args:
            payload: Value handed to the first pipe
            destination: Terminal operation receiving the final payload

        Returns:
            Whatever the outermost pipe returns
        """
        resolved = [resolve_pipe(pipe) for pipe in self.pipes]

        next_pipe = destination
        for handle, arguments in reversed(resolved):
            next_pipe = self._chain(handle, arguments, next_pipe)

        logger.debug("Running payload through %d pipe(s)", len(resolved))
        return next_pipe(payload)

    @staticmethod
    def _chain(
        handle: Handler, arguments: Tuple[Any, ...], next_pipe: Callable[[Any], Any]
    ) -> Callable[[Any], Any]:
        def step(payload: Any) -> Any:
            return handle(payload, next_pipe, *arguments)

        return step

    def __repr__(self) -> str:
        return f"<Pipeline pipes={self.pipes}>"
