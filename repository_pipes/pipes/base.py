"""
Base class for repository pipes.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class Pipe(ABC):
    """
    Base class for pipes.

    A pipe receives the payload travelling towards the repository's terminal
    operation and a ``next_pipe`` callable. Forward the (possibly modified)
    payload with ``return next_pipe(payload)``, or return something else to
    stop the chain.

    Extra arguments given in a pipe string (``"app.pipes.Audit:strict"``)
    are passed after ``next_pipe``.

    Example:
        class StripWhitespace(Pipe):
            name = "strip_whitespace"

            def handle(self, payload, next_pipe, *arguments):
                payload = {k: v.strip() if isinstance(v, str) else v
                           for k, v in payload.items()}
                return next_pipe(payload)
    """

    # Identifier for debugging/logging
    name: str = "base"

    @abstractmethod
    def handle(self, payload: Any, next_pipe: Callable[[Any], Any], *arguments: Any) -> Any:
        """
        Handle the payload.

        Args:
            payload: Field mapping (save) or model instance (delete)
            next_pipe: Continuation running the rest of the chain
            *arguments: String arguments from the pipe identifier

        Returns:
            The result of the chain
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name}>"
