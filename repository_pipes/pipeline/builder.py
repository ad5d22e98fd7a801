"""
Pipeline Builder - Assembles the pipe stack for one repository call.

Provides a fluent interface for attaching groups and single pipes, enabling
the transaction pipe and applying the primitive pipes of an action.
"""

import logging
from typing import Any, Iterable, List, Optional, Union

from .actions import Action, SAVE_FUNNELLED_ACTIONS
from .executor import pipe_identity
from .registry import PipeRegistry

logger = logging.getLogger(__name__)


class PipelineBuilder:
    """
    Builds the ordered pipe stack for a single save or delete.

    The stack is always laid out as::

        [transaction pipe] + global pipes + ad-hoc pipes + primitive pipes

    Ad-hoc pipes keep the order in which they were attached. Primitive pipes
    are the action's own pipes followed, for create and update, by the save
    pipes. ``build()`` hands the stack out and resets the builder, so nothing
    leaks from one call into the next.

    Example:
        builder = PipelineBuilder(registry, transaction_pipe=TransactionPipe)
        builder.attach_group("admin").attach_pipe(NotifyOwner)
        builder.apply_primitives_for("update")
        stack = builder.build()
    """

    def __init__(
        self,
        registry: PipeRegistry,
        transaction_pipe: Any = None,
        global_pipes: Optional[Iterable[Any]] = None,
    ):
        """
        Initialize pipeline builder.

        Args:
            registry: Frozen pipe configuration of the repository
            transaction_pipe: Identifier inserted by enable_transaction()
            global_pipes: Pipes applied to every stack after the transaction
        """
        self.registry = registry
        self.transaction_pipe = transaction_pipe
        self.global_pipes: List[Any] = list(global_pipes or [])
        self._attached: List[Any] = []
        self._primitives: List[Any] = []
        self._transaction = False

    @property
    def transaction_enabled(self) -> bool:
        return self._transaction

    @property
    def pending(self) -> List[Any]:
        """The stack build() would return, without resetting."""
        return self._compose()

    def attach_group(self, *groups: Union[str, Iterable[str]]) -> "PipelineBuilder":
        """
        Append the pipes of one or more groups.

        Accepts ``attach_group("a")``, ``attach_group("a", "b")`` and
        ``attach_group(["a", "b"])``. Unknown groups add nothing. A group
        attached twice has its pipes appended twice.

        Returns:
            Self for method chaining
        """
        if len(groups) == 1 and isinstance(groups[0], (list, tuple)):
            groups = tuple(groups[0])

        for group in groups:
            if not self.registry.has_group(group):
                logger.debug("Pipe group '%s' is not defined, skipping", group)
                continue
            self._attached.extend(self.registry.pipes_for_group(group))
        return self

    def attach_pipe(self, pipe: Any) -> "PipelineBuilder":
        """
        Append a single pipe.

        Returns:
            Self for method chaining
        """
        self._attached.append(pipe)
        return self

    def enable_transaction(self) -> "PipelineBuilder":
        """
        Put the transaction pipe in front of the stack.

        Calling this more than once still yields a single transaction pipe.
        Other spellings of the same pipe (class or dotted path) are dropped
        from the rest of the stack.

        Returns:
            Self for method chaining
        """
        self._transaction = True
        return self

    def apply_primitives_for(self, action: Union[Action, str]) -> "PipelineBuilder":
        """
        Append the primitive pipes of an action.

        Create and update also receive the save pipes, after their own.
        Unknown actions add nothing.

        Returns:
            Self for method chaining
        """
        resolved = Action.coerce(action)
        if resolved is None:
            logger.debug("Action '%s' has no primitive pipes, skipping", action)
            return self

        actions = [resolved]
        if resolved in SAVE_FUNNELLED_ACTIONS:
            actions.append(Action.SAVE)

        for primitive in actions:
            self._primitives.extend(self.registry.pipes_for_action(primitive))
        return self

    def build(self) -> List[Any]:
        """
        Return the assembled stack and reset the builder.

        Returns:
            Ordered list of pipe identifiers
        """
        stack = self._compose()
        self.reset()
        return stack

    def reset(self) -> None:
        """Discard everything attached so far."""
        self._attached = []
        self._primitives = []
        self._transaction = False

    def _compose(self) -> List[Any]:
        stack = [*self.global_pipes, *self._attached, *self._primitives]
        if not self._transaction or self.transaction_pipe is None:
            return stack
        transaction_key = pipe_identity(self.transaction_pipe)
        return [
            self.transaction_pipe,
            *(pipe for pipe in stack if pipe_identity(pipe) != transaction_key),
        ]

    def __repr__(self) -> str:
        return f"<PipelineBuilder pending={self.pending}>"
