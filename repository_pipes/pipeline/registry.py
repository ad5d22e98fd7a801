"""
PipeRegistry - immutable pipe configuration of one repository class.
"""

from collections.abc import Iterator, Set as AbstractSet
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from ..exceptions import ImproperlyConfiguredRepository
from .actions import Action


def _freeze_pipes(
    pipes: Union[Iterable[Any], Any, None],
    owner: Optional[str] = None,
    setting: str = "pipes",
) -> Tuple[Any, ...]:
    """
    Normalize one pipe or an ordered collection of pipes into a tuple.

    Raises:
        ImproperlyConfiguredRepository: For unordered collections (sets,
            mappings), whose execution order would be undefined
    """
    if pipes is None:
        return ()
    if isinstance(pipes, (AbstractSet, Mapping)):
        raise ImproperlyConfiguredRepository(
            f"{setting} must list pipes in order; got {type(pipes).__name__}",
            repository=owner,
            setting=setting,
        )
    if isinstance(pipes, (list, tuple, Iterator)):
        return tuple(pipes)
    return (pipes,)


@dataclass(frozen=True)
class PipeRegistry:
    """
    Holds the default pipes per action and the named pipe groups.

    A registry is built once per repository class and never changes
    afterwards, so it can be shared by every instance and thread.

    Attributes:
        action_pipes: Primitive action -> ordered pipe identifiers
        pipe_groups: Group name -> ordered pipe identifiers
        uses_transaction: Whether save/delete always run in a transaction
    """

    action_pipes: Mapping[Action, Tuple[Any, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    pipe_groups: Mapping[str, Tuple[Any, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    uses_transaction: bool = False

    @classmethod
    def from_config(
        cls,
        pipes: Optional[Mapping[str, Any]] = None,
        pipe_groups: Optional[Mapping[str, Any]] = None,
        uses_transaction: bool = False,
        owner: Optional[str] = None,
    ) -> "PipeRegistry":
        """
        Build a registry from plain dict configuration.

        Args:
            pipes: Mapping of action name to a pipe or list of pipes
            pipe_groups: Mapping of group name to a pipe or list of pipes
            uses_transaction: Wrap every save/delete in the transaction pipe
            owner: Name of the configuring class, used in error messages

        Returns:
            Frozen PipeRegistry

        Raises:
            ImproperlyConfiguredRepository: If ``pipes`` names an action that
                is not one of create, save, update or delete
        """
        action_pipes = {}
        for name, configured in (pipes or {}).items():
            action = Action.coerce(name)
            if action is None:
                raise ImproperlyConfiguredRepository(
                    f"'{name}' is not a primitive action; expected one of "
                    f"{', '.join(a.value for a in Action)}. "
                    "Use pipe_groups for ad-hoc bundles.",
                    repository=owner,
                    setting="pipes",
                )
            action_pipes[action] = _freeze_pipes(configured, owner, "pipes")

        groups = {
            str(name): _freeze_pipes(configured, owner, "pipe_groups")
            for name, configured in (pipe_groups or {}).items()
        }

        return cls(
            action_pipes=MappingProxyType(action_pipes),
            pipe_groups=MappingProxyType(groups),
            uses_transaction=bool(uses_transaction),
        )

    def pipes_for_group(self, name: str) -> Tuple[Any, ...]:
        """Return the pipes of a group; unknown groups give an empty tuple."""
        return self.pipe_groups.get(name, ())

    def pipes_for_action(self, action: Union[Action, str]) -> Tuple[Any, ...]:
        """Return the default pipes of an action; unknown actions give ()."""
        resolved = Action.coerce(action)
        if resolved is None:
            return ()
        return self.action_pipes.get(resolved, ())

    def has_group(self, name: str) -> bool:
        return name in self.pipe_groups

    def group_names(self) -> list[str]:
        return list(self.pipe_groups.keys())

    def __repr__(self) -> str:
        actions = {a.value: len(p) for a, p in self.action_pipes.items()}
        return (
            f"<PipeRegistry actions={actions} groups={self.group_names()} "
            f"uses_transaction={self.uses_transaction}>"
        )
