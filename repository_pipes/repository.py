"""
Repository base class.

A repository owns the save and delete operations of one Django model and
runs both through a pipeline of pipes before touching the database.
"""

import logging
from typing import Any, Callable, ClassVar, Iterable, Mapping, Optional, Union

from django.db import models

from .exceptions import ImproperlyConfiguredRepository
from .pipeline import Action, Pipeline, PipelineBuilder, PipeRegistry
from .settings import RepositorySettings, get_repository_settings

logger = logging.getLogger(__name__)


class Repository:
    """
    Base class for model repositories.

    Subclasses set ``model`` and may configure:
    - pipes: primitive action -> pipes applied automatically on that action
    - pipe_groups: group name -> pipes attached on demand with with_group()
    - uses_transaction: run every save/delete inside the transaction pipe
    - fillable: field names save() may assign; None allows every field
      except the primary key

    The configuration is frozen into a PipeRegistry when the subclass is
    defined, so it is shared by all instances and never mutated at runtime.
    Library settings (transaction pipe, global pipes) are read on every call
    unless a RepositorySettings instance is passed to the constructor.

    Example:
        class UserRepository(Repository):
            model = User
            uses_transaction = True
            pipes = {"save": [EncryptPasswordPipe]}
            pipe_groups = {"staff": [GrantStaff, NotifyAdmins]}

        repo = UserRepository()
        user = repo.with_group("staff").save({"username": "ada", "password": "x"})
    """

    model: ClassVar[Optional[type[models.Model]]] = None
    pipes: ClassVar[Mapping[str, Any]] = {}
    pipe_groups: ClassVar[Mapping[str, Any]] = {}
    uses_transaction: ClassVar[bool] = False
    fillable: ClassVar[Optional[Iterable[str]]] = None

    registry: ClassVar[PipeRegistry] = PipeRegistry()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.registry = PipeRegistry.from_config(
            pipes=cls.pipes,
            pipe_groups=cls.pipe_groups,
            uses_transaction=cls.uses_transaction,
            owner=cls.__name__,
        )

    def __init__(self, settings: Optional[RepositorySettings] = None):
        """
        Initialize repository.

        Args:
            settings: Optional RepositorySettings pinned for every call;
                when omitted they are read from Django settings per call
        """
        if self.model is None:
            raise ImproperlyConfiguredRepository(
                f"{self.__class__.__name__} must define a model",
                repository=self.__class__.__name__,
            )
        self._settings = settings
        current = self.settings
        self.builder = PipelineBuilder(
            self.registry,
            transaction_pipe=current.transaction_pipe,
            global_pipes=current.global_pipes,
        )

    @property
    def settings(self) -> RepositorySettings:
        """Pinned settings, or the current Django settings on every access."""
        return self._settings or get_repository_settings()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def save(
        self, data: Mapping[str, Any], instance: Optional[models.Model] = None
    ) -> models.Model:
        """
        Save a model instance through the pipeline.

        Args:
            data: Field values to assign
            instance: Existing instance to update; a new one is created
                when omitted

        Returns:
            The saved instance, or whatever a short-circuiting pipe returned
        """
        self.apply_primitives(Action.CREATE if instance is None else Action.UPDATE)
        return self._run(data, lambda payload: self.perform_save(payload, instance))

    def delete(self, instance: models.Model) -> Any:
        """
        Delete a model instance through the pipeline.

        Args:
            instance: The instance to remove

        Returns:
            True if a row was deleted, or whatever a short-circuiting pipe
            returned
        """
        self.apply_primitives(Action.DELETE)
        return self._run(instance, self.perform_delete)

    def with_group(self, *groups: Union[str, Iterable[str]]) -> "Repository":
        """Attach the pipes of one or more groups to the next call."""
        self.builder.attach_group(*groups)
        return self

    def with_pipe(self, pipe: Any) -> "Repository":
        """Attach a single pipe to the next call."""
        self.builder.attach_pipe(pipe)
        return self

    def transaction(self) -> "Repository":
        """Run the next call inside the transaction pipe."""
        self.builder.enable_transaction()
        return self

    def apply_primitives(self, action: Union[Action, str]) -> "Repository":
        """Attach the pipes configured for a primitive action."""
        self.builder.apply_primitives_for(action)
        return self

    # ------------------------------------------------------------------ #
    # Terminal operations
    # ------------------------------------------------------------------ #

    def perform_save(
        self, data: Mapping[str, Any], instance: Optional[models.Model] = None
    ) -> models.Model:
        """
        Fill and save an instance.

        Concrete editable fields are assigned before ``save()``; many-to-many
        values are set afterwards. Keys that are not fillable model fields
        are ignored, and so is the primary key unless it is listed in
        ``fillable``.
        """
        created = instance is None
        if created:
            instance = self.model()

        relations = self.fill(instance, data)
        # A new instance must never turn into an UPDATE of an existing row.
        instance.save(force_insert=created)

        for name, value in relations.items():
            getattr(instance, name).set(value)

        return instance

    def perform_delete(self, instance: models.Model) -> bool:
        deleted, _ = instance.delete()
        return deleted > 0

    def fill(self, instance: models.Model, data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Assign concrete field values from ``data`` to ``instance``.

        Returns:
            Many-to-many values to set once the instance has a primary key
        """
        opts = instance._meta
        allowed = set(self.fillable) if self.fillable is not None else None

        concrete = {}
        for field in opts.concrete_fields:
            if not field.editable:
                continue
            if field.primary_key and not (
                allowed and {field.name, field.attname} & allowed
            ):
                continue
            concrete[field.name] = field
            concrete[field.attname] = field
        many_to_many = {field.name: field for field in opts.many_to_many}

        relations: dict[str, Any] = {}
        for key, value in data.items():
            if allowed is not None and key not in allowed:
                logger.debug(
                    "%s: '%s' is not fillable, ignoring", self.__class__.__name__, key
                )
                continue
            if key in concrete:
                setattr(instance, key, value)
            elif key in many_to_many:
                relations[key] = value
            else:
                logger.debug(
                    "%s: %s has no field '%s', ignoring",
                    self.__class__.__name__,
                    opts.label,
                    key,
                )
        return relations

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _run(self, payload: Any, destination: Callable[[Any], Any]) -> Any:
        settings = self.settings
        self.builder.transaction_pipe = settings.transaction_pipe
        self.builder.global_pipes = list(settings.global_pipes)

        if self.registry.uses_transaction:
            self.builder.enable_transaction()

        # build() empties the builder before anything runs, so a failing call
        # leaves nothing behind for the next one.
        stack = self.builder.build()

        level = logging.INFO if settings.log_pipe_stacks else logging.DEBUG
        logger.log(level, "%s pipe stack: %s", self.__class__.__name__, stack)

        return Pipeline(stack).run(payload, destination)

    def __repr__(self) -> str:
        model_name = self.model.__name__ if self.model else None
        return f"<{self.__class__.__name__} model={model_name}>"
