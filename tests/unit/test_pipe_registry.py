"""
Unit tests for PipeRegistry.
"""

import pytest

from repository_pipes.exceptions import ImproperlyConfiguredRepository
from repository_pipes.pipeline import Action, PipeRegistry

pytestmark = pytest.mark.unit


class TestPipeRegistry:
    """Tests for PipeRegistry lookups and construction."""

    def test_from_config_freezes_lists_into_tuples(self):
        registry = PipeRegistry.from_config(
            pipes={"create": ["a", "b"]},
            pipe_groups={"admin": ["c"]},
        )

        assert registry.pipes_for_action("create") == ("a", "b")
        assert registry.pipes_for_group("admin") == ("c",)

    def test_single_pipe_is_wrapped(self):
        registry = PipeRegistry.from_config(pipes={"save": "a"}, pipe_groups={"g": "b"})

        assert registry.pipes_for_action(Action.SAVE) == ("a",)
        assert registry.pipes_for_group("g") == ("b",)

    def test_unknown_group_resolves_to_empty(self):
        registry = PipeRegistry.from_config(pipe_groups={"admin": ["a"]})

        assert registry.pipes_for_group("missing") == ()
        assert registry.has_group("admin")
        assert not registry.has_group("missing")

    def test_unknown_action_resolves_to_empty(self):
        registry = PipeRegistry.from_config(pipes={"create": ["a"]})

        assert registry.pipes_for_action("publish") == ()
        assert registry.pipes_for_action("update") == ()

    def test_non_primitive_action_key_is_rejected(self):
        with pytest.raises(ImproperlyConfiguredRepository) as exc_info:
            PipeRegistry.from_config(pipes={"publish": ["a"]}, owner="PostRepository")

        assert exc_info.value.repository == "PostRepository"
        assert exc_info.value.setting == "pipes"

    def test_registry_is_read_only(self):
        registry = PipeRegistry.from_config(pipe_groups={"admin": ["a"]})

        with pytest.raises(TypeError):
            registry.pipe_groups["other"] = ("b",)
        with pytest.raises(AttributeError):
            registry.uses_transaction = True

    def test_source_config_changes_do_not_leak(self):
        groups = {"admin": ["a"]}
        registry = PipeRegistry.from_config(pipe_groups=groups)

        groups["admin"].append("b")

        assert registry.pipes_for_group("admin") == ("a",)

    def test_group_names_keep_definition_order(self):
        registry = PipeRegistry.from_config(pipe_groups={"b": [], "a": []})

        assert registry.group_names() == ["b", "a"]

    def test_empty_registry(self):
        registry = PipeRegistry()

        assert registry.pipes_for_action("create") == ()
        assert registry.pipes_for_group("any") == ()
        assert registry.uses_transaction is False


class TestPipeCollections:
    """Tests for the accepted shapes of configured pipes."""

    def test_iterator_is_frozen_in_order(self):
        registry = PipeRegistry.from_config(
            pipes={"save": (pipe for pipe in ["a", "b"])},
            pipe_groups={"g": iter(["c", "d"])},
        )

        assert registry.pipes_for_action("save") == ("a", "b")
        assert registry.pipes_for_group("g") == ("c", "d")

    def test_set_of_pipes_is_rejected(self):
        with pytest.raises(ImproperlyConfiguredRepository) as exc_info:
            PipeRegistry.from_config(pipes={"save": {"a", "b"}}, owner="TagRepository")

        assert exc_info.value.repository == "TagRepository"
        assert exc_info.value.setting == "pipes"

    def test_mapping_group_is_rejected(self):
        with pytest.raises(ImproperlyConfiguredRepository) as exc_info:
            PipeRegistry.from_config(pipe_groups={"g": {"a": 1}})

        assert exc_info.value.setting == "pipe_groups"
