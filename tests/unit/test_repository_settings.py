"""
Unit tests for settings loading and validation.
"""

import pytest
from django.test.utils import override_settings

from repository_pipes.checks import validate_configuration, validate_settings
from repository_pipes.defaults import LIBRARY_DEFAULTS
from repository_pipes.exceptions import ImproperlyConfiguredRepository
from repository_pipes.settings import RepositorySettings, get_repository_settings
from repository_pipes.testing import override_repository_settings

pytestmark = pytest.mark.unit


def test_defaults_when_nothing_configured():
    settings = get_repository_settings()

    assert settings.transaction_pipe == LIBRARY_DEFAULTS["transaction_pipe"]
    assert settings.global_pipes == []
    assert settings.password_field == "password"
    assert settings.log_pipe_stacks is False


def test_project_settings_override_defaults():
    with override_repository_settings(global_pipes=["test_app.pipes.UppercaseTitle"]):
        settings = get_repository_settings()

    assert settings.global_pipes == ["test_app.pipes.UppercaseTitle"]
    assert settings.password_field == "password"


def test_unknown_keys_are_ignored():
    with override_repository_settings(not_a_setting=True):
        settings = RepositorySettings.load()

    assert not hasattr(settings, "not_a_setting")


def test_non_dict_setting_falls_back_to_defaults():
    with override_settings(REPOSITORY_PIPES="nonsense"):
        settings = RepositorySettings.load()

    assert settings.transaction_pipe == LIBRARY_DEFAULTS["transaction_pipe"]


class TestValidation:
    """Tests for settings validation."""

    def test_default_settings_are_valid(self):
        validate_settings()
        assert validate_configuration() is True

    def test_invalid_transaction_pipe(self):
        settings = RepositorySettings(transaction_pipe="test_app.pipes.Missing")

        with pytest.raises(ImproperlyConfiguredRepository) as exc_info:
            validate_settings(settings)

        assert exc_info.value.setting == "transaction_pipe"
        assert validate_configuration(settings) is False

    def test_invalid_global_pipe(self):
        settings = RepositorySettings(global_pipes=["test_app.pipes.not_a_pipe"])

        with pytest.raises(ImproperlyConfiguredRepository) as exc_info:
            validate_settings(settings)

        assert exc_info.value.setting == "global_pipes"

    def test_global_pipes_must_be_a_list(self):
        settings = RepositorySettings(global_pipes="test_app.pipes.UppercaseTitle")

        with pytest.raises(ImproperlyConfiguredRepository):
            validate_settings(settings)

    def test_transaction_pipe_may_be_disabled(self):
        validate_settings(RepositorySettings(transaction_pipe=None))
