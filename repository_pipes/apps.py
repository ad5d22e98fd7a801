"""
Django app configuration for django-repository-pipes.
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class RepositoryPipesConfig(BaseAppConfig):
    """Django app configuration for django-repository-pipes."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "repository_pipes"
    verbose_name = "Repository Pipes"
    label = "repository_pipes"

    def ready(self):
        """Validate the library settings once Django has loaded."""
        from .checks import validate_settings
        from .exceptions import ImproperlyConfiguredRepository

        try:
            validate_settings()
            logger.debug("Repository pipes configuration validated")
        except ImproperlyConfiguredRepository as e:
            logger.warning(f"Repository pipes configuration is invalid: {e}")
            if self._is_debug_mode():
                raise

    def _is_debug_mode(self):
        """Check if we're in debug mode."""
        from django.conf import settings as django_settings

        return getattr(django_settings, "DEBUG", False)
