"""Django app configuration for core app."""

from typing import override

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for core app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.core'
    verbose_name = 'Core'

    @override
    def ready(self) -> None:
        """Import signal handlers when app is ready."""
        from server.apps.core import signals  # noqa: F401
