"""
Core app configuration.
"""

from django.apps import AppConfig
from django.conf import settings


class CoreConfig(AppConfig):
    """Configuration for core app. Sets up structured logging on startup."""

    name = "apps.core"
    verbose_name = "Core"

    def ready(self) -> None:
        from apps.core.logging import configure_logging

        configure_logging(json_format=settings.LOG_JSON_FORMAT, log_level=settings.LOG_LEVEL)
