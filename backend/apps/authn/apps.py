"""
Authn app configuration.
"""

from django.apps import AppConfig


class AuthnConfig(AppConfig):
    """
    Configuration for the authn app.

    Builds the AuthDispatcher (and with it the Stytch client) once at
    startup; request handlers read it through ``get_dispatcher()``.
    """

    name = "apps.authn"
    verbose_name = "Authentication"

    def ready(self) -> None:
        from apps.authn.services import build_dispatcher

        self.dispatcher = build_dispatcher()
