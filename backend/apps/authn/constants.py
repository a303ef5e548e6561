"""
Authentication constants.

Magic link locales must match the locales enabled for e-mail templates in
the Stytch Dashboard.
"""

from enum import StrEnum


class MagicLinkLocale(StrEnum):
    """Locales supported for magic link e-mails."""

    EN = "en"
    ES = "es"
    FR = "fr"
    PT_BR = "pt-br"


DEFAULT_SESSION_COOKIE_NAME = "kab_session"

DEFAULT_SESSION_DURATION_MINUTES = 43200
"""30 days. Requested from Stytch when redeeming a magic link."""

BEARER_PREFIX = "Bearer "

SESSION_TOKEN_PREFIX = "sess_"
"""Prefix used to guess that an untyped token is a session token."""
