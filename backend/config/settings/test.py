"""
Test settings.

Stytch credentials are blanked so nothing reaches the network by accident.
"""

from .base import *  # noqa: F403

DEBUG = False
SECRET_KEY = "test-secret-key"
ALLOWED_HOSTS = ["testserver"]

STYTCH_PROJECT_ID = ""
STYTCH_SECRET = ""
STYTCH_TENANT_MODE = False

FRONTEND_URL = "http://localhost:3000/auth/callback"
AUTH_SESSION_DURATION_MINUTES = 43200
AUTH_SESSION_COOKIE_NAME = "kab_session"
AUTH_REQUIRE_EXISTING_USER = True
AUTH_PRODUCTION_MODE = False

LOG_JSON_FORMAT = False
LOG_LEVEL = "WARNING"
