"""
Local development settings.

Extends base settings with development-friendly defaults.
"""

from .base import *  # noqa: F403
from .base import settings

DEBUG = True
ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

# Frontend dev servers, unless explicitly configured
if not settings.CORS_ORIGINS:
    CORS_ALLOWED_ORIGINS = ["http://localhost:3000", "http://localhost:3001"]

LOG_JSON_FORMAT = False
