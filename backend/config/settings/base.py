"""
Base Django settings for the session gateway.

Shared configuration for all environments.
"""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Environment-based configuration using pydantic-settings."""

    SECRET_KEY: str = "django-insecure-change-me-in-production"
    DEBUG: bool = False
    ALLOWED_HOSTS: str = ""

    # Stytch
    STYTCH_PROJECT_ID: str = ""
    STYTCH_SECRET: str = ""
    STYTCH_TENANT_MODE: bool = False

    # Magic link redirect target (frontend callback page)
    FRONTEND_URL: str = ""

    # Comma-separated list of allowed CORS origins
    CORS_ORIGINS: str = ""

    # Session policy
    AUTH_SESSION_DURATION_MINUTES: int = 43200  # 30 days
    AUTH_SESSION_COOKIE_NAME: str = "kab_session"
    AUTH_REQUIRE_EXISTING_USER: bool = True

    # Logging
    LOG_JSON_FORMAT: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


def split_csv(value: str) -> list[str]:
    """Split a comma-separated env value, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


settings = Settings()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = settings.SECRET_KEY

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = settings.DEBUG

ALLOWED_HOSTS = split_csv(settings.ALLOWED_HOSTS)

# Application definition
INSTALLED_APPS = [
    "corsheaders",
    "ninja",
    # Local apps
    "apps.core",
    "apps.authn",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
    "apps.core.middleware.CorrelationIdMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {},
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# No database: session state of record lives at the identity provider.
DATABASES: dict = {}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# CORS (django-cors-headers)
CORS_ALLOWED_ORIGINS = split_csv(settings.CORS_ORIGINS)
CORS_ALLOW_CREDENTIALS = True

# Stytch
STYTCH_PROJECT_ID = settings.STYTCH_PROJECT_ID
STYTCH_SECRET = settings.STYTCH_SECRET
STYTCH_TENANT_MODE = settings.STYTCH_TENANT_MODE

# Auth gateway
FRONTEND_URL = settings.FRONTEND_URL
AUTH_SESSION_DURATION_MINUTES = settings.AUTH_SESSION_DURATION_MINUTES
AUTH_SESSION_COOKIE_NAME = settings.AUTH_SESSION_COOKIE_NAME
AUTH_REQUIRE_EXISTING_USER = settings.AUTH_REQUIRE_EXISTING_USER
# Controls cookie Secure/SameSite; enabled by the production settings module
AUTH_PRODUCTION_MODE = False

# Logging
LOG_JSON_FORMAT = settings.LOG_JSON_FORMAT
LOG_LEVEL = settings.LOG_LEVEL
