"""
Core security - authentication classes for API.
"""

from django.conf import settings
from django.http import HttpRequest
from ninja.security import HttpBearer

from apps.authn.credentials import extract_credential


class SessionCredentialAuth(HttpBearer):
    """
    Session credential authentication for API endpoints.

    Accepts the session token from the Authorization header (Bearer) or,
    failing that, from the session cookie. Only checks presence; the
    provider validates the token on every request in the endpoint itself.
    Documents the bearer scheme in OpenAPI.
    """

    def __call__(self, request: HttpRequest) -> str | None:
        credential = extract_credential(
            request.headers.get("Authorization"),
            request.COOKIES.get(settings.AUTH_SESSION_COOKIE_NAME),
        )
        if credential is None:
            return None
        return self.authenticate(request, credential)

    def authenticate(self, request: HttpRequest, token: str) -> str | None:
        """Return token if present, None otherwise (triggers 401)."""
        return token if token else None
