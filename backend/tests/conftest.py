"""
Shared pytest fixtures for all tests.

The provider adapter is always a MagicMock here; tests that exercise the
Stytch adapters themselves mock the SDK client instead (see
tests/authn/test_provider.py).

Example usage:

    def test_something(dispatcher, provider):
        provider.authenticate_session.return_value = make_session_result()
        session = dispatcher.validate_session("sess_abc")
"""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
from django.test import Client, RequestFactory

from apps.authn.cookies import SessionCookiePolicy
from apps.authn.provider import MagicLinkSendResult, RevokeResult
from apps.authn.services import AuthDispatcher
from tests.authn.factories import make_magic_link_result, make_principal, make_session_result

REDIRECT_URL = "http://localhost:3000/auth/callback"


@pytest.fixture
def provider() -> MagicMock:
    """
    Mock identity provider with successful defaults for every call.

    Override per test, e.g. ``provider.authenticate_session.side_effect = ...``.
    """
    mock = MagicMock()
    mock.fetch_principal.return_value = make_principal()
    mock.send_magic_link.return_value = MagicLinkSendResult(request_id="req-123")
    mock.authenticate_magic_link.return_value = make_magic_link_result()
    mock.authenticate_session.return_value = make_session_result()
    mock.revoke_session.return_value = RevokeResult(request_id="req-456")
    return mock


@pytest.fixture
def cookie_policy() -> SessionCookiePolicy:
    return SessionCookiePolicy(name="kab_session", production=False)


@pytest.fixture
def dispatcher(provider: MagicMock, cookie_policy: SessionCookiePolicy) -> AuthDispatcher:
    """Dispatcher wired to the mock provider, consumer (non-tenant) mode."""
    return AuthDispatcher(
        provider,
        cookie_policy,
        session_duration=timedelta(days=30),
        redirect_url=REDIRECT_URL,
    )


@pytest.fixture
def api_dispatcher(dispatcher: AuthDispatcher):
    """
    Route API requests to the test dispatcher.

    Example:
        def test_me(api_client, api_dispatcher, provider):
            response = api_client.get("/api/v1/auth/me", HTTP_AUTHORIZATION="Bearer sess_abc")
    """
    with patch("apps.authn.api.get_dispatcher", return_value=dispatcher):
        yield dispatcher


@pytest.fixture
def request_factory() -> RequestFactory:
    """Django request factory for unit testing views and middleware."""
    return RequestFactory()


@pytest.fixture
def api_client() -> Client:
    """
    Django test client for full HTTP request/response cycle tests.

    Example:
        def test_api_returns_200(api_client):
            response = api_client.get("/api/v1/health")
            assert response.status_code == 200
    """
    return Client()
