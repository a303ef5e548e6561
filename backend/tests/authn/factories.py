"""
Builders for normalized provider results used across authn tests.
"""

from datetime import datetime, timedelta

from django.utils import timezone

from apps.authn.provider import MagicLinkAuthResult, Principal, SessionAuthResult


def make_principal(**overrides) -> Principal:
    """Principal with sensible defaults; override any field."""
    fields = {
        "principal_id": "user-test-123",
        "email": "user@example.com",
        "name": "Ada",
    }
    fields.update(overrides)
    return Principal(**fields)


def make_magic_link_result(
    session_token: str = "sess_new_token", **principal
) -> MagicLinkAuthResult:
    return MagicLinkAuthResult(session_token=session_token, principal=make_principal(**principal))


def make_session_result(
    session_token: str = "sess_abc",
    expires_at: datetime | None = None,
    **principal,
) -> SessionAuthResult:
    if expires_at is None:
        expires_at = timezone.now() + timedelta(days=7)
    return SessionAuthResult(
        session_token=session_token,
        principal=make_principal(**principal),
        expires_at=expires_at,
    )
