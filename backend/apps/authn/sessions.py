"""
Session assembly.

Turns normalized provider results into the gateway's SessionInfo. A
SessionInfo is a point-in-time claim built per request and never stored;
every protected request re-validates against Stytch.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from django.utils import timezone

from apps.authn.flows import AuthFlow
from apps.authn.provider import MagicLinkAuthResult, SessionAuthResult


@dataclass(frozen=True)
class SessionInfo:
    """
    Canonical session representation returned by the dispatcher.

    Attributes:
        session_token: Token to hand back to the client (cookie value)
        user_id: Stytch user ID, or member ID in tenant mode
        expires_at: When the session stops being valid
        organization_id: Stytch organization ID (tenant mode only)
        email: Principal's e-mail, when the provider returned one
        name: Principal's name, when the provider returned one
    """

    session_token: str
    user_id: str
    expires_at: datetime
    organization_id: str | None = None
    email: str | None = None
    name: str | None = None


def assemble(
    result: MagicLinkAuthResult | SessionAuthResult,
    flow: AuthFlow,
    *,
    session_duration: timedelta,
    presented_token: str | None = None,
    now: datetime | None = None,
) -> SessionInfo:
    """
    Build a SessionInfo from a provider result.

    Magic link sessions expire ``session_duration`` from now, the same
    duration requested from Stytch when redeeming the link. Session
    validations take the expiry from Stytch and fall back to ``now`` (already
    expired) when it is missing.

    Token policy: for the session flow the returned ``session_token`` is the
    token the client presented (``presented_token``), not the one echoed by
    Stytch, so the cookie always holds what the caller sent.
    """
    now = now or timezone.now()
    principal = result.principal

    if flow is AuthFlow.MAGIC_LINK:
        session_token = result.session_token
        expires_at = now + session_duration
    else:
        if not isinstance(result, SessionAuthResult):
            raise TypeError("session flow requires a SessionAuthResult")
        session_token = presented_token or result.session_token
        expires_at = result.expires_at or now

    return SessionInfo(
        session_token=session_token,
        user_id=principal.principal_id,
        expires_at=expires_at,
        organization_id=principal.organization_id,
        email=principal.email,
        name=principal.name,
    )
