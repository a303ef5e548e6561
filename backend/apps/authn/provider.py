"""
Identity provider adapter.

Wraps the Stytch SDK behind a small interface and converts every response
into a plain dataclass at this boundary, so nothing past here touches SDK
objects or their optional nested fields.

Three variants:
- StytchProvider: consumer project (users)
- StytchB2BProvider: B2B project (organization members), a.k.a. tenant mode
- UnconfiguredProvider: credentials missing; every call fails fast
"""

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

import stytch
from stytch.core.response_base import StytchError

from apps.authn.exceptions import (
    ProviderNotConfiguredError,
    ProviderRejectedError,
    ProviderUnreachableError,
)
from apps.core.logging import get_logger

logger = get_logger(__name__)

MEMBER_NOT_FOUND = "member_not_found"


# --- Normalized results ---


@dataclass(frozen=True)
class Principal:
    """Who a session belongs to: a user, or a member in tenant mode."""

    principal_id: str
    organization_id: str | None = None
    email: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class MagicLinkSendResult:
    request_id: str


@dataclass(frozen=True)
class MagicLinkAuthResult:
    """Session minted by redeeming a magic link. Stytch expiry is not used."""

    session_token: str
    principal: Principal


@dataclass(frozen=True)
class SessionAuthResult:
    session_token: str
    principal: Principal
    expires_at: datetime | None


@dataclass(frozen=True)
class RevokeResult:
    request_id: str


class IdentityProvider(Protocol):
    """Operations the gateway needs from the identity provider."""

    def send_magic_link(
        self,
        email: str,
        *,
        redirect_url: str | None = None,
        organization_id: str | None = None,
        locale: str | None = None,
    ) -> MagicLinkSendResult: ...

    def authenticate_magic_link(
        self, token: str, *, session_duration_minutes: int
    ) -> MagicLinkAuthResult: ...

    def authenticate_session(self, session_token: str) -> SessionAuthResult: ...

    def revoke_session(self, session_token: str) -> RevokeResult: ...

    def fetch_principal(
        self, email: str, *, organization_id: str | None = None
    ) -> Principal | None: ...


@contextmanager
def provider_call(operation: str) -> Generator[None, None, None]:
    """
    Translate SDK failures into ProviderError subclasses.

    Stytch API errors become ProviderRejectedError with the error details
    kept on the exception; anything else raised by the SDK (connection
    errors, timeouts) becomes ProviderUnreachableError.
    """
    try:
        yield
    except StytchError as e:
        details = e.details
        logger.warning(
            "stytch_call_rejected",
            operation=operation,
            error_type=details.error_type,
            error_message=details.error_message,
            status_code=details.status_code,
            request_id=details.request_id,
        )
        raise ProviderRejectedError(
            details.error_message or "Stytch rejected the request",
            error_type=details.error_type,
            status_code=details.status_code,
            request_id=details.request_id,
        ) from e
    except Exception as e:
        logger.error("stytch_call_failed", operation=operation, exc_info=True)
        raise ProviderUnreachableError(f"Stytch {operation} call failed") from e


def _to_datetime(value: datetime | str | None) -> datetime | None:
    """Stytch SDK models parse timestamps, but raw strings show up in older versions."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _optional_kwargs(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value}


# --- Consumer project ---


def _user_principal(user_id: str, user: Any) -> Principal:
    """Build a Principal from a Stytch consumer User (first e-mail, first name)."""
    email = None
    name = None
    if user is not None:
        if user.emails:
            email = user.emails[0].email
        if user.name is not None:
            name = user.name.first_name or None
    return Principal(principal_id=user_id, email=email, name=name)


class StytchProvider:
    """Adapter for a Stytch consumer project."""

    def __init__(self, client: stytch.Client) -> None:
        self.client = client

    def send_magic_link(
        self,
        email: str,
        *,
        redirect_url: str | None = None,
        organization_id: str | None = None,
        locale: str | None = None,
    ) -> MagicLinkSendResult:
        with provider_call("magic_links.email.login_or_create"):
            response = self.client.magic_links.email.login_or_create(
                email=email,
                **_optional_kwargs(login_magic_link_url=redirect_url, locale=locale),
            )
        logger.info("magic_link_sent", redirect_url=redirect_url, locale=locale)
        return MagicLinkSendResult(request_id=response.request_id)

    def authenticate_magic_link(
        self, token: str, *, session_duration_minutes: int
    ) -> MagicLinkAuthResult:
        with provider_call("magic_links.authenticate"):
            response = self.client.magic_links.authenticate(
                token=token,
                session_duration_minutes=session_duration_minutes,
            )
        logger.info("magic_link_authenticated", session_duration_minutes=session_duration_minutes)
        return MagicLinkAuthResult(
            session_token=response.session_token,
            principal=_user_principal(response.user_id, response.user),
        )

    def authenticate_session(self, session_token: str) -> SessionAuthResult:
        with provider_call("sessions.authenticate"):
            response = self.client.sessions.authenticate(session_token=session_token)
        session = response.session
        return SessionAuthResult(
            session_token=response.session_token,
            principal=_user_principal(session.user_id, response.user),
            expires_at=_to_datetime(session.expires_at),
        )

    def revoke_session(self, session_token: str) -> RevokeResult:
        with provider_call("sessions.revoke"):
            response = self.client.sessions.revoke(session_token=session_token)
        logger.info("session_revoked")
        return RevokeResult(request_id=response.request_id)

    def fetch_principal(
        self, email: str, *, organization_id: str | None = None
    ) -> Principal | None:
        query = {
            "operator": "AND",
            "operands": [{"filter_name": "email_address", "filter_value": [email]}],
        }
        with provider_call("users.search"):
            response = self.client.users.search(query=query, limit=1)
        if not response.results:
            return None
        user = response.results[0]
        return _user_principal(user.user_id, user)


# --- B2B project (tenant mode) ---


def _member_principal(member: Any, organization_id: str) -> Principal:
    """Build a Principal from a Stytch B2B Member."""
    return Principal(
        principal_id=member.member_id,
        organization_id=organization_id,
        email=member.email_address or None,
        name=member.name or None,
    )


class StytchB2BProvider:
    """Adapter for a Stytch B2B project. Principals are organization members."""

    def __init__(self, client: stytch.B2BClient) -> None:
        self.client = client

    def send_magic_link(
        self,
        email: str,
        *,
        redirect_url: str | None = None,
        organization_id: str | None = None,
        locale: str | None = None,
    ) -> MagicLinkSendResult:
        if not organization_id:
            raise ValueError("organization_id is required for B2B magic links")
        with provider_call("magic_links.email.login_or_signup"):
            response = self.client.magic_links.email.login_or_signup(
                organization_id=organization_id,
                email_address=email,
                **_optional_kwargs(login_redirect_url=redirect_url, locale=locale),
            )
        logger.info(
            "magic_link_sent",
            redirect_url=redirect_url,
            locale=locale,
            **{"organization.id": organization_id},
        )
        return MagicLinkSendResult(request_id=response.request_id)

    def authenticate_magic_link(
        self, token: str, *, session_duration_minutes: int
    ) -> MagicLinkAuthResult:
        with provider_call("magic_links.authenticate"):
            response = self.client.magic_links.authenticate(
                magic_links_token=token,
                session_duration_minutes=session_duration_minutes,
            )
        logger.info("magic_link_authenticated", session_duration_minutes=session_duration_minutes)
        return MagicLinkAuthResult(
            session_token=response.session_token,
            principal=_member_principal(response.member, response.organization_id),
        )

    def authenticate_session(self, session_token: str) -> SessionAuthResult:
        with provider_call("sessions.authenticate"):
            response = self.client.sessions.authenticate(session_token=session_token)
        member_session = response.member_session
        return SessionAuthResult(
            session_token=response.session_token,
            principal=_member_principal(response.member, member_session.organization_id),
            expires_at=_to_datetime(member_session.expires_at),
        )

    def revoke_session(self, session_token: str) -> RevokeResult:
        with provider_call("sessions.revoke"):
            response = self.client.sessions.revoke(session_token=session_token)
        logger.info("session_revoked")
        return RevokeResult(request_id=response.request_id)

    def fetch_principal(
        self, email: str, *, organization_id: str | None = None
    ) -> Principal | None:
        if not organization_id:
            raise ValueError("organization_id is required for B2B member lookup")
        with provider_call("organizations.members.get"):
            try:
                response = self.client.organizations.members.get(
                    organization_id=organization_id,
                    email_address=email,
                )
            except StytchError as e:
                if e.details.error_type == MEMBER_NOT_FOUND:
                    return None
                raise
        return _member_principal(response.member, organization_id)


# --- Missing credentials ---


class UnconfiguredProvider:
    """Stand-in used when Stytch credentials are missing. Every call fails fast."""

    def _fail(self) -> ProviderNotConfiguredError:
        return ProviderNotConfiguredError("Stytch credentials are not configured")

    def send_magic_link(
        self,
        email: str,
        *,
        redirect_url: str | None = None,
        organization_id: str | None = None,
        locale: str | None = None,
    ) -> MagicLinkSendResult:
        raise self._fail()

    def authenticate_magic_link(
        self, token: str, *, session_duration_minutes: int
    ) -> MagicLinkAuthResult:
        raise self._fail()

    def authenticate_session(self, session_token: str) -> SessionAuthResult:
        raise self._fail()

    def revoke_session(self, session_token: str) -> RevokeResult:
        raise self._fail()

    def fetch_principal(
        self, email: str, *, organization_id: str | None = None
    ) -> Principal | None:
        raise self._fail()


def build_provider(project_id: str, secret: str, *, tenant_mode: bool = False) -> IdentityProvider:
    """
    Build the provider adapter for the given credentials.

    Args:
        project_id: Stytch project ID.
        secret: Stytch project secret.
        tenant_mode: Use the B2B client (organization members) instead of consumer users.

    Returns:
        A Stytch adapter, or UnconfiguredProvider when either credential is blank.
    """
    if not project_id or not secret:
        logger.warning("stytch_not_configured")
        return UnconfiguredProvider()

    if tenant_mode:
        return StytchB2BProvider(stytch.B2BClient(project_id=project_id, secret=secret))
    return StytchProvider(stytch.Client(project_id=project_id, secret=secret))
