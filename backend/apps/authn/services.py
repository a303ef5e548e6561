"""
Authentication dispatcher.

Orchestrates the public auth operations: login, authenticate (magic link or
session), magic link callback, logout, current principal and validation.
Provider failures are caught here and re-raised as AuthError subclasses
with generic messages; the provider's own error details only reach the logs.
"""

from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings

from apps.authn.cookies import SessionCookiePolicy
from apps.authn.exceptions import (
    BadRequestError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderUnavailableError,
    ProviderUnreachableError,
    UnauthorizedError,
)
from apps.authn.flows import AuthFlow, classify, is_declared, normalize_flow_type
from apps.authn.provider import IdentityProvider, build_provider
from apps.authn.schemas import LoginRequest
from apps.authn.sessions import SessionInfo, assemble
from apps.core.logging import bind_contextvars, get_logger

logger = get_logger(__name__)

PROVIDER_UNAVAILABLE_MESSAGE = "Authentication provider is unavailable"
PROVIDER_NOT_CONFIGURED_MESSAGE = "Authentication provider is not configured"
NO_CREDENTIAL_MESSAGE = "No authorization header or cookie provided"


@dataclass(frozen=True)
class LoginResult:
    success: bool
    message: str
    request_id: str


@dataclass(frozen=True)
class LogoutResult:
    success: bool
    message: str


def _unavailable(error: ProviderError) -> ProviderUnavailableError | None:
    """Map configuration/transport failures; None for provider rejections."""
    if isinstance(error, ProviderNotConfiguredError):
        return ProviderUnavailableError(PROVIDER_NOT_CONFIGURED_MESSAGE)
    if isinstance(error, ProviderUnreachableError):
        return ProviderUnavailableError(PROVIDER_UNAVAILABLE_MESSAGE)
    return None


class AuthDispatcher:
    """
    Entry point for all authentication operations.

    Holds no per-request state. Built once at startup with an explicitly
    constructed provider adapter and cookie policy.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        cookies: SessionCookiePolicy,
        *,
        session_duration: timedelta = timedelta(days=30),
        redirect_url: str | None = None,
        tenant_mode: bool = False,
        require_existing_user: bool = True,
    ) -> None:
        self.provider = provider
        self.cookies = cookies
        self.session_duration = session_duration
        self.redirect_url = redirect_url or None
        self.tenant_mode = tenant_mode
        self.require_existing_user = require_existing_user

    @property
    def session_duration_minutes(self) -> int:
        return int(self.session_duration.total_seconds() // 60)

    # --- Login ---

    def initiate_login(self, request: LoginRequest) -> LoginResult:
        """
        Send a magic link to the given e-mail address.

        In tenant mode the login is scoped to ``organization_id``, which is
        then required. Unknown e-mail addresses are refused when
        ``require_existing_user`` is set.

        Raises:
            BadRequestError: Tenant mode without organization_id
            UnauthorizedError: Unknown e-mail or Stytch refused to send
            ProviderUnavailableError: Stytch not configured or unreachable
        """
        if self.tenant_mode and not request.organization_id:
            raise BadRequestError("organization_id is required")

        email = str(request.email)
        organization_id = request.organization_id if self.tenant_mode else None
        locale = request.locale.value if request.locale else None

        try:
            if self.require_existing_user:
                principal = self.provider.fetch_principal(email, organization_id=organization_id)
                if principal is None:
                    logger.warning("login_unknown_email", email_domain=email.rpartition("@")[2])
                    raise UnauthorizedError("Failed to send magic link")

            result = self.provider.send_magic_link(
                email,
                redirect_url=self.redirect_url,
                organization_id=organization_id,
                locale=locale,
            )
        except ProviderError as e:
            logger.error("login_initiation_failed", error=str(e))
            raise _unavailable(e) or UnauthorizedError("Failed to send magic link") from e

        return LoginResult(
            success=True,
            message="Magic link sent successfully",
            request_id=result.request_id,
        )

    # --- Authenticate ---

    def authenticate(self, token: str, declared_type: str | None = None) -> SessionInfo:
        """
        Authenticate a magic link token or re-validate a session token.

        An explicit but unrecognized ``declared_type`` is rejected rather
        than guessed; a missing one falls back to token-prefix detection.

        Raises:
            BadRequestError: Empty token or unrecognized type
            UnauthorizedError: Stytch rejected the token
            ProviderUnavailableError: Stytch not configured or unreachable
        """
        if not token or not token.strip():
            raise BadRequestError("token is required")
        if is_declared(declared_type) and normalize_flow_type(declared_type) is None:
            raise BadRequestError("Invalid authentication type. Expected magic_link or session.")

        flow = classify(token, declared_type)
        logger.debug("auth_flow_classified", flow=flow.value, declared_type=declared_type)

        if flow is AuthFlow.MAGIC_LINK:
            return self.authenticate_magic_link(token)
        return self.validate_session_token(token)

    def authenticate_callback(self, token: str | None) -> SessionInfo:
        """
        Redeem the token a magic link redirect carries in its query string.

        Raises:
            BadRequestError: Token missing from the query string
        """
        if not token:
            raise BadRequestError("Missing stytch_token in query parameters")
        return self.authenticate_magic_link(token)

    def authenticate_magic_link(self, token: str) -> SessionInfo:
        try:
            result = self.provider.authenticate_magic_link(
                token, session_duration_minutes=self.session_duration_minutes
            )
        except ProviderError as e:
            logger.error("magic_link_authentication_failed", error=str(e))
            raise _unavailable(e) or UnauthorizedError("Invalid or expired magic link") from e

        session = assemble(result, AuthFlow.MAGIC_LINK, session_duration=self.session_duration)
        self._bind_principal(session)
        return session

    def validate_session_token(self, session_token: str) -> SessionInfo:
        """Re-validate a session with Stytch. Never trusts a previous result."""
        try:
            result = self.provider.authenticate_session(session_token)
        except ProviderError as e:
            logger.warning("session_validation_failed", error=str(e))
            raise _unavailable(e) or UnauthorizedError("Invalid or expired session") from e

        session = assemble(
            result,
            AuthFlow.SESSION,
            session_duration=self.session_duration,
            presented_token=session_token,
        )
        self._bind_principal(session)
        return session

    # --- Protected operations ---

    def logout(self, credential: str | None) -> LogoutResult:
        """
        Revoke the session behind ``credential``.

        Raises:
            UnauthorizedError: No credential, or Stytch refused the revocation
            ProviderUnavailableError: Stytch not configured or unreachable
        """
        session_token = self._require_credential(credential)
        try:
            self.provider.revoke_session(session_token)
        except ProviderError as e:
            logger.error("logout_failed", error=str(e))
            raise _unavailable(e) or UnauthorizedError("Failed to revoke session") from e

        return LogoutResult(success=True, message="Session revoked successfully")

    def get_current_principal(self, credential: str | None) -> SessionInfo:
        """Who is behind ``credential``. Same checks as validate_session."""
        return self.validate_session(credential)

    def validate_session(self, credential: str | None) -> SessionInfo:
        """
        Validate ``credential`` against Stytch.

        Raises:
            UnauthorizedError: No credential, or invalid/expired session
            ProviderUnavailableError: Stytch not configured or unreachable
        """
        return self.validate_session_token(self._require_credential(credential))

    def _require_credential(self, credential: str | None) -> str:
        if not credential:
            raise UnauthorizedError(NO_CREDENTIAL_MESSAGE)
        return credential

    def _bind_principal(self, session: SessionInfo) -> None:
        context = {"usr.id": session.user_id}
        if session.organization_id:
            context["organization.id"] = session.organization_id
        bind_contextvars(**context)


def build_dispatcher() -> AuthDispatcher:
    """Build the dispatcher from Django settings."""
    provider = build_provider(
        settings.STYTCH_PROJECT_ID,
        settings.STYTCH_SECRET,
        tenant_mode=settings.STYTCH_TENANT_MODE,
    )
    cookies = SessionCookiePolicy(
        name=settings.AUTH_SESSION_COOKIE_NAME,
        production=settings.AUTH_PRODUCTION_MODE,
    )
    return AuthDispatcher(
        provider,
        cookies,
        session_duration=timedelta(minutes=settings.AUTH_SESSION_DURATION_MINUTES),
        redirect_url=settings.FRONTEND_URL,
        tenant_mode=settings.STYTCH_TENANT_MODE,
        require_existing_user=settings.AUTH_REQUIRE_EXISTING_USER,
    )
