"""
Auth API endpoints.

Handles the Stytch magic link and session flows:
- Magic link send, authenticate and redirect callback
- Session validation, current principal and logout

The session token is returned to the browser as an HttpOnly cookie; it is
also accepted back as a Bearer token.
"""

from django.apps import apps as django_apps
from django.http import HttpRequest, HttpResponse
from ninja import Router
from ninja.errors import HttpError

from apps.authn.exceptions import AuthError
from apps.authn.schemas import (
    AuthenticateRequest,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    UserPayload,
    ValidateResponse,
)
from apps.authn.services import AuthDispatcher
from apps.core.logging import get_logger
from apps.core.security import SessionCredentialAuth

logger = get_logger(__name__)

router = Router(tags=["auth"])
session_auth = SessionCredentialAuth()


def get_dispatcher() -> AuthDispatcher:
    """Dispatcher built at startup by AuthnConfig."""
    return django_apps.get_app_config("authn").dispatcher  # type: ignore[attr-defined]


def _http_error(error: AuthError) -> HttpError:
    return HttpError(error.status_code, str(error))


@router.post(
    "/login",
    response={200: LoginResponse, 400: ErrorResponse, 401: ErrorResponse, 503: ErrorResponse},
    operation_id="login",
    summary="Initiate login with email",
)
def login(request: HttpRequest, payload: LoginRequest) -> LoginResponse:
    """Send a magic link to the user's e-mail address."""
    try:
        result = get_dispatcher().initiate_login(payload)
    except AuthError as e:
        raise _http_error(e) from None

    return LoginResponse(success=result.success, message=result.message, request_id=result.request_id)


@router.post(
    "/authenticate",
    response={200: UserPayload, 400: ErrorResponse, 401: ErrorResponse, 503: ErrorResponse},
    operation_id="authenticate",
    summary="Authenticate with magic link or session token",
)
def authenticate(
    request: HttpRequest, payload: AuthenticateRequest, response: HttpResponse
) -> UserPayload:
    """
    Authenticate a magic link token or an existing session token.

    Sets the session cookie on success.
    """
    dispatcher = get_dispatcher()
    try:
        session = dispatcher.authenticate(payload.token, payload.type)
    except AuthError as e:
        raise _http_error(e) from None

    dispatcher.cookies.set_session(response, session)
    return UserPayload.from_session(session)


@router.get(
    "/callback",
    response={200: UserPayload, 400: ErrorResponse, 401: ErrorResponse, 503: ErrorResponse},
    operation_id="magicLinkCallback",
    summary="Magic link callback (consumes stytch_token query param)",
)
def magic_link_callback(
    request: HttpRequest, response: HttpResponse, stytch_token: str | None = None
) -> UserPayload:
    """Redirect target of the magic link e-mail. Sets the session cookie on success."""
    dispatcher = get_dispatcher()
    try:
        session = dispatcher.authenticate_callback(stytch_token)
    except AuthError as e:
        raise _http_error(e) from None

    dispatcher.cookies.set_session(response, session)
    return UserPayload.from_session(session)


@router.post(
    "/logout",
    response={200: MessageResponse, 401: ErrorResponse, 503: ErrorResponse},
    auth=session_auth,
    operation_id="logout",
    summary="Logout and revoke session",
)
def logout(request: HttpRequest, response: HttpResponse) -> MessageResponse:
    """Revoke the current session and clear the session cookie."""
    dispatcher = get_dispatcher()
    try:
        result = dispatcher.logout(request.auth)  # type: ignore[attr-defined]
    except AuthError as e:
        raise _http_error(e) from None

    dispatcher.cookies.clear_session(response)
    return MessageResponse(success=result.success, message=result.message)


@router.get(
    "/me",
    response={200: UserPayload, 401: ErrorResponse, 503: ErrorResponse},
    auth=session_auth,
    operation_id="getCurrentUser",
    summary="Get current user information",
)
def get_me(request: HttpRequest) -> UserPayload:
    """Principal behind the current session, re-validated with Stytch."""
    try:
        session = get_dispatcher().get_current_principal(request.auth)  # type: ignore[attr-defined]
    except AuthError as e:
        raise _http_error(e) from None

    return UserPayload.from_session(session)


@router.get(
    "/validate",
    response={200: ValidateResponse, 401: ErrorResponse, 503: ErrorResponse},
    auth=session_auth,
    operation_id="validateSession",
    summary="Validate session token",
)
def validate_session(request: HttpRequest) -> ValidateResponse:
    """Check that the current session is still valid."""
    try:
        session = get_dispatcher().validate_session(request.auth)  # type: ignore[attr-defined]
    except AuthError as e:
        logger.info("session_invalid", reason=str(e))
        raise _http_error(e) from None

    return ValidateResponse(
        valid=True,
        user=UserPayload.from_session(session),
        expires_at=session.expires_at,
    )
