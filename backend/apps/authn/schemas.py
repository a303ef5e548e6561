"""
Auth API schemas - Pydantic models for request/response.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from apps.authn.constants import MagicLinkLocale
from apps.authn.sessions import SessionInfo

# --- Request Schemas ---


class LoginRequest(BaseModel):
    """Request to send a magic link email."""

    email: EmailStr = Field(
        ...,
        description="Email address of the user",
        examples=["user@example.com"],
    )
    organization_id: str | None = Field(
        None,
        description="Stytch organization ID. Required when the gateway runs in tenant mode.",
        examples=["organization-live-abc123..."],
    )
    locale: MagicLinkLocale | None = Field(
        None,
        description="Language of the magic link e-mail",
        examples=["en"],
    )


class AuthenticateRequest(BaseModel):
    """Request to authenticate a magic link token or an existing session token."""

    token: str = Field(
        ...,
        min_length=1,
        description="Authentication token (magic link token or session token)",
        examples=["DOYoip3rvIMMW2A7LRLI4M3EjcxZ..."],
    )
    type: str | None = Field(
        None,
        description=(
            "Type of authentication. Accepted values: magic_link, session "
            "(also magiclink, session_token; case-insensitive). "
            "Detected from the token when omitted."
        ),
        examples=["magic_link"],
    )


# --- Response Schemas ---


class LoginResponse(BaseModel):
    """Response after a magic link was sent."""

    success: bool = Field(..., description="Whether the magic link was sent")
    message: str = Field(..., description="Human-readable status message")
    request_id: str = Field(..., description="Stytch request ID for support lookups")


class MessageResponse(BaseModel):
    """Generic success response."""

    success: bool = Field(True, description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")


class UserPayload(BaseModel):
    """Authenticated principal and session expiry. The session token travels in the cookie."""

    user_id: str = Field(..., description="Stytch user ID (member ID in tenant mode)")
    organization_id: str | None = Field(None, description="Stytch organization ID (tenant mode)")
    email: str | None = Field(None, description="Principal's e-mail address")
    name: str | None = Field(None, description="Principal's name")
    expires_at: datetime = Field(..., description="Session expiry (UTC)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "user_id": "user-live-abc123...",
                "organization_id": None,
                "email": "user@example.com",
                "name": "Ada",
                "expires_at": "2026-11-18T12:00:00Z",
            }
        }
    }

    @classmethod
    def from_session(cls, session: SessionInfo) -> "UserPayload":
        return cls(
            user_id=session.user_id,
            organization_id=session.organization_id,
            email=session.email,
            name=session.name,
            expires_at=session.expires_at,
        )


class ValidateResponse(BaseModel):
    """Response for session validation."""

    valid: bool = Field(..., description="Always true; invalid sessions get a 401")
    user: UserPayload
    expires_at: datetime = Field(..., description="Session expiry (UTC)")


class ErrorResponse(BaseModel):
    """Standard error response format. Never carries provider error details."""

    detail: str = Field(..., description="Human-readable error message")

    model_config = {"json_schema_extra": {"example": {"detail": "Invalid or expired session"}}}
