"""
Session cookie handling.

Setting and clearing the cookie share one attribute builder. A clear whose
path/SameSite/Secure differ from those of the Set-Cookie is ignored by
browsers, leaving the old session cookie in place.
"""

from dataclasses import asdict, dataclass
from datetime import datetime

from django.http import HttpResponse
from django.utils import timezone

from apps.authn.sessions import SessionInfo
from apps.core.logging import get_logger

logger = get_logger(__name__)

EXPIRED = "Thu, 01 Jan 1970 00:00:00 GMT"


@dataclass(frozen=True)
class CookieAttributes:
    """Keyword arguments for ``HttpResponse.set_cookie``."""

    path: str
    httponly: bool
    secure: bool
    samesite: str
    max_age: int | None = None

    def as_kwargs(self) -> dict:
        kwargs = asdict(self)
        if self.max_age is None:
            del kwargs["max_age"]
        return kwargs


@dataclass(frozen=True)
class SessionCookiePolicy:
    """
    How the session travels back to the browser.

    Attributes:
        name: Cookie name
        production: Secure + SameSite=None (cross-site frontend over HTTPS)
            when True, SameSite=Lax over plain HTTP otherwise
    """

    name: str
    production: bool = False

    def _attributes(self, max_age: int | None = None) -> CookieAttributes:
        return CookieAttributes(
            path="/",
            httponly=True,
            secure=self.production,
            samesite="None" if self.production else "Lax",
            max_age=max_age,
        )

    def build_set_cookie(
        self, expires_at: datetime | None = None, *, now: datetime | None = None
    ) -> CookieAttributes:
        """Attributes for setting the cookie. No expiry means a browser-session cookie."""
        if expires_at is None:
            return self._attributes()
        now = now or timezone.now()
        max_age = max(0, int((expires_at - now).total_seconds()))
        return self._attributes(max_age=max_age)

    def build_clear_cookie(self) -> CookieAttributes:
        return self._attributes()

    def set_session(self, response: HttpResponse, session: SessionInfo) -> None:
        attributes = self.build_set_cookie(session.expires_at)
        logger.debug("session_cookie_set", max_age=attributes.max_age)
        response.set_cookie(self.name, session.session_token, **attributes.as_kwargs())

    def clear_session(self, response: HttpResponse) -> None:
        # Not delete_cookie(): it drops HttpOnly and derives Secure on its own
        response.set_cookie(
            self.name,
            "",
            expires=EXPIRED,
            **self.build_clear_cookie().as_kwargs(),
        )
