"""
Authentication flow classification.

Decides whether a token should be redeemed as a magic link or validated as
an existing session. The declared type wins when it can be understood;
otherwise the token shape decides.
"""

import re
from enum import StrEnum

from apps.authn.constants import SESSION_TOKEN_PREFIX


class AuthFlow(StrEnum):
    MAGIC_LINK = "magic_link"
    SESSION = "session"


# Keys are declared types lowercased with "_" and "-" removed
_FLOW_ALIASES: dict[str, AuthFlow] = {
    "magiclink": AuthFlow.MAGIC_LINK,
    "session": AuthFlow.SESSION,
    "sessiontoken": AuthFlow.SESSION,
}

_SESSION_TOKEN_RE = re.compile(rf"^{re.escape(SESSION_TOKEN_PREFIX)}", re.IGNORECASE)


def is_declared(declared_type: str | None) -> bool:
    """True when the caller supplied a non-blank type."""
    return bool(declared_type and declared_type.strip())


def normalize_flow_type(declared_type: str | None) -> AuthFlow | None:
    """
    Map a free-form declared type onto a flow.

    Case-insensitive, ignores ``_`` and ``-``: ``MAGICLINK``, ``magic_link``
    and ``magic-link`` are all the magic link flow; ``session`` and
    ``session_token`` are the session flow.

    Returns:
        The flow, or None when the type is missing or not recognized.
    """
    if not is_declared(declared_type):
        return None
    key = declared_type.strip().lower().replace("_", "").replace("-", "")  # type: ignore[union-attr]
    return _FLOW_ALIASES.get(key)


def classify(token: str, declared_type: str | None = None) -> AuthFlow:
    """
    Classify a token into an authentication flow. Never raises.

    Falls back to the token prefix when the declared type is missing or
    unknown. Tokens starting with ``sess_`` (any case) are sessions,
    everything else is treated as a magic link token.
    """
    flow = normalize_flow_type(declared_type)
    if flow is not None:
        return flow
    if _SESSION_TOKEN_RE.match(token):
        return AuthFlow.SESSION
    return AuthFlow.MAGIC_LINK
