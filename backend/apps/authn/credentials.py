"""
Credential extraction from request carriers.
"""

from apps.authn.constants import BEARER_PREFIX


def extract_credential(authorization: str | None, cookie_value: str | None) -> str | None:
    """
    Pull the raw session credential out of a request.

    The Authorization header always wins over the cookie. A single leading
    ``"Bearer "`` is stripped; a header without that prefix is used as-is.

    Args:
        authorization: Value of the Authorization header, if any.
        cookie_value: Value of the session cookie, if any.

    Returns:
        The credential string, or None when neither carrier has one.
    """
    if authorization:
        if authorization.startswith(BEARER_PREFIX):
            return authorization[len(BEARER_PREFIX) :]
        return authorization
    if cookie_value:
        return cookie_value
    return None
