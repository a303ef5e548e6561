"""
Exceptions for the authn app.

Two families: ``AuthError`` is what callers of the dispatcher see and maps
one-to-one onto an HTTP status. ``ProviderError`` is raised only by the
provider adapter and never leaves the dispatcher.
"""


class AuthError(Exception):
    """Base exception for authentication errors surfaced to clients."""

    status_code = 500


class BadRequestError(AuthError):
    """Structurally invalid input, decided locally."""

    status_code = 400


class UnauthorizedError(AuthError):
    """Missing credential, or credential rejected by the provider."""

    status_code = 401


class ProviderUnavailableError(AuthError):
    """Identity provider not configured or unreachable."""

    status_code = 503


class ProviderError(Exception):
    """Base exception for identity provider call failures."""

    pass


class ProviderRejectedError(ProviderError):
    """Provider answered the call with an error (invalid token, unknown user...)."""

    def __init__(
        self,
        message: str,
        *,
        error_type: str | None = None,
        status_code: int | None = None,
        request_id: str | None = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.status_code = status_code
        self.request_id = request_id


class ProviderNotConfiguredError(ProviderError):
    """Provider credentials are missing."""

    pass


class ProviderUnreachableError(ProviderError):
    """Provider could not be reached (network failure, timeout)."""

    pass
