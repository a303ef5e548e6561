"""
Core middleware.
"""

from collections.abc import Callable
from uuid import UUID, uuid4

from django.http import HttpRequest, HttpResponse

from apps.core.logging import bind_contextvars, clear_contextvars

CORRELATION_ID_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware:
    """
    Attach a correlation ID to every request.

    Reuses a valid UUID from the X-Correlation-ID header or generates one,
    binds it into the structlog context and echoes it on the response.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = _parse_uuid(request.headers.get(CORRELATION_ID_HEADER)) or uuid4()
        request.correlation_id = correlation_id  # type: ignore[attr-defined]

        bind_contextvars(
            correlation_id=str(correlation_id),
            **{"http.method": request.method, "http.url_details.path": request.path},
        )
        try:
            response = self.get_response(request)
        finally:
            clear_contextvars()

        response[CORRELATION_ID_HEADER] = str(correlation_id)
        return response


def _parse_uuid(value: str | None) -> UUID | None:
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        return None
