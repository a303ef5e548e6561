"""
Django Ninja API configuration.
"""

from django.http import HttpRequest
from ninja import NinjaAPI

from apps.authn.api import router as auth_router

api = NinjaAPI(
    title="Session Gateway API",
    version="1.0.0",
    description="Magic link login and session validation backed by Stytch.",
    openapi_extra={
        "tags": [
            {
                "name": "auth",
                "description": "Magic link authentication and session management",
            },
            {
                "name": "health",
                "description": "Service health checks",
            },
        ],
    },
)

api.add_router("/auth", auth_router)


@api.get("/health", tags=["health"], operation_id="healthCheck", summary="Health check")
def health_check(request: HttpRequest) -> dict:
    """Health check endpoint for load balancer."""
    return {"status": "ok"}
