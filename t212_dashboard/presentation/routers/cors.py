"""CORS headers shared by the proxy routers.

Every proxy response carries the same permissive headers; preflight
responses add a one-day max age.
"""

from fastapi import Response

from t212_dashboard.core.config import settings

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOWED_HEADERS = "Origin, X-Requested-With, Content-Type, Accept, Authorization"
PREFLIGHT_MAX_AGE_SECONDS = 86_400


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


def preflight_response() -> Response:
    """200 answer to an `OPTIONS` preflight."""
    return Response(
        status_code=200,
        headers={
            **cors_headers(),
            "Access-Control-Max-Age": str(PREFLIGHT_MAX_AGE_SECONDS),
        },
    )
