"""Same-origin brokerage API proxy.

Browsers cannot call the brokerage API directly (no CORS). This router
forwards `/api/{path}` to `{upstream_api_base_url}/{path}` with the method,
query string, body and `Authorization` header preserved, and returns the
upstream status, body and content type unchanged.

Clients pointed at this proxy (`T212_USE_DEV_PROXY=true`) use
`T212_DEV_API_PROXY_URL` as their base URL.
"""

import httpx
import structlog
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from t212_dashboard.core.config import settings
from t212_dashboard.core.constants import USER_AGENT
from t212_dashboard.presentation.routers.cors import cors_headers, preflight_response

logger = structlog.get_logger(__name__)

BODYLESS_METHODS = frozenset({"GET", "HEAD"})

api_proxy_router = APIRouter(prefix="/api", tags=["Proxy"])


def upstream_url(path: str, query: str) -> str:
    url = f"{settings.upstream_api_base_url}/{path.lstrip('/')}"
    return f"{url}?{query}" if query else url


@api_proxy_router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
)
async def proxy_api(path: str, request: Request) -> Response:
    """Forward one request to the brokerage API.

    Returns:
        Response: Upstream status/body/content type plus CORS headers;
            200 for preflight; 500 `{"error": "Proxy error"}` when the
            upstream cannot be reached.
    """
    if request.method == "OPTIONS":
        return preflight_response()

    url = upstream_url(path, request.url.query)
    headers = {
        "Authorization": request.headers.get("authorization", ""),
        "Content-Type": request.headers.get("content-type", "application/json"),
        "User-Agent": USER_AGENT,
    }
    body = None if request.method in BODYLESS_METHODS else await request.body()

    try:
        async with httpx.AsyncClient(
            timeout=settings.provider_timeout_seconds
        ) as client:
            upstream = await client.request(
                request.method,
                url,
                headers=headers,
                content=body,
            )
    except httpx.HTTPError as e:
        logger.warning(
            "api_proxy_upstream_failed",
            method=request.method,
            path=path,
            error=str(e),
            error_type=type(e).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Proxy error", "message": str(e) or type(e).__name__},
            headers=cors_headers(),
        )

    logger.debug(
        "api_proxy_forwarded",
        method=request.method,
        path=path,
        status_code=upstream.status_code,
    )
    response_headers = cors_headers()
    content_type = upstream.headers.get("content-type")
    if content_type:
        response_headers["Content-Type"] = content_type
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=response_headers,
    )
