"""Same-origin CSV download proxy.

Export download links point at an object-storage host that does not allow
cross-origin reads. This router forwards GET requests to
`csv_storage_base_url` and returns the body as `text/csv`.

The object key is taken from, in order:
    1. the path after the prefix (`/csv-proxy/<key>?<signed query>`)
    2. the `path` query parameter (`/csv-proxy?path=<key or URL>`)
    3. the path of the `Referer` header

Keys arriving URL-encoded are decoded exactly once. Fully-qualified URLs
are accepted only when they point at the storage host.
"""

from urllib.parse import unquote, urlsplit

import httpx
import structlog
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from t212_dashboard.core.config import settings
from t212_dashboard.core.constants import USER_AGENT
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.errors import ValidationError
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.presentation.routers.cors import cors_headers, preflight_response

logger = structlog.get_logger(__name__)

CSV_MEDIA_TYPE = "text/csv"

csv_proxy_router = APIRouter(prefix=settings.csv_proxy_prefix, tags=["Proxy"])


def _segment(request: Request) -> tuple[str, str]:
    """Key from the raw URL path after the prefix, plus the raw query."""
    raw_path = request.scope.get("raw_path") or request.url.path.encode()
    path = raw_path.decode("latin-1").split("?", 1)[0]
    prefix = settings.csv_proxy_prefix
    if not path.startswith(prefix):
        return "", ""
    return unquote(path[len(prefix) :].lstrip("/")), request.url.query


def _from_referer(referer: str) -> tuple[str, str]:
    parts = urlsplit(referer)
    marker = f"{settings.csv_proxy_prefix}/"
    path = parts.path.split(marker, 1)[1] if marker in parts.path else parts.path
    return unquote(path.lstrip("/")), parts.query


def extract_target(request: Request) -> tuple[str, str]:
    """Pick the object key (decoded once) and the query to forward."""
    key, query = _segment(request)
    if key:
        return key, query
    param = request.query_params.get("path", "").strip()
    if param:
        return param, ""
    referer = request.headers.get("referer", "")
    if referer:
        return _from_referer(referer)
    return "", ""


def resolve_storage_url(target: str, query: str = "") -> Result[str, ValidationError]:
    """Build the storage URL for a decoded key or a storage-host URL.

    Returns:
        Success(str): Absolute storage URL.
        Failure(ValidationError): Empty key, unparsable URL, or a URL on
            another host.
    """
    target = target.strip()
    if not target:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_INPUT,
                message="No CSV path provided",
                field="path",
            )
        )

    if target.startswith(("http://", "https://")):
        try:
            requested_host = httpx.URL(target).host
        except httpx.InvalidURL as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message=f"Invalid CSV URL: {e}",
                    field="path",
                )
            )
        storage_host = httpx.URL(settings.csv_storage_base_url).host
        if requested_host != storage_host:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message=f"Host not allowed: {requested_host}",
                    field="path",
                    details={"host": requested_host},
                )
            )
        url = target
    else:
        url = f"{settings.csv_storage_base_url}/{target.lstrip('/')}"

    if query and "?" not in url:
        url = f"{url}?{query}"
    return Success(value=url)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": "CSV proxy error", "message": message},
        headers=cors_headers(),
    )


@csv_proxy_router.options("")
@csv_proxy_router.options("/{path:path}")
async def csv_proxy_preflight() -> Response:
    return preflight_response()


@csv_proxy_router.get("")
@csv_proxy_router.get("/{path:path}")
async def proxy_csv(request: Request) -> Response:
    """Download one export CSV from object storage.

    Returns:
        Response: Upstream status with the body as `text/csv`; 400 for a
            missing path or foreign host; 500 when storage is unreachable.
    """
    target, query = extract_target(request)
    resolved = resolve_storage_url(target, query)
    if isinstance(resolved, Failure):
        logger.warning("csv_proxy_rejected", reason=resolved.error.message)
        return _error(400, resolved.error.message)

    try:
        async with httpx.AsyncClient(
            timeout=settings.provider_timeout_seconds
        ) as client:
            upstream = await client.get(
                resolved.value, headers={"User-Agent": USER_AGENT}
            )
    except httpx.HTTPError as e:
        logger.warning(
            "csv_proxy_upstream_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        return _error(500, str(e) or type(e).__name__)

    logger.debug(
        "csv_proxy_forwarded",
        status_code=upstream.status_code,
        bytes=len(upstream.content),
    )
    return Response(
        content=upstream.text,
        status_code=upstream.status_code,
        media_type=CSV_MEDIA_TYPE,
        headers=cors_headers(),
    )
