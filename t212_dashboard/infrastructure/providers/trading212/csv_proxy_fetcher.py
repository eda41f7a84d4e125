"""CSV download through the same-origin proxy.

Export download links point at the brokerage's object-storage host, which
does not allow cross-origin reads. Links are rewritten onto the CSV proxy:

    https://<storage-host>/<key>.csv?X-Amz-Signature=...
        → <proxy-base>/csv-proxy/<key>.csv?X-Amz-Signature=...

Path and query are carried over byte for byte so pre-signed URLs stay valid.
"""

import httpx
import structlog

from t212_dashboard.core.constants import (
    CSV_ACCEPT_HEADER,
    PROVIDER_NAME,
    PROVIDER_TIMEOUT_DEFAULT,
)
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.errors import (
    ProviderError,
    ProviderUnavailableError,
    ProxyFetchError,
)

logger = structlog.get_logger(__name__)


class CsvProxyFetcher:
    """Fetch export CSV text via the CSV proxy endpoint.

    Implements CsvFetcherProtocol. Single attempt per call.

    Attributes:
        _proxy_base_url: Origin hosting the proxy (no trailing slash).
        _proxy_prefix: Proxy path prefix (e.g. "/csv-proxy").
        _timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        *,
        proxy_base_url: str,
        proxy_prefix: str = "/csv-proxy",
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        self._proxy_base_url = proxy_base_url.rstrip("/")
        self._proxy_prefix = "/" + proxy_prefix.strip("/")
        self._timeout = timeout

    def to_proxy_url(self, download_link: str) -> str:
        """Rewrite a storage URL onto the proxy, keeping path and query."""
        raw_path = httpx.URL(download_link).raw_path.decode("ascii")
        if not raw_path.startswith("/"):
            raw_path = "/" + raw_path
        return f"{self._proxy_base_url}{self._proxy_prefix}{raw_path}"

    async def fetch_csv(self, download_link: str) -> Result[str, ProviderError]:
        """Download one CSV payload.

        Args:
            download_link: Storage URL from a finished export descriptor.

        Returns:
            Success(str): Raw CSV text.
            Failure(ProxyFetchError): Proxy answered non-2xx.
            Failure(ProviderUnavailableError): Network failure or bad link.
        """
        try:
            url = self.to_proxy_url(download_link)
        except (httpx.InvalidURL, UnicodeError) as e:
            logger.warning("csv_proxy_invalid_link", error=str(e))
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.CSV_PROXY_FETCH_FAILED,
                    message=f"Invalid download link: {e}",
                    provider_name=PROVIDER_NAME,
                    is_transient=False,
                )
            )

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, headers={"Accept": CSV_ACCEPT_HEADER})
        except httpx.HTTPError as e:
            logger.warning(
                "csv_proxy_connection_error",
                error_type=type(e).__name__,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.CSV_PROXY_FETCH_FAILED,
                    message=f"CSV proxy request failed: {e}",
                    provider_name=PROVIDER_NAME,
                    is_transient=True,
                )
            )

        if not response.is_success:
            logger.warning(
                "csv_proxy_fetch_failed",
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )
            return Failure(
                error=ProxyFetchError(
                    code=ErrorCode.CSV_PROXY_FETCH_FAILED,
                    message=(
                        f"CSV proxy returned {response.status_code} "
                        f"{response.reason_phrase}".rstrip()
                    ),
                    provider_name=PROVIDER_NAME,
                    status_code=response.status_code,
                    status_text=response.reason_phrase,
                )
            )

        logger.debug("csv_proxy_fetch_succeeded", size=len(response.content))
        return Success(value=response.text)
