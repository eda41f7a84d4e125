"""CsvFetcherProtocol: download export CSV payloads (port)."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from t212_dashboard.core.result import Result
    from t212_dashboard.domain.errors import ProviderError


class CsvFetcherProtocol(Protocol):
    """Fetch the CSV text behind an export download link."""

    async def fetch_csv(self, download_link: str) -> "Result[str, ProviderError]":
        """Download one CSV payload (single attempt, no retries).

        Returns:
            Success(str): Raw CSV text.
            Failure(ProxyFetchError): Non-2xx answer.
            Failure(ProviderUnavailableError): Network failure.
        """
        ...
