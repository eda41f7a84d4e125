"""ExportClientProtocol: brokerage history-export endpoints (port).

Implementations:
    - Trading212ExportsAPI: t212_dashboard/infrastructure/providers/trading212/api/exports_api.py

Failure contract (no retries inside the client):
    - 429 → ProviderRateLimitError (retry_after from the Retry-After header)
    - 401/403 → ProviderAuthenticationError
    - timeout/connection error/5xx → ProviderUnavailableError
    - malformed JSON or unexpected status → ProviderInvalidResponseError
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from t212_dashboard.core.result import Result
    from t212_dashboard.domain.entities import ExportDescriptor
    from t212_dashboard.domain.errors import ProviderError
    from t212_dashboard.domain.value_objects import ExportRequest


class ExportClientProtocol(Protocol):
    """Create and list history export jobs."""

    async def request_export(
        self,
        credential: str,
        request: "ExportRequest",
    ) -> "Result[str, ProviderError]":
        """Create an export job.

        Returns:
            Success(str): The new job's report id.
            Failure(ProviderError): See module docstring.
        """
        ...

    async def list_exports(
        self,
        credential: str,
    ) -> "Result[list[ExportDescriptor], ProviderError]":
        """List every export job known for the account."""
        ...
