"""Trading212 history exports API client.

Endpoints:
    POST /equity/history/exports - Create an export job → {"reportId": int}
    GET  /equity/history/exports - List export jobs

The client never retries; backoff belongs to the orchestrator.
"""

import structlog

from t212_dashboard.core.constants import (
    EXPORTS_PATH,
    PROVIDER_NAME,
    PROVIDER_TIMEOUT_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
)
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.entities import ExportDescriptor
from t212_dashboard.domain.errors import ProviderError, ProviderInvalidResponseError
from t212_dashboard.domain.value_objects import ExportRequest
from t212_dashboard.infrastructure.providers.base_api_client import (
    BaseProviderAPIClient,
)
from t212_dashboard.infrastructure.providers.trading212.mappers import (
    Trading212ExportMapper,
)

logger = structlog.get_logger(__name__)


class Trading212ExportsAPI(BaseProviderAPIClient):
    """HTTP client for the history export endpoints.

    Implements ExportClientProtocol.

    Example:
        >>> api = Trading212ExportsAPI(base_url="https://live.trading212.com/api/v0")
        >>> result = await api.request_export(api_key, ExportRequest.for_year(2023, now))
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
        mapper: Trading212ExportMapper | None = None,
    ) -> None:
        super().__init__(base_url=base_url, provider_name=PROVIDER_NAME, timeout=timeout)
        self._mapper = mapper or Trading212ExportMapper()

    async def request_export(
        self,
        credential: str,
        request: ExportRequest,
    ) -> Result[str, ProviderError]:
        """Create an export job.

        Args:
            credential: Brokerage API key.
            request: Range and data categories.

        Returns:
            Success(str): Report id of the created job.
            Failure(ProviderRateLimitError): HTTP 429.
            Failure(ProviderAuthenticationError): HTTP 401/403.
            Failure(ProviderError): Transport or response errors.
        """
        payload = request.to_payload()
        logger.debug(
            "trading212_export_requested",
            time_from=payload["timeFrom"],
            time_to=payload["timeTo"],
        )
        result = await self._execute_and_parse_object(
            method="POST",
            path=EXPORTS_PATH,
            headers={
                **self._build_headers(credential),
                "Content-Type": "application/json",
            },
            json_data=payload,
            operation="request_export",
        )
        if isinstance(result, Failure):
            return result

        report_id = result.value.get("reportId")
        if report_id is None or report_id == "":
            logger.warning(
                "trading212_export_response_missing_report_id",
                keys=sorted(result.value.keys()),
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message="Export response did not include a reportId",
                    provider_name=self._provider_name,
                    response_body=str(result.value)[:RESPONSE_BODY_MAX_LENGTH],
                )
            )
        return Success(value=str(report_id))

    async def list_exports(
        self,
        credential: str,
    ) -> Result[list[ExportDescriptor], ProviderError]:
        """List every export job of the account.

        Returns:
            Success(list[ExportDescriptor]): Listing order preserved;
                items without a reportId are dropped.
            Failure(ProviderError): See `request_export`.
        """
        result = await self._execute_and_parse_list(
            method="GET",
            path=EXPORTS_PATH,
            headers=self._build_headers(credential),
            operation="list_exports",
        )
        if isinstance(result, Failure):
            return result
        return Success(value=self._mapper.map_exports(result.value))
