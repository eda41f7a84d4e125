"""Base API client for brokerage HTTP communication.

Handles the parts every brokerage endpoint shares:
- HTTP request execution with timeout/connection error handling
- Response status code interpretation
- JSON parsing with type validation
- Structured logging with provider context

Subclasses only build the path, the body, and map the parsed JSON.

Architecture:
    - Infrastructure layer (adapter for the brokerage API)
    - Uses httpx for async HTTP, one AsyncClient per request
    - Returns Result types (no exceptions for expected failures)
"""

from typing import Any

import httpx
import structlog

from t212_dashboard.core.constants import (
    PROVIDER_TIMEOUT_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
)
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)


def parse_retry_after(value: str | None) -> int | None:
    """Parse a Retry-After header given in seconds.

    HTTP-date values and garbage yield None.
    """
    if not value:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


class BaseProviderAPIClient:
    """Base class for brokerage API clients with shared HTTP handling.

    The brokerage authenticates with an API key sent verbatim as the
    `Authorization` header value (no "Bearer" prefix).

    Attributes:
        _base_url: API base URL (without trailing slash).
        _provider_name: Provider identifier for logging and error messages.
        _timeout: HTTP request timeout in seconds.
        _logger: Structured logger with provider context.

    Example:
        >>> class Trading212AccountAPI(BaseProviderAPIClient):
        ...     async def get_account_cash(self, credential: str):
        ...         return await self._execute_and_parse_object(
        ...             method="GET",
        ...             path="/equity/account/cash",
        ...             headers=self._build_headers(credential),
        ...             operation="get_account_cash",
        ...         )
    """

    def __init__(
        self,
        *,
        base_url: str,
        provider_name: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize base provider API client.

        Args:
            base_url: API base URL (e.g. "https://live.trading212.com/api/v0").
            provider_name: Provider identifier (e.g. "trading212").
            timeout: HTTP request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._provider_name = provider_name
        self._timeout = timeout
        self._logger = structlog.get_logger(f"{provider_name}_api")

    def _build_headers(self, credential: str) -> dict[str, str]:
        return {
            "Authorization": credential,
            "Accept": "application/json",
        }

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[httpx.Response, ProviderError]:
        """Execute HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: URL path relative to base_url.
            headers: HTTP headers including authentication.
            params: Optional query parameters.
            json_data: Optional JSON body for POST requests.
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(ProviderUnavailableError): On timeout or connection error.
        """
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=params,
                    json=json_data,
                )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                f"{self._provider_name}_api_timeout",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._provider_name.title()} API request timed out",
                    provider_name=self._provider_name,
                    is_transient=True,
                    details={"operation": operation},
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                f"{self._provider_name}_api_connection_error",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"Failed to connect to {self._provider_name.title()} API: {e}",
                    provider_name=self._provider_name,
                    is_transient=True,
                    details={"operation": operation},
                )
            )

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[ProviderError] | None:
        """Check HTTP response for errors and return appropriate ProviderError.

        Args:
            response: HTTP response to check.
            operation: Operation name for logging.

        Returns:
            Failure(ProviderError) if error detected, None if response is OK.
        """
        status = response.status_code
        details = {"operation": operation, "status_code": status}

        if 200 <= status < 300:
            return None

        if status == 429:
            retry_seconds = parse_retry_after(response.headers.get("Retry-After"))
            self._logger.warning(
                f"{self._provider_name}_api_rate_limited",
                operation=operation,
                retry_after=retry_seconds,
            )
            return Failure(
                error=ProviderRateLimitError(
                    code=ErrorCode.PROVIDER_RATE_LIMITED,
                    message=f"{self._provider_name.title()} API rate limit exceeded",
                    provider_name=self._provider_name,
                    retry_after=retry_seconds,
                    details=details,
                )
            )

        if status == 401:
            self._logger.warning(
                f"{self._provider_name}_api_auth_failed",
                operation=operation,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=f"{self._provider_name.title()} API key is invalid",
                    provider_name=self._provider_name,
                    is_token_expired=True,
                    details=details,
                )
            )

        if status == 403:
            self._logger.warning(
                f"{self._provider_name}_api_forbidden",
                operation=operation,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message=(
                        f"{self._provider_name.title()} API key lacks permission "
                        f"for {operation}"
                    ),
                    provider_name=self._provider_name,
                    is_token_expired=False,
                    details=details,
                )
            )

        if status >= 500:
            self._logger.warning(
                f"{self._provider_name}_api_server_error",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"{self._provider_name.title()} API server error: {status}",
                    provider_name=self._provider_name,
                    is_transient=True,
                    retry_after=parse_retry_after(response.headers.get("Retry-After")),
                    details=details,
                )
            )

        self._logger.warning(
            f"{self._provider_name}_api_unexpected_status",
            operation=operation,
            status_code=status,
        )
        return Failure(
            error=ProviderInvalidResponseError(
                code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                message=f"Unexpected response from {self._provider_name.title()}: {status}",
                provider_name=self._provider_name,
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                details=details,
            )
        )

    def _decode_json(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[Any, ProviderError]:
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        try:
            return Success(value=response.json())
        except ValueError as e:
            self._logger.error(
                f"{self._provider_name}_api_invalid_json",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message=f"Invalid JSON response from {self._provider_name.title()}",
                    provider_name=self._provider_name,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                    details={"operation": operation},
                )
            )

    def _unexpected_format(
        self,
        response: httpx.Response,
        operation: str,
        expected: str,
        data: Any,
    ) -> Failure[ProviderError]:
        self._logger.warning(
            f"{self._provider_name}_api_unexpected_format",
            operation=operation,
            data_type=type(data).__name__,
        )
        return Failure(
            error=ProviderInvalidResponseError(
                code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                message=f"Expected {expected} response from {self._provider_name.title()}",
                provider_name=self._provider_name,
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                details={"operation": operation},
            )
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Parse response as JSON object with error handling.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(ProviderError): On HTTP error, invalid JSON or non-object.
        """
        decoded = self._decode_json(response, operation)
        if isinstance(decoded, Failure):
            return decoded

        data = decoded.value
        if not isinstance(data, dict):
            return self._unexpected_format(response, operation, "object", data)

        self._logger.debug(
            f"{self._provider_name}_api_succeeded",
            operation=operation,
        )
        return Success(value=data)

    def _parse_json_list(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """Parse response as JSON list of objects with error handling.

        Returns:
            Success(list[dict]): Parsed JSON list.
            Failure(ProviderError): On HTTP error, invalid JSON or non-list.
        """
        decoded = self._decode_json(response, operation)
        if isinstance(decoded, Failure):
            return decoded

        data = decoded.value
        if not isinstance(data, list):
            return self._unexpected_format(response, operation, "list", data)

        items = [item for item in data if isinstance(item, dict)]
        if len(items) != len(data):
            self._logger.warning(
                f"{self._provider_name}_api_non_object_items_dropped",
                operation=operation,
                dropped=len(data) - len(items),
            )

        self._logger.debug(
            f"{self._provider_name}_api_succeeded",
            operation=operation,
            count=len(items),
        )
        return Success(value=items)

    async def _execute_and_parse_object(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Execute request and parse response as JSON object."""
        result = await self._execute_request(
            method=method,
            path=path,
            headers=headers,
            params=params,
            json_data=json_data,
            operation=operation,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json_object(result.value, operation)

    async def _execute_and_parse_list(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """Execute request and parse response as JSON list."""
        result = await self._execute_request(
            method=method,
            path=path,
            headers=headers,
            params=params,
            json_data=json_data,
            operation=operation,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json_list(result.value, operation)
