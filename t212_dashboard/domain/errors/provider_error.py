"""Provider error types for the brokerage and CSV-download ports.

These errors are part of the client protocol contracts: they define the
failure cases the HTTP adapters return instead of raising.

Mapping to the failure taxonomy:
    - RateLimited: ProviderRateLimitError (HTTP 429)
    - AuthError: ProviderAuthenticationError (HTTP 401/403)
    - TransportError: ProviderUnavailableError (timeouts, connection
      errors, 5xx), ProviderInvalidResponseError (malformed JSON,
      unexpected status), ProxyFetchError (non-2xx from the CSV proxy)

Usage:
    from t212_dashboard.domain.errors import ProviderRateLimitError

    match result:
        case Failure(error=ProviderRateLimitError(retry_after=seconds)):
            await sleep(seconds or default_delay)
"""

from dataclasses import dataclass
from typing import Any

from t212_dashboard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderError(DomainError):
    """Base brokerage API error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        provider_name: Name of the provider ("trading212").
        details: Additional context (status code, operation).
    """

    provider_name: str
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderAuthenticationError(ProviderError):
    """Credential rejected by the brokerage (401/403).

    Never retried. Aborts an orchestration run immediately.

    Attributes:
        is_token_expired: True for 401 (credential invalid), False for 403
            (credential valid but lacks the required scope).
    """

    is_token_expired: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderUnavailableError(ProviderError):
    """Brokerage or proxy unreachable.

    Raised when:
    - The API returns 5xx errors
    - Connection timeout occurs
    - DNS resolution or TLS handshake fails

    Attributes:
        is_transient: Whether the error is likely transient.
        retry_after: Suggested retry delay in seconds (from provider).
    """

    is_transient: bool = True
    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderRateLimitError(ProviderError):
    """Brokerage rate limit exceeded (HTTP 429).

    Attributes:
        retry_after: Seconds to wait before retrying (from Retry-After header).
    """

    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInvalidResponseError(ProviderError):
    """Brokerage returned an invalid or unexpected response.

    Raised when:
    - Response JSON is malformed
    - Required fields (e.g. reportId) are missing
    - Status code is not one the client understands

    Attributes:
        response_body: Truncated raw response body for debugging.
    """

    response_body: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProxyFetchError(ProviderError):
    """CSV proxy answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the proxy.
        status_text: HTTP reason phrase returned by the proxy.
    """

    status_code: int
    status_text: str = ""
