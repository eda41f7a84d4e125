"""Domain errors.

Usage:
    from t212_dashboard.domain.errors import (
        ProviderError,
        ProviderRateLimitError,
        CsvParseError,
    )
"""

from t212_dashboard.domain.errors.csv_error import CsvParseError
from t212_dashboard.domain.errors.export_error import ExportRunInProgressError
from t212_dashboard.domain.errors.provider_error import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
    ProxyFetchError,
)

__all__ = [
    "CsvParseError",
    "ExportRunInProgressError",
    "ProviderAuthenticationError",
    "ProviderError",
    "ProviderInvalidResponseError",
    "ProviderRateLimitError",
    "ProviderUnavailableError",
    "ProxyFetchError",
]
