"""Brokerage client factories.

Clients hold no connections (one `httpx.AsyncClient` per request), so they
are cheap application-scoped singletons.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from t212_dashboard.core.config import settings

if TYPE_CHECKING:
    from t212_dashboard.infrastructure.providers.trading212 import (
        CsvParser,
        CsvProxyFetcher,
        Trading212AccountAPI,
        Trading212ExportsAPI,
    )


@lru_cache()
def get_exports_api() -> "Trading212ExportsAPI":
    """Export endpoints, routed through the dev proxy when enabled."""
    from t212_dashboard.infrastructure.providers.trading212 import Trading212ExportsAPI

    return Trading212ExportsAPI(
        base_url=settings.broker_api_base_url,
        timeout=settings.provider_timeout_seconds,
    )


@lru_cache()
def get_account_api() -> "Trading212AccountAPI":
    from t212_dashboard.infrastructure.providers.trading212 import Trading212AccountAPI

    return Trading212AccountAPI(
        base_url=settings.broker_api_base_url,
        timeout=settings.provider_timeout_seconds,
    )


@lru_cache()
def get_csv_fetcher() -> "CsvProxyFetcher":
    from t212_dashboard.infrastructure.providers.trading212 import CsvProxyFetcher

    return CsvProxyFetcher(
        proxy_base_url=settings.csv_proxy_base_url,
        proxy_prefix=settings.csv_proxy_prefix,
        timeout=settings.provider_timeout_seconds,
    )


@lru_cache()
def get_csv_parser() -> "CsvParser":
    from t212_dashboard.infrastructure.providers.trading212 import CsvParser

    return CsvParser()
