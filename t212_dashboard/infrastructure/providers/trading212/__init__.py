"""Trading212 provider adapters.

Public API:
    - Trading212ExportsAPI: history export endpoints
    - Trading212AccountAPI: account cash endpoint
    - CsvProxyFetcher: CSV download through the same-origin proxy
    - CsvParser: export CSV parsing
"""

from t212_dashboard.infrastructure.providers.trading212.api import (
    Trading212AccountAPI,
    Trading212ExportsAPI,
)
from t212_dashboard.infrastructure.providers.trading212.csv_proxy_fetcher import (
    CsvProxyFetcher,
)
from t212_dashboard.infrastructure.providers.trading212.parsers import CsvParser

__all__ = [
    "CsvParser",
    "CsvProxyFetcher",
    "Trading212AccountAPI",
    "Trading212ExportsAPI",
]
