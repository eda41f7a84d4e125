"""Trading212 REST API clients."""

from t212_dashboard.infrastructure.providers.trading212.api.account_api import (
    Trading212AccountAPI,
)
from t212_dashboard.infrastructure.providers.trading212.api.exports_api import (
    Trading212ExportsAPI,
)

__all__ = [
    "Trading212AccountAPI",
    "Trading212ExportsAPI",
]
