"""Trading212 JSON → domain mappers."""

from t212_dashboard.infrastructure.providers.trading212.mappers.account_mapper import (
    Trading212AccountMapper,
)
from t212_dashboard.infrastructure.providers.trading212.mappers.export_mapper import (
    Trading212ExportMapper,
)

__all__ = [
    "Trading212AccountMapper",
    "Trading212ExportMapper",
]
