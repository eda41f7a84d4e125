"""Queries (side-effect free reads)."""

from t212_dashboard.application.queries.account_queries import GetAccountSnapshot
from t212_dashboard.application.queries.analytics_queries import (
    GetPortfolioAnalytics,
)

__all__ = [
    "GetAccountSnapshot",
    "GetPortfolioAnalytics",
]
