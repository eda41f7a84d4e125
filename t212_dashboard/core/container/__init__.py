"""Composition root.

Wires settings, infrastructure adapters and application handlers into one
object graph. Nothing outside this package constructs adapters directly.

Usage:
    >>> from t212_dashboard.core.container import get_export_orchestrator
    >>> result = await get_export_orchestrator().handle(
    ...     RunYearlyExports(credential=api_key, start_year=2021)
    ... )
"""

from t212_dashboard.core.container.handlers import (
    get_account_snapshot_handler,
    get_export_orchestrator,
    get_export_status_poller,
    get_portfolio_analytics_handler,
    get_transaction_ingestor,
    get_verify_credential_handler,
)
from t212_dashboard.core.container.infrastructure import (
    get_event_bus,
    get_export_policy,
    get_logger,
)
from t212_dashboard.core.container.providers import (
    get_account_api,
    get_csv_fetcher,
    get_csv_parser,
    get_exports_api,
)

__all__ = [
    "get_account_api",
    "get_account_snapshot_handler",
    "get_csv_fetcher",
    "get_csv_parser",
    "get_event_bus",
    "get_export_orchestrator",
    "get_export_policy",
    "get_export_status_poller",
    "get_exports_api",
    "get_logger",
    "get_portfolio_analytics_handler",
    "get_transaction_ingestor",
    "get_verify_credential_handler",
]
