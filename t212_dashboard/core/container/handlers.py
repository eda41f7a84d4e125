"""Handler factories.

The orchestrator is an application-scoped singleton because it owns the
per-credential run-in-progress guard. Every other handler is stateless and
built per call.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from t212_dashboard.core.config import settings
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

if TYPE_CHECKING:
    from t212_dashboard.application.commands.handlers.ingest_transactions_handler import (
        TransactionIngestor,
    )
    from t212_dashboard.application.commands.handlers.orchestrate_exports_handler import (
        ExportOrchestrator,
    )
    from t212_dashboard.application.commands.handlers.poll_export_status_handler import (
        ExportStatusPoller,
    )
    from t212_dashboard.application.commands.handlers.verify_credential_handler import (
        VerifyCredentialHandler,
    )
    from t212_dashboard.application.queries.handlers.get_account_snapshot_handler import (
        GetAccountSnapshotHandler,
    )
    from t212_dashboard.application.queries.handlers.get_portfolio_analytics_handler import (
        GetPortfolioAnalyticsHandler,
    )


@lru_cache()
def get_export_orchestrator() -> "ExportOrchestrator":
    """Get the RunYearlyExports handler singleton (app-scoped)."""
    from t212_dashboard.application.commands.handlers.orchestrate_exports_handler import (
        ExportOrchestrator,
    )

    return ExportOrchestrator(
        export_client=get_exports_api(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        policy=get_export_policy(),
    )


def get_export_status_poller() -> "ExportStatusPoller":
    from t212_dashboard.application.commands.handlers.poll_export_status_handler import (
        ExportStatusPoller,
    )

    return ExportStatusPoller(
        export_client=get_exports_api(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        policy=get_export_policy(),
    )


def get_transaction_ingestor() -> "TransactionIngestor":
    from t212_dashboard.application.commands.handlers.ingest_transactions_handler import (
        TransactionIngestor,
    )

    return TransactionIngestor(
        fetcher=get_csv_fetcher(),
        parser=get_csv_parser(),
        logger=get_logger(),
        max_concurrency=settings.ingest_max_concurrency,
    )


def get_verify_credential_handler() -> "VerifyCredentialHandler":
    from t212_dashboard.application.commands.handlers.verify_credential_handler import (
        VerifyCredentialHandler,
    )

    return VerifyCredentialHandler(account_client=get_account_api(), logger=get_logger())


def get_account_snapshot_handler() -> "GetAccountSnapshotHandler":
    from t212_dashboard.application.queries.handlers.get_account_snapshot_handler import (
        GetAccountSnapshotHandler,
    )

    return GetAccountSnapshotHandler(account_client=get_account_api(), logger=get_logger())


def get_portfolio_analytics_handler() -> "GetPortfolioAnalyticsHandler":
    from t212_dashboard.application.queries.handlers.get_portfolio_analytics_handler import (
        GetPortfolioAnalyticsHandler,
    )

    return GetPortfolioAnalyticsHandler(logger=get_logger())
