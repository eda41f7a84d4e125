"""Application DTOs (handler results)."""

from t212_dashboard.application.dtos.account_dtos import VerifiedCredential
from t212_dashboard.application.dtos.analytics_dtos import PortfolioAnalytics
from t212_dashboard.application.dtos.export_dtos import (
    CoveredExport,
    ExportedYear,
    ExportRecord,
    ExportRecordStatus,
    ExportRunResult,
    FailedYear,
)
from t212_dashboard.application.dtos.ingestion_dtos import (
    IngestionDateRange,
    IngestionResult,
    IngestionSummary,
)

__all__ = [
    "CoveredExport",
    "ExportRecord",
    "ExportRecordStatus",
    "ExportRunResult",
    "ExportedYear",
    "FailedYear",
    "IngestionDateRange",
    "IngestionResult",
    "IngestionSummary",
    "PortfolioAnalytics",
    "VerifiedCredential",
]
