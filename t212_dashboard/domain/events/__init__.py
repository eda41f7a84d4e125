"""Domain events.

Usage:
    from t212_dashboard.domain.events import DomainEvent, ExportYearSucceeded
"""

from t212_dashboard.domain.events.base_event import DomainEvent
from t212_dashboard.domain.events.export_events import (
    ExportBackoffEscalated,
    ExportCoverageAnalyzed,
    ExportRetryScheduled,
    ExportRunCompleted,
    ExportRunStarted,
    ExportStatusPolled,
    ExportWaitScheduled,
    ExportYearFailed,
    ExportYearRequested,
    ExportYearSucceeded,
)

__all__ = [
    "DomainEvent",
    "ExportBackoffEscalated",
    "ExportCoverageAnalyzed",
    "ExportRetryScheduled",
    "ExportRunCompleted",
    "ExportRunStarted",
    "ExportStatusPolled",
    "ExportWaitScheduled",
    "ExportYearFailed",
    "ExportYearRequested",
    "ExportYearSucceeded",
]
