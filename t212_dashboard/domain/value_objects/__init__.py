"""Domain value objects."""

from t212_dashboard.domain.value_objects.account_cash import AccountCash
from t212_dashboard.domain.value_objects.account_snapshot_cache import (
    AccountSnapshotCache,
)
from t212_dashboard.domain.value_objects.export_policy import ExportPolicy
from t212_dashboard.domain.value_objects.export_request import ExportRequest

__all__ = [
    "AccountCash",
    "AccountSnapshotCache",
    "ExportPolicy",
    "ExportRequest",
]
