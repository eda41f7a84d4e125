"""Domain entities."""

from t212_dashboard.domain.entities.export_descriptor import ExportDescriptor
from t212_dashboard.domain.entities.transaction_record import (
    COLUMN_FIELDS,
    TransactionRecord,
)

__all__ = [
    "COLUMN_FIELDS",
    "ExportDescriptor",
    "TransactionRecord",
]
