"""Domain enums.

Available Enums:
    - ExportStatus: Normalized export job lifecycle status
    - DividendType: Dividend sub-classification from the `Action` column
"""

from t212_dashboard.domain.enums.dividend_type import DividendType
from t212_dashboard.domain.enums.export_status import ExportStatus

__all__ = [
    "DividendType",
    "ExportStatus",
]
