"""Trading212 export file parsers."""

from t212_dashboard.infrastructure.providers.trading212.parsers.csv_parser import (
    ROW_ARITY_TOLERANCE,
    CsvParser,
)

__all__ = [
    "ROW_ARITY_TOLERANCE",
    "CsvParser",
]
