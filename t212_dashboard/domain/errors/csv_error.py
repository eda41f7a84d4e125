"""CSV parsing errors."""

from dataclasses import dataclass

from t212_dashboard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class CsvParseError(DomainError):
    """CSV payload could not be parsed at all.

    Row-level problems never produce this error; malformed rows are skipped
    and counted instead.

    Attributes:
        report_id: Export the payload belongs to, when known.
    """

    report_id: str | None = None
