"""Transaction ingestion DTOs."""

from dataclasses import dataclass, field
from datetime import datetime

from t212_dashboard.domain.entities import TransactionRecord


@dataclass(frozen=True, kw_only=True)
class IngestionDateRange:
    """Span covered by the ingested reports (from their export ranges)."""

    earliest: datetime
    latest: datetime


@dataclass(frozen=True, kw_only=True)
class IngestionSummary:
    """Statistics of one ingestion pass.

    Attributes:
        total_transactions: Rows ingested across all reports.
        total_reports: Reports ingested successfully.
        date_range: Earliest report start and latest report end.
        data_types: Distinct non-empty `Action` and `Type` values,
            first-seen order.
    """

    total_transactions: int
    total_reports: int
    date_range: IngestionDateRange | None = None
    data_types: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class IngestionResult:
    """Merged transactions plus per-report bookkeeping.

    Attributes:
        records: All rows, sorted ascending by parsed `Time` (stable).
        failed_report_ids: Reports that could not be fetched or parsed,
            or contained no data rows.
        skipped_rows: Malformed rows dropped by the parser.
        summary: Ingestion statistics.
    """

    records: list[TransactionRecord] = field(default_factory=list)
    failed_report_ids: list[str] = field(default_factory=list)
    skipped_rows: int = 0
    summary: IngestionSummary = field(
        default_factory=lambda: IngestionSummary(total_transactions=0, total_reports=0)
    )
