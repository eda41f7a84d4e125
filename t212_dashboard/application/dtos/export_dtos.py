"""Export orchestration DTOs.

Result dataclasses carried from the export handlers back to the caller.

DTOs:
    - CoveredExport: Year already covered by a finished export
    - ExportedYear: Year for which a new export job was created
    - FailedYear: Year whose export request failed
    - ExportRunResult: Outcome of one RunYearlyExports command
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from t212_dashboard.core.errors import DomainError


class ExportRecordStatus(str, Enum):
    """Per-year outcome of an orchestration run."""

    FINISHED = "finished"
    EXPORTED = "exported"
    FAILED = "failed"


@dataclass(frozen=True, kw_only=True)
class CoveredExport:
    """Existing finished full-year export reused by the run."""

    year: int
    report_id: str
    time_from: datetime | None
    time_to: datetime | None
    status: ExportRecordStatus = ExportRecordStatus.FINISHED


@dataclass(frozen=True, kw_only=True)
class ExportedYear:
    """Export job created during the run (still processing remotely)."""

    year: int
    report_id: str
    time_from: datetime
    time_to: datetime
    status: ExportRecordStatus = ExportRecordStatus.EXPORTED


@dataclass(frozen=True, kw_only=True)
class FailedYear:
    """Year whose export request failed after all retries."""

    year: int
    error: DomainError
    status: ExportRecordStatus = ExportRecordStatus.FAILED


type ExportRecord = CoveredExport | ExportedYear | FailedYear


@dataclass(frozen=True, kw_only=True)
class ExportRunResult:
    """Outcome of one orchestration run.

    Attributes:
        run_id: Correlation id shared with the run's progress events.
        start_year: First requested year.
        end_year: Last requested year (current year at run start).
        covered: Years already covered, ascending.
        exported: Years with a new export job, ascending.
        failed: Years whose request failed, ascending.
        outdated_years: Years whose existing export was flagged stale.
    """

    run_id: UUID
    start_year: int
    end_year: int
    covered: list[CoveredExport] = field(default_factory=list)
    exported: list[ExportedYear] = field(default_factory=list)
    failed: list[FailedYear] = field(default_factory=list)
    outdated_years: tuple[int, ...] = ()

    @property
    def records(self) -> list[ExportRecord]:
        """Every per-year record, ordered by year."""
        merged: list[ExportRecord] = [*self.covered, *self.exported, *self.failed]
        return sorted(merged, key=lambda record: record.year)

    @property
    def report_ids(self) -> list[str]:
        """Report ids of covered and newly exported years, ordered by year."""
        return [
            record.report_id
            for record in self.records
            if not isinstance(record, FailedYear)
        ]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
