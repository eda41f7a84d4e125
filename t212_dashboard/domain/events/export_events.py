"""Export orchestration progress events.

One run of the yearly export orchestrator publishes, in order:

    ExportRunStarted
    ExportCoverageAnalyzed
    per missing year:
        ExportYearRequested (one per attempt)
        ExportRetryScheduled (after a rate-limited attempt with retries left)
        ExportYearSucceeded | ExportYearFailed
        ExportBackoffEscalated (rate limit survived every retry)
        ExportWaitScheduled (before the next year's request)
    ExportRunCompleted

ExportStatusPolled is published by the status poller after each listing.

Events carry a `run_id` so subscribers can correlate progress across
concurrent runs. Credentials never appear in events.
"""

from dataclasses import dataclass, field
from uuid import UUID

from t212_dashboard.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportRunStarted(DomainEvent):
    """Orchestration run accepted and about to analyze coverage.

    Attributes:
        run_id: Run correlation id.
        start_year: First requested year.
        end_year: Last requested year (the current year).
    """

    run_id: UUID
    start_year: int
    end_year: int


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportCoverageAnalyzed(DomainEvent):
    """Existing exports listed and the year gap computed.

    Attributes:
        run_id: Run correlation id.
        covered_years: Years with a finished full-year export.
        missing_years: Years that will be requested, ascending.
        outdated_years: Years whose latest export is considered stale.
    """

    run_id: UUID
    covered_years: tuple[int, ...] = field(default_factory=tuple)
    missing_years: tuple[int, ...] = field(default_factory=tuple)
    outdated_years: tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportYearRequested(DomainEvent):
    """Export request for one year about to be sent.

    Attributes:
        run_id: Run correlation id.
        year: Calendar year being exported.
        attempt: 1 for the first attempt, 2+ for retries.
    """

    run_id: UUID
    year: int
    attempt: int = 1


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportYearSucceeded(DomainEvent):
    """Export job created for one year."""

    run_id: UUID
    year: int
    report_id: str


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportYearFailed(DomainEvent):
    """Export request for one year failed after all retries.

    Attributes:
        run_id: Run correlation id.
        year: Calendar year that failed.
        error_code: Machine-readable error code value.
        message: Human-readable error message.
        rate_limited: True when the final failure was a rate limit.
    """

    run_id: UUID
    year: int
    error_code: str
    message: str
    rate_limited: bool = False


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportRetryScheduled(DomainEvent):
    """Rate-limited request will be retried after a delay."""

    run_id: UUID
    year: int
    attempt: int
    delay_seconds: float


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportBackoffEscalated(DomainEvent):
    """Inter-request delay increased for the rest of the run."""

    run_id: UUID
    previous_delay_seconds: float
    delay_seconds: float


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportWaitScheduled(DomainEvent):
    """Orchestrator is pausing before the next year's request."""

    run_id: UUID
    next_year: int
    delay_seconds: float


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportRunCompleted(DomainEvent):
    """Orchestration run finished (possibly with per-year failures).

    Attributes:
        run_id: Run correlation id.
        covered_count: Years already covered before the run.
        exported_count: Years with a newly created export job.
        failed_count: Years whose request failed.
    """

    run_id: UUID
    covered_count: int
    exported_count: int
    failed_count: int


@dataclass(frozen=True, kw_only=True, slots=True)
class ExportStatusPolled(DomainEvent):
    """One status listing completed while waiting for export jobs.

    Attributes:
        attempt: Listing number, starting at 1.
        pending_report_ids: Requested ids still processing (or not listed).
        finished_report_ids: Requested ids that finished.
        failed_report_ids: Requested ids that failed.
    """

    attempt: int
    pending_report_ids: tuple[str, ...] = field(default_factory=tuple)
    finished_report_ids: tuple[str, ...] = field(default_factory=tuple)
    failed_report_ids: tuple[str, ...] = field(default_factory=tuple)
