"""Human-readable progress messages for export runs.

Turns orchestration and polling events into one `export_progress` log line
each, carrying a `message` a console or UI can show as-is (per-year status,
wait and backoff notices, the final covered/exported/failed summary).

Usage:
    >>> handler = ExportProgressHandler(logger=get_logger())
    >>> handler.subscribe_all(event_bus)
"""

from t212_dashboard.domain.events import (
    ExportBackoffEscalated,
    ExportCoverageAnalyzed,
    ExportRetryScheduled,
    ExportRunCompleted,
    ExportRunStarted,
    ExportStatusPolled,
    ExportWaitScheduled,
    ExportYearFailed,
    ExportYearSucceeded,
)
from t212_dashboard.domain.protocols import EventBusProtocol, LoggerProtocol


def _years(years: tuple[int, ...]) -> str:
    return ", ".join(str(y) for y in years) or "none"


class ExportProgressHandler:
    """Logs a progress message per export event."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def subscribe_all(self, event_bus: EventBusProtocol) -> None:
        event_bus.subscribe(ExportRunStarted, self.handle_run_started)
        event_bus.subscribe(ExportCoverageAnalyzed, self.handle_coverage_analyzed)
        event_bus.subscribe(ExportYearSucceeded, self.handle_year_succeeded)
        event_bus.subscribe(ExportYearFailed, self.handle_year_failed)
        event_bus.subscribe(ExportRetryScheduled, self.handle_retry_scheduled)
        event_bus.subscribe(ExportBackoffEscalated, self.handle_backoff_escalated)
        event_bus.subscribe(ExportWaitScheduled, self.handle_wait_scheduled)
        event_bus.subscribe(ExportRunCompleted, self.handle_run_completed)
        event_bus.subscribe(ExportStatusPolled, self.handle_status_polled)

    async def handle_run_started(self, event: ExportRunStarted) -> None:
        self._logger.info(
            "export_progress",
            run_id=str(event.run_id),
            message=f"Checking exports for {event.start_year}-{event.end_year}",
        )

    async def handle_coverage_analyzed(self, event: ExportCoverageAnalyzed) -> None:
        self._logger.info(
            "export_progress",
            run_id=str(event.run_id),
            message=(
                f"Already exported: {_years(event.covered_years)}. "
                f"Requesting: {_years(event.missing_years)}"
            ),
        )

    async def handle_year_succeeded(self, event: ExportYearSucceeded) -> None:
        self._logger.info(
            "export_progress",
            run_id=str(event.run_id),
            year=event.year,
            message=f"Export for {event.year} requested (report {event.report_id})",
        )

    async def handle_year_failed(self, event: ExportYearFailed) -> None:
        message = f"Export for {event.year} failed: {event.message}"
        if event.rate_limited:
            message = f"{message}. Rate limit reached, wait a minute before retrying"
        self._logger.warning(
            "export_progress",
            run_id=str(event.run_id),
            year=event.year,
            error_code=event.error_code,
            message=message,
        )

    async def handle_retry_scheduled(self, event: ExportRetryScheduled) -> None:
        self._logger.info(
            "export_progress",
            run_id=str(event.run_id),
            year=event.year,
            message=(
                f"Rate limited on {event.year}, retrying in "
                f"{event.delay_seconds:g}s (attempt {event.attempt})"
            ),
        )

    async def handle_backoff_escalated(self, event: ExportBackoffEscalated) -> None:
        self._logger.warning(
            "export_progress",
            run_id=str(event.run_id),
            message=(
                f"Slowing down: waiting {event.delay_seconds:g}s between "
                f"requests (was {event.previous_delay_seconds:g}s)"
            ),
        )

    async def handle_wait_scheduled(self, event: ExportWaitScheduled) -> None:
        self._logger.info(
            "export_progress",
            run_id=str(event.run_id),
            message=(
                f"Waiting {event.delay_seconds:g}s before requesting "
                f"{event.next_year}"
            ),
        )

    async def handle_run_completed(self, event: ExportRunCompleted) -> None:
        self._logger.info(
            "export_progress",
            run_id=str(event.run_id),
            message=(
                f"Done: {event.covered_count} already covered, "
                f"{event.exported_count} newly exported, "
                f"{event.failed_count} failed"
            ),
        )

    async def handle_status_polled(self, event: ExportStatusPolled) -> None:
        self._logger.info(
            "export_progress",
            attempt=event.attempt,
            message=(
                f"{len(event.finished_report_ids)} finished, "
                f"{len(event.pending_report_ids)} processing, "
                f"{len(event.failed_report_ids)} failed"
            ),
        )
