"""RunYearlyExports command handler.

Makes sure one history export exists per calendar year, from a start year
up to the current year, without tripping the brokerage's export rate limit.

Flow:
    1. List existing exports and compute year coverage
    2. Request every uncovered year (the current year is always requested),
       strictly one at a time, in ascending order
    3. Retry a rate-limited request with exponential backoff
    4. Wait a base delay between years; a year that stays rate limited
       after every retry doubles that delay for the rest of the run

Per-year failures are collected in the result. Only conditions that
invalidate the whole run are returned as Failure: a rejected credential,
a failed listing, invalid input, or an overlapping run for the same
credential.

Architecture:
    - Application layer handler (orchestrates the export client)
    - Progress published as domain events, never rendered here
    - `sleep` and `clock` injected so tests run without real delays
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from uuid import UUID, uuid4

from t212_dashboard.application.commands.export_commands import RunYearlyExports
from t212_dashboard.application.dtos import (
    CoveredExport,
    ExportedYear,
    ExportRunResult,
    FailedYear,
)
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.errors import DomainError, ValidationError
from t212_dashboard.core.fingerprinting import credential_fingerprint, mask_credential
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.coverage import analyze_coverage
from t212_dashboard.domain.errors import (
    ExportRunInProgressError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
)
from t212_dashboard.domain.events import (
    ExportBackoffEscalated,
    ExportCoverageAnalyzed,
    ExportRetryScheduled,
    ExportRunCompleted,
    ExportRunStarted,
    ExportWaitScheduled,
    ExportYearFailed,
    ExportYearRequested,
    ExportYearSucceeded,
)
from t212_dashboard.domain.protocols import (
    EventBusProtocol,
    ExportClientProtocol,
    LoggerProtocol,
)
from t212_dashboard.domain.value_objects import ExportPolicy, ExportRequest

type Sleep = Callable[[float], Awaitable[None]]
type Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class ExportOrchestrator:
    """Handler for RunYearlyExports command.

    One instance is shared per process; it owns the run-in-progress guard.
    The inter-request delay is local to each run.

    Dependencies (injected via constructor):
        - ExportClientProtocol: Brokerage export endpoints
        - EventBusProtocol: Progress events
        - LoggerProtocol: Structured logging
        - ExportPolicy: Delays, retry counts, freshness threshold

    Returns:
        Result[ExportRunResult, DomainError]
    """

    def __init__(
        self,
        export_client: ExportClientProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        policy: ExportPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = utc_now,
    ) -> None:
        self._client = export_client
        self._event_bus = event_bus
        self._logger = logger
        self._policy = policy or ExportPolicy()
        self._sleep = sleep
        self._clock = clock
        self._active_runs: set[str] = set()

    def is_running(self, credential: str) -> bool:
        """Check whether a run for this credential is in progress."""
        return credential_fingerprint(credential) in self._active_runs

    async def handle(
        self, command: RunYearlyExports
    ) -> Result[ExportRunResult, DomainError]:
        """Handle RunYearlyExports command.

        Args:
            command: Credential and first year to cover.

        Returns:
            Success(ExportRunResult): Covered, exported and failed years.
            Failure(ValidationError): Empty credential or start year outside
                [policy.min_year, current year].
            Failure(ExportRunInProgressError): Same credential already running.
            Failure(ProviderAuthenticationError): Credential rejected.
            Failure(ProviderError): Export listing failed.
        """
        credential = command.credential
        if not isinstance(credential, str) or not credential.strip():
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="Credential is required",
                    field="credential",
                )
            )

        now = self._clock()
        current_year = now.year
        if not self._policy.min_year <= command.start_year <= current_year:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_DATE_RANGE,
                    message=(
                        f"Start year must be between {self._policy.min_year} "
                        f"and {current_year}"
                    ),
                    field="start_year",
                    details={"start_year": command.start_year},
                )
            )

        fingerprint = credential_fingerprint(command.credential)
        if fingerprint in self._active_runs:
            self._logger.warning(
                "export_run_rejected_in_progress",
                credential=mask_credential(command.credential),
            )
            return Failure(
                error=ExportRunInProgressError(
                    code=ErrorCode.EXPORT_RUN_IN_PROGRESS,
                    message="An export run for this credential is already running",
                    credential_prefix=mask_credential(command.credential),
                )
            )

        self._active_runs.add(fingerprint)
        try:
            return await self._run(command, now)
        finally:
            self._active_runs.discard(fingerprint)

    async def _run(
        self,
        command: RunYearlyExports,
        now: datetime,
    ) -> Result[ExportRunResult, DomainError]:
        run_id = uuid4()
        current_year = now.year
        log = self._logger.bind(
            run_id=str(run_id),
            credential=mask_credential(command.credential),
        )
        log.info(
            "export_run_started",
            start_year=command.start_year,
            end_year=current_year,
        )
        await self._event_bus.publish(
            ExportRunStarted(
                run_id=run_id,
                start_year=command.start_year,
                end_year=current_year,
            )
        )

        # 1. Coverage (a failed listing fails the run instead of re-exporting)
        listing = await self._client.list_exports(command.credential)
        if isinstance(listing, Failure):
            log.warning(
                "export_run_listing_failed",
                error_code=listing.error.code.value,
                error=listing.error.message,
            )
            return listing

        coverage = analyze_coverage(
            listing.value,
            now=now,
            outdated_after=self._policy.outdated_after,
        )
        covered = {
            year: descriptor
            for year, descriptor in coverage.covered.items()
            if year >= command.start_year
        }
        missing = coverage.missing_years(command.start_year, current_year)
        log.info(
            "export_coverage_analyzed",
            covered_years=sorted(covered),
            missing_years=missing,
            outdated_years=list(coverage.outdated_years),
        )
        await self._event_bus.publish(
            ExportCoverageAnalyzed(
                run_id=run_id,
                covered_years=tuple(sorted(covered)),
                missing_years=tuple(missing),
                outdated_years=coverage.outdated_years,
            )
        )

        # 2. Sequential submission
        delay = self._policy.request_delay_seconds
        exported: list[ExportedYear] = []
        failed: list[FailedYear] = []

        for index, year in enumerate(missing):
            request = ExportRequest.for_year(year, self._clock())
            outcome = await self._export_year(
                command.credential, request, year, run_id
            )

            match outcome:
                case Success(value=report_id):
                    exported.append(
                        ExportedYear(
                            year=year,
                            report_id=report_id,
                            time_from=request.time_from,
                            time_to=request.time_to,
                        )
                    )
                    log.info("export_year_succeeded", year=year, report_id=report_id)
                    await self._event_bus.publish(
                        ExportYearSucceeded(
                            run_id=run_id, year=year, report_id=report_id
                        )
                    )

                case Failure(error=error):
                    rate_limited = isinstance(error, ProviderRateLimitError)
                    await self._event_bus.publish(
                        ExportYearFailed(
                            run_id=run_id,
                            year=year,
                            error_code=error.code.value,
                            message=error.message,
                            rate_limited=rate_limited,
                        )
                    )
                    if isinstance(error, ProviderAuthenticationError):
                        log.warning("export_run_aborted_auth", year=year)
                        return Failure(error=error)

                    failed.append(FailedYear(year=year, error=error))
                    log.warning(
                        "export_year_failed",
                        year=year,
                        error_code=error.code.value,
                        error=error.message,
                    )
                    if rate_limited:
                        escalated = self._policy.escalate(delay)
                        if escalated > delay:
                            log.warning(
                                "export_backoff_escalated",
                                previous_delay_seconds=delay,
                                delay_seconds=escalated,
                            )
                            await self._event_bus.publish(
                                ExportBackoffEscalated(
                                    run_id=run_id,
                                    previous_delay_seconds=delay,
                                    delay_seconds=escalated,
                                )
                            )
                        delay = escalated

            if index < len(missing) - 1:
                next_year = missing[index + 1]
                await self._event_bus.publish(
                    ExportWaitScheduled(
                        run_id=run_id,
                        next_year=next_year,
                        delay_seconds=delay,
                    )
                )
                await self._sleep(delay)

        result = ExportRunResult(
            run_id=run_id,
            start_year=command.start_year,
            end_year=current_year,
            covered=[
                CoveredExport(
                    year=year,
                    report_id=descriptor.report_id,
                    time_from=descriptor.time_from,
                    time_to=descriptor.time_to,
                )
                for year, descriptor in sorted(covered.items())
            ],
            exported=exported,
            failed=failed,
            outdated_years=coverage.outdated_years,
        )
        log.info(
            "export_run_completed",
            covered_count=len(result.covered),
            exported_count=len(result.exported),
            failed_count=len(result.failed),
        )
        await self._event_bus.publish(
            ExportRunCompleted(
                run_id=run_id,
                covered_count=len(result.covered),
                exported_count=len(result.exported),
                failed_count=len(result.failed),
            )
        )
        return Success(value=result)

    async def _export_year(
        self,
        credential: str,
        request: ExportRequest,
        year: int,
        run_id: UUID,
    ) -> Result[str, ProviderError]:
        """Request one year, retrying only on rate limits."""
        attempt = 0
        while True:
            await self._event_bus.publish(
                ExportYearRequested(run_id=run_id, year=year, attempt=attempt + 1)
            )
            result = await self._client.request_export(credential, request)
            if isinstance(result, Success):
                return result

            error = result.error
            if (
                not isinstance(error, ProviderRateLimitError)
                or attempt >= self._policy.retry_attempts
            ):
                return result

            retry_delay = self._policy.retry_delay(attempt, error.retry_after)
            attempt += 1
            self._logger.info(
                "export_retry_scheduled",
                run_id=str(run_id),
                year=year,
                attempt=attempt + 1,
                delay_seconds=retry_delay,
            )
            await self._event_bus.publish(
                ExportRetryScheduled(
                    run_id=run_id,
                    year=year,
                    attempt=attempt + 1,
                    delay_seconds=retry_delay,
                )
            )
            await self._sleep(retry_delay)
