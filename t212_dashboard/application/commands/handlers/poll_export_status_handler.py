"""PollExportStatus command handler.

Re-lists exports until every requested job is finished or failed, or the
attempt budget runs out. Export jobs typically take tens of seconds to a
few minutes.

A rate-limited listing counts as an attempt and waits for the server's
Retry-After hint (or the poll interval). A rejected credential or any
other listing failure ends polling with Failure.
"""

import asyncio

from t212_dashboard.application.commands.export_commands import PollExportStatus
from t212_dashboard.application.commands.handlers.orchestrate_exports_handler import (
    Sleep,
)
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.errors import DomainError, ValidationError
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.entities import ExportDescriptor
from t212_dashboard.domain.enums import ExportStatus
from t212_dashboard.domain.errors import ProviderRateLimitError
from t212_dashboard.domain.events import ExportStatusPolled
from t212_dashboard.domain.protocols import (
    EventBusProtocol,
    ExportClientProtocol,
    LoggerProtocol,
)
from t212_dashboard.domain.value_objects import ExportPolicy


class ExportStatusPoller:
    """Handler for PollExportStatus command.

    Dependencies (injected via constructor):
        - ExportClientProtocol: Export listing
        - EventBusProtocol: ExportStatusPolled after each listing
        - LoggerProtocol: Structured logging
        - ExportPolicy: Poll interval and attempt budget

    Returns:
        Result[list[ExportDescriptor], DomainError]: One descriptor per
        requested id, in request order. Ids never seen in a listing are
        reported as processing with no times.
    """

    def __init__(
        self,
        export_client: ExportClientProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        policy: ExportPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = export_client
        self._event_bus = event_bus
        self._logger = logger
        self._policy = policy or ExportPolicy()
        self._sleep = sleep

    async def handle(
        self, command: PollExportStatus
    ) -> Result[list[ExportDescriptor], DomainError]:
        """Handle PollExportStatus command.

        Returns:
            Success(list[ExportDescriptor]): Last known status per id.
            Failure(ValidationError): No report ids given.
            Failure(ProviderError): Listing failed (other than rate limit).
        """
        wanted = list(dict.fromkeys(command.report_ids))
        if not wanted:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="At least one report id is required",
                    field="report_ids",
                )
            )

        latest: dict[str, ExportDescriptor] = {}
        max_attempts = self._policy.poll_max_attempts

        for attempt in range(1, max_attempts + 1):
            delay = self._policy.poll_interval_seconds
            listing = await self._client.list_exports(command.credential)

            if isinstance(listing, Failure):
                error = listing.error
                if not isinstance(error, ProviderRateLimitError):
                    self._logger.warning(
                        "export_poll_failed",
                        attempt=attempt,
                        error_code=error.code.value,
                        error=error.message,
                    )
                    return listing
                if error.retry_after is not None:
                    delay = float(error.retry_after)
                self._logger.info(
                    "export_poll_rate_limited",
                    attempt=attempt,
                    delay_seconds=delay,
                )
            else:
                by_id = {d.report_id: d for d in listing.value}
                latest.update({rid: by_id[rid] for rid in wanted if rid in by_id})
                pending, finished, failed = self._partition(wanted, latest)
                self._logger.debug(
                    "export_poll_listed",
                    attempt=attempt,
                    pending=len(pending),
                    finished=len(finished),
                    failed=len(failed),
                )
                await self._event_bus.publish(
                    ExportStatusPolled(
                        attempt=attempt,
                        pending_report_ids=tuple(pending),
                        finished_report_ids=tuple(finished),
                        failed_report_ids=tuple(failed),
                    )
                )
                if not pending:
                    break

            if attempt < max_attempts:
                await self._sleep(delay)
        else:
            self._logger.warning(
                "export_poll_exhausted",
                attempts=max_attempts,
                unresolved=[
                    rid
                    for rid in wanted
                    if rid not in latest or not latest[rid].status.is_terminal
                ],
            )

        return Success(
            value=[
                latest.get(rid)
                or ExportDescriptor(
                    report_id=rid,
                    time_from=None,
                    time_to=None,
                    status=ExportStatus.PROCESSING,
                )
                for rid in wanted
            ]
        )

    @staticmethod
    def _partition(
        wanted: list[str],
        latest: dict[str, ExportDescriptor],
    ) -> tuple[list[str], list[str], list[str]]:
        pending: list[str] = []
        finished: list[str] = []
        failed: list[str] = []
        for rid in wanted:
            descriptor = latest.get(rid)
            if descriptor is None or not descriptor.status.is_terminal:
                pending.append(rid)
            elif descriptor.is_finished:
                finished.append(rid)
            else:
                failed.append(rid)
        return pending, finished, failed
