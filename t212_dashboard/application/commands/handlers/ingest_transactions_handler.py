"""Transaction ingestion handler.

Downloads the CSV of every finished export, parses it, and merges all rows
into one chronologically sorted transaction list.

Flow:
    1. Keep descriptors that are finished and have a download link
    2. Fetch + parse each report concurrently (bounded)
    3. Tag rows with their report's provenance
    4. Merge in descriptor order, then stable-sort by parsed `Time`

A report that cannot be fetched or parsed, or that has no data rows, is
logged and listed in `failed_report_ids`; the other reports still count.
"""

import asyncio
from collections.abc import Sequence

from t212_dashboard.application.dtos import (
    IngestionDateRange,
    IngestionResult,
    IngestionSummary,
)
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.errors import ValidationError
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.entities import ExportDescriptor, TransactionRecord
from t212_dashboard.domain.protocols import (
    CsvFetcherProtocol,
    CsvParserProtocol,
    LoggerProtocol,
)

DEFAULT_MAX_CONCURRENCY = 4


def sort_by_time_stable(records: list[TransactionRecord]) -> list[TransactionRecord]:
    """Sort records ascending by parsed time, in place of timed rows only.

    Rows with a parsable time are stably sorted among the positions those
    rows occupy. Rows with an unparsable time keep their index.
    """
    timed_slots = [i for i, record in enumerate(records) if record.parsed_time]
    timed = sorted(
        (records[i] for i in timed_slots),
        key=lambda record: record.parsed_time,  # type: ignore[arg-type, return-value]
    )
    merged = list(records)
    for slot, record in zip(timed_slots, timed, strict=True):
        merged[slot] = record
    return merged


def _data_types(records: list[TransactionRecord]) -> tuple[str, ...]:
    seen = (value for r in records for value in (r.action, r.type) if value)
    return tuple(dict.fromkeys(seen))


class TransactionIngestor:
    """Fetch, parse and merge export reports.

    Dependencies (injected via constructor):
        - CsvFetcherProtocol: CSV download
        - CsvParserProtocol: CSV parsing
        - LoggerProtocol: Structured logging

    Returns:
        Result[IngestionResult, ValidationError]
    """

    def __init__(
        self,
        fetcher: CsvFetcherProtocol,
        parser: CsvParserProtocol,
        logger: LoggerProtocol,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        self._fetcher = fetcher
        self._parser = parser
        self._logger = logger
        self._max_concurrency = max(1, max_concurrency)

    async def handle(
        self, descriptors: Sequence[ExportDescriptor]
    ) -> Result[IngestionResult, ValidationError]:
        """Ingest every downloadable report.

        Args:
            descriptors: Export descriptors (any status).

        Returns:
            Success(IngestionResult): Merged records and bookkeeping.
            Failure(ValidationError): Input is not a sequence of descriptors.
        """
        if isinstance(descriptors, str | bytes) or not isinstance(descriptors, Sequence):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="Descriptors must be a sequence of ExportDescriptor",
                    field="descriptors",
                )
            )
        if not all(isinstance(d, ExportDescriptor) for d in descriptors):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="Every item must be an ExportDescriptor",
                    field="descriptors",
                )
            )

        eligible = [d for d in descriptors if d.is_downloadable]
        skipped = len(descriptors) - len(eligible)
        if skipped:
            self._logger.info("ingestion_descriptors_not_ready", count=skipped)

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def load(
            descriptor: ExportDescriptor,
        ) -> tuple[list[TransactionRecord] | None, int]:
            async with semaphore:
                return await self._load_report(descriptor)

        loaded = await asyncio.gather(*(load(d) for d in eligible))

        merged: list[TransactionRecord] = []
        failed_report_ids: list[str] = []
        ingested: list[ExportDescriptor] = []
        skipped_rows = 0
        for descriptor, (records, skipped_in_report) in zip(
            eligible, loaded, strict=True
        ):
            skipped_rows += skipped_in_report
            if records is None:
                failed_report_ids.append(descriptor.report_id)
                continue
            ingested.append(descriptor)
            merged.extend(records)

        ordered = sort_by_time_stable(merged)
        summary = IngestionSummary(
            total_transactions=len(ordered),
            total_reports=len(ingested),
            date_range=self._date_range(ingested),
            data_types=_data_types(ordered),
        )
        self._logger.info(
            "ingestion_completed",
            total_transactions=summary.total_transactions,
            total_reports=summary.total_reports,
            failed_reports=len(failed_report_ids),
            skipped_rows=skipped_rows,
        )
        return Success(
            value=IngestionResult(
                records=ordered,
                failed_report_ids=failed_report_ids,
                skipped_rows=skipped_rows,
                summary=summary,
            )
        )

    async def _load_report(
        self, descriptor: ExportDescriptor
    ) -> tuple[list[TransactionRecord] | None, int]:
        """Fetch and parse one report; None records mark a failed report."""
        log = self._logger.bind(report_id=descriptor.report_id)
        fetched = await self._fetcher.fetch_csv(descriptor.download_link or "")
        if isinstance(fetched, Failure):
            log.warning(
                "ingestion_report_fetch_failed",
                error_code=fetched.error.code.value,
                error=fetched.error.message,
            )
            return None, 0

        parsed = self._parser.parse(fetched.value)
        if isinstance(parsed, Failure):
            log.warning(
                "ingestion_report_parse_failed",
                error=parsed.error.message,
            )
            return None, 0

        table = parsed.value
        if not table.rows:
            log.warning(
                "ingestion_report_empty",
                skipped_rows=table.skipped_rows,
            )
            return None, table.skipped_rows

        records = [
            TransactionRecord.from_row(
                row,
                report_id=descriptor.report_id,
                report_time_from=descriptor.time_from,
                report_time_to=descriptor.time_to,
            )
            for row in table.rows
        ]
        log.debug(
            "ingestion_report_loaded",
            rows=len(records),
            skipped_rows=table.skipped_rows,
        )
        return records, table.skipped_rows

    @staticmethod
    def _date_range(ingested: list[ExportDescriptor]) -> IngestionDateRange | None:
        starts = [d.time_from for d in ingested if d.time_from is not None]
        ends = [d.time_to for d in ingested if d.time_to is not None]
        if not starts or not ends:
            return None
        return IngestionDateRange(earliest=min(starts), latest=max(ends))
