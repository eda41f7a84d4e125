"""Unit tests for TransactionIngestor.

The CSV fetcher is faked with canned payloads keyed by download link; the
real CsvParser is used.
"""

from datetime import UTC, datetime

import pytest

from t212_dashboard.application.commands.handlers.ingest_transactions_handler import (
    TransactionIngestor,
    sort_by_time_stable,
)
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.result import Failure, Success
from t212_dashboard.domain.enums import ExportStatus
from t212_dashboard.domain.errors import ProxyFetchError
from t212_dashboard.domain.entities import TransactionRecord
from t212_dashboard.infrastructure.providers.trading212 import CsvParser
from tests.conftest import make_year_descriptor

HEADER = "Action,Time,Ticker,Total,Currency (Total)"

CSV_2022 = "\n".join(
    [
        HEADER,
        "Deposit,2022-03-01 09:00:00,,100.00,EUR",
        "Market buy,2022-02-01 10:00:00,AAPL,50.00,EUR",
    ]
)
CSV_2023 = "\n".join(
    [
        HEADER,
        "Dividend (Dividend),2023-01-15 08:00:00,AAPL,1.20,EUR",
        "Interest on cash,2022-12-31 23:00:00,,0.10,EUR",
        "Broken,row",
        "Deposit,1,2,3,4,5,6,7",
    ]
)


class FakeFetcher:
    def __init__(self, payloads: dict[str, str]) -> None:
        self.payloads = payloads
        self.links: list[str] = []

    async def fetch_csv(self, download_link: str):
        self.links.append(download_link)
        if download_link not in self.payloads:
            return Failure(
                error=ProxyFetchError(
                    code=ErrorCode.CSV_PROXY_FETCH_FAILED,
                    message="Failed to fetch CSV: 404 Not Found",
                    provider_name="trading212",
                    status_code=404,
                    status_text="Not Found",
                )
            )
        return Success(value=self.payloads[download_link])


def link(year: int) -> str:
    return f"https://storage.example.com/{year}.csv"


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher({link(2022): CSV_2022, link(2023): CSV_2023})


@pytest.fixture
def ingestor(fetcher, mock_logger) -> TransactionIngestor:
    return TransactionIngestor(fetcher=fetcher, parser=CsvParser(), logger=mock_logger)


async def test_merges_reports_chronologically(ingestor):
    result = await ingestor.handle(
        [
            make_year_descriptor(2023, download_link=link(2023)),
            make_year_descriptor(2022, download_link=link(2022)),
        ]
    )

    assert isinstance(result, Success)
    times = [r.time for r in result.value.records]
    assert times == [
        "2022-02-01 10:00:00",
        "2022-03-01 09:00:00",
        "2022-12-31 23:00:00",
        "2023-01-15 08:00:00",
    ]
    assert result.value.skipped_rows == 2
    assert result.value.failed_report_ids == []


async def test_records_carry_provenance(ingestor):
    result = await ingestor.handle([make_year_descriptor(2022, download_link=link(2022))])

    assert isinstance(result, Success)
    record = result.value.records[0]
    assert record.report_id == "r2022"
    assert record.report_time_from == datetime(2022, 1, 1, tzinfo=UTC)


async def test_summary(ingestor):
    result = await ingestor.handle(
        [
            make_year_descriptor(2022, download_link=link(2022)),
            make_year_descriptor(2023, download_link=link(2023)),
        ]
    )

    assert isinstance(result, Success)
    summary = result.value.summary
    assert summary.total_transactions == 4
    assert summary.total_reports == 2
    assert summary.date_range.earliest == datetime(2022, 1, 1, tzinfo=UTC)
    assert summary.date_range.latest == datetime(2023, 12, 31, 23, 59, 59, tzinfo=UTC)
    assert summary.data_types == (
        "Market buy",
        "Deposit",
        "Interest on cash",
        "Dividend (Dividend)",
    )


async def test_summary_collects_both_action_and_type(mock_logger):
    csv_text = "\n".join(
        [
            "Action,Type,Time,Total",
            "Deposit,Cash,2022-01-01 09:00:00,10.00",
            ",Fee,2022-01-02 09:00:00,1.00",
            "Deposit,,2022-01-03 09:00:00,5.00",
        ]
    )
    ingestor = TransactionIngestor(
        fetcher=FakeFetcher({link(2022): csv_text}),
        parser=CsvParser(),
        logger=mock_logger,
    )

    result = await ingestor.handle([make_year_descriptor(2022, download_link=link(2022))])

    assert isinstance(result, Success)
    assert result.value.summary.data_types == ("Deposit", "Cash", "Fee")


async def test_failed_download_does_not_block_others(ingestor):
    result = await ingestor.handle(
        [
            make_year_descriptor(2021, download_link=link(2021)),
            make_year_descriptor(2022, download_link=link(2022)),
        ]
    )

    assert isinstance(result, Success)
    assert result.value.failed_report_ids == ["r2021"]
    assert result.value.summary.total_reports == 1
    assert len(result.value.records) == 2


async def test_header_only_report_counts_as_failed(fetcher, mock_logger):
    fetcher.payloads[link(2020)] = HEADER + "\n"
    ingestor = TransactionIngestor(fetcher=fetcher, parser=CsvParser(), logger=mock_logger)

    result = await ingestor.handle([make_year_descriptor(2020, download_link=link(2020))])

    assert isinstance(result, Success)
    assert result.value.failed_report_ids == ["r2020"]
    assert result.value.records == []
    assert result.value.summary.date_range is None


async def test_unfinished_descriptors_are_ignored(ingestor, fetcher):
    result = await ingestor.handle(
        [
            make_year_descriptor(2022, status=ExportStatus.PROCESSING, download_link=link(2022)),
            make_year_descriptor(2023, download_link=None),
        ]
    )

    assert isinstance(result, Success)
    assert result.value.records == []
    assert result.value.failed_report_ids == []
    assert fetcher.links == []


async def test_empty_input(ingestor):
    result = await ingestor.handle([])

    assert isinstance(result, Success)
    assert result.value.summary.total_transactions == 0


@pytest.mark.parametrize("bad_input", ["r2022", None, [object()]])
async def test_rejects_non_descriptor_input(ingestor, bad_input):
    result = await ingestor.handle(bad_input)

    assert isinstance(result, Failure)
    assert result.error.code == ErrorCode.INVALID_INPUT
    assert result.error.field == "descriptors"


def test_sort_keeps_untimed_rows_in_place():
    records = [
        TransactionRecord(action="b", time="2023-02-01 00:00:00"),
        TransactionRecord(action="x", time="not a time"),
        TransactionRecord(action="a", time="2023-01-01 00:00:00"),
        TransactionRecord(action="c", time="2023-02-01 00:00:00"),
    ]

    ordered = sort_by_time_stable(records)

    assert [r.action for r in ordered] == ["a", "x", "b", "c"]
