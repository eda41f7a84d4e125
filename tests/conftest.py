"""Shared pytest fixtures.

Provides:
1. A recording logger and event bus (no structlog configuration needed)
2. A fake `sleep` that records requested delays instead of waiting
3. Factories for export descriptors and transaction records
"""

from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Any, TypeVar
from unittest.mock import MagicMock

import pytest

from t212_dashboard.core.config import get_settings
from t212_dashboard.domain.entities import ExportDescriptor, TransactionRecord
from t212_dashboard.domain.enums import ExportStatus
from t212_dashboard.domain.events import DomainEvent
from t212_dashboard.domain.protocols import LoggerProtocol


E = TypeVar("E", bound=DomainEvent)


class RecordingEventBus:
    """EventBusProtocol double keeping every published event in order."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    def subscribe(self, event_type: type[DomainEvent], handler: Any) -> None:
        pass

    async def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[E]) -> list[E]:
        return [e for e in self.events if isinstance(e, event_type)]


class RecordingSleep:
    """Async sleep double."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def mock_logger() -> MagicMock:
    """LoggerProtocol mock whose `bind()` returns itself."""
    logger = MagicMock(spec=LoggerProtocol)
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


@pytest.fixture
def event_bus() -> RecordingEventBus:
    return RecordingEventBus()


@pytest.fixture
def fake_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2023, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_year_descriptor(
    year: int,
    report_id: str | None = None,
    *,
    status: ExportStatus = ExportStatus.FINISHED,
    time_to: datetime | None = None,
    download_link: str | None = "https://storage.example.com/report.csv",
) -> ExportDescriptor:
    """Finished full-year descriptor (Dec 31 23:59:59 end by default)."""
    return ExportDescriptor(
        report_id=report_id or f"r{year}",
        time_from=datetime(year, 1, 1, tzinfo=UTC),
        time_to=time_to or datetime(year, 12, 31, 23, 59, 59, tzinfo=UTC),
        status=status,
        download_link=download_link,
    )


def make_record(row: dict[str, str] | None = None, **columns: str) -> TransactionRecord:
    """Record from CSV-style column names, e.g. `Action="Deposit"`.

    Column names with spaces or symbols go through `row=`:
        make_record(row={"Currency (Total)": "USD"}, Action="Deposit")
    """
    return TransactionRecord.from_row({**(row or {}), **columns})
