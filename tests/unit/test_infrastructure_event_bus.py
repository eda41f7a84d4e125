"""Unit tests for InMemoryEventBus and ExportProgressHandler.

Tests cover:
- Exact-type subscription and dispatch
- Fail-open behavior (a failing handler never breaks the publisher)
- Unsubscribe
- Progress messages derived from export events
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from t212_dashboard.domain.events import (
    ExportBackoffEscalated,
    ExportCoverageAnalyzed,
    ExportRunCompleted,
    ExportStatusPolled,
    ExportYearFailed,
    ExportYearSucceeded,
)
from t212_dashboard.infrastructure.events import InMemoryEventBus
from t212_dashboard.infrastructure.events.handlers import ExportProgressHandler


@pytest.fixture
def bus(mock_logger) -> InMemoryEventBus:
    return InMemoryEventBus(logger=mock_logger)


def succeeded(year: int = 2023) -> ExportYearSucceeded:
    return ExportYearSucceeded(run_id=uuid4(), year=year, report_id="42")


class TestInMemoryEventBus:
    async def test_dispatches_to_every_handler_of_type(self, bus):
        first, second, other = AsyncMock(), AsyncMock(), AsyncMock()
        bus.subscribe(ExportYearSucceeded, first)
        bus.subscribe(ExportYearSucceeded, second)
        bus.subscribe(ExportRunCompleted, other)
        event = succeeded()

        await bus.publish(event)

        first.assert_awaited_once_with(event)
        second.assert_awaited_once_with(event)
        other.assert_not_awaited()

    async def test_no_handlers_is_a_noop(self, bus, mock_logger):
        await bus.publish(succeeded())

        mock_logger.debug.assert_not_called()

    async def test_failing_handler_does_not_break_others(self, bus, mock_logger):
        failing = AsyncMock(side_effect=RuntimeError("boom"))
        healthy = AsyncMock()
        bus.subscribe(ExportYearSucceeded, failing)
        bus.subscribe(ExportYearSucceeded, healthy)

        await bus.publish(succeeded())

        healthy.assert_awaited_once()
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "event_handler_failed"
        assert mock_logger.warning.call_args.kwargs["error_message"] == "boom"

    async def test_unsubscribe(self, bus):
        handler = AsyncMock()
        bus.subscribe(ExportYearSucceeded, handler)
        bus.unsubscribe(ExportYearSucceeded, handler)
        bus.unsubscribe(ExportYearSucceeded, handler)

        await bus.publish(succeeded())

        handler.assert_not_awaited()


class TestExportProgressHandler:
    @pytest.fixture
    def wired(self, bus, mock_logger) -> InMemoryEventBus:
        ExportProgressHandler(logger=mock_logger).subscribe_all(bus)
        return bus

    def messages(self, mock_logger, level: str) -> list[str]:
        calls = getattr(mock_logger, level).call_args_list
        return [c.kwargs["message"] for c in calls if c.args[0] == "export_progress"]

    async def test_year_succeeded(self, wired, mock_logger):
        await wired.publish(succeeded(2022))

        assert self.messages(mock_logger, "info") == [
            "Export for 2022 requested (report 42)"
        ]

    async def test_rate_limited_failure_advises_waiting(self, wired, mock_logger):
        await wired.publish(
            ExportYearFailed(
                run_id=uuid4(),
                year=2021,
                error_code="provider_rate_limited",
                message="Trading212 API rate limit exceeded",
                rate_limited=True,
            )
        )

        (message,) = self.messages(mock_logger, "warning")
        assert message.startswith("Export for 2021 failed")
        assert message.endswith("Rate limit reached, wait a minute before retrying")

    async def test_coverage_and_summary(self, wired, mock_logger):
        run_id = uuid4()
        await wired.publish(
            ExportCoverageAnalyzed(
                run_id=run_id, covered_years=(2021, 2022), missing_years=(2023,)
            )
        )
        await wired.publish(
            ExportRunCompleted(
                run_id=run_id, covered_count=2, exported_count=1, failed_count=0
            )
        )

        assert self.messages(mock_logger, "info") == [
            "Already exported: 2021, 2022. Requesting: 2023",
            "Done: 2 already covered, 1 newly exported, 0 failed",
        ]

    async def test_backoff_and_polling(self, wired, mock_logger):
        await wired.publish(
            ExportBackoffEscalated(
                run_id=uuid4(), previous_delay_seconds=20.0, delay_seconds=40.0
            )
        )
        await wired.publish(
            ExportStatusPolled(
                attempt=1, pending_report_ids=("1",), finished_report_ids=("2", "3")
            )
        )

        assert self.messages(mock_logger, "warning") == [
            "Slowing down: waiting 40s between requests (was 20s)"
        ]
        assert self.messages(mock_logger, "info") == [
            "2 finished, 1 processing, 0 failed"
        ]
