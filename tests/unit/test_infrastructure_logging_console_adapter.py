"""Unit tests for ConsoleAdapter (structured console logging).

Architecture:
- Unit tests with mocked structlog
- Tests protocol compliance
"""

from unittest.mock import MagicMock, patch

import pytest

from t212_dashboard.domain.protocols import LoggerProtocol
from t212_dashboard.infrastructure.logging.console_adapter import ConsoleAdapter

STRUCTLOG = "t212_dashboard.infrastructure.logging.console_adapter.structlog"


@pytest.fixture
def structlog_logger():
    with patch(STRUCTLOG) as mock_structlog:
        logger = MagicMock()
        mock_structlog.get_logger.return_value = logger
        yield logger


@pytest.mark.parametrize("level", ["debug", "info", "warning"])
def test_level_methods_forward_context(structlog_logger, level):
    adapter = ConsoleAdapter()

    getattr(adapter, level)("export_year_succeeded", year=2023, report_id="1")

    getattr(structlog_logger, level).assert_called_once_with(
        "export_year_succeeded", year=2023, report_id="1"
    )


def test_error_includes_exception_details(structlog_logger):
    adapter = ConsoleAdapter()

    adapter.error("csv_fetch_crashed", error=ValueError("bad"), report_id="7")

    structlog_logger.error.assert_called_once_with(
        "csv_fetch_crashed",
        report_id="7",
        error_type="ValueError",
        error_message="bad",
    )


def test_critical_without_exception(structlog_logger):
    ConsoleAdapter().critical("event_bus_down")

    structlog_logger.critical.assert_called_once_with("event_bus_down")


def test_bind_returns_new_adapter_with_context(structlog_logger):
    bound_logger = MagicMock()
    structlog_logger.bind.return_value = bound_logger
    adapter = ConsoleAdapter()

    bound = adapter.bind(run_id="abc")
    bound.info("export_run_started")

    assert bound is not adapter
    structlog_logger.bind.assert_called_once_with(run_id="abc")
    bound_logger.info.assert_called_once_with("export_run_started")


def test_json_renderer_selected():
    with patch(STRUCTLOG) as mock_structlog:
        ConsoleAdapter(use_json=True, level="debug")

        processors = mock_structlog.configure.call_args.kwargs["processors"]
        assert processors[-1] is mock_structlog.processors.JSONRenderer.return_value


def test_satisfies_logger_protocol():
    adapter: LoggerProtocol = ConsoleAdapter()

    for name in ("debug", "info", "warning", "error", "critical", "bind", "with_context"):
        assert callable(getattr(adapter, name))
