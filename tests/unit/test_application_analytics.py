"""Unit tests for the analytics facets and GetPortfolioAnalyticsHandler."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from t212_dashboard.application.analytics import (
    DateRange,
    summarize_actions,
    summarize_cash_flows,
    summarize_dividends,
    summarize_interest,
    summarize_trading,
)
from t212_dashboard.application.queries import GetPortfolioAnalytics
from t212_dashboard.application.queries.handlers.get_portfolio_analytics_handler import (
    GetPortfolioAnalyticsHandler,
)
from t212_dashboard.core.errors import ValidationError
from t212_dashboard.core.result import Failure, Success
from t212_dashboard.domain.entities import TransactionRecord
from t212_dashboard.domain.enums import DividendType
from tests.conftest import make_record


def row(action: str, time: str = "", total: str = "", **columns: str) -> TransactionRecord:
    return make_record(
        row={
            "Action": action,
            "Time": time,
            "Total": total,
            **{key.replace("_", " "): value for key, value in columns.items()},
        }
    )


def trade(action: str, time: str, ticker: str, shares: str, total: str, result: str = "", name: str = ""):
    return make_record(
        row={
            "Action": action,
            "Time": time,
            "Ticker": ticker,
            "Name": name or ticker,
            "No. of shares": shares,
            "Total": total,
            "Result": result,
        }
    )


# =============================================================================
# Dividends
# =============================================================================


class TestDividends:
    @pytest.fixture
    def records(self) -> list[TransactionRecord]:
        return [
            make_record(
                row={"Currency (Total)": "EUR"},
                Action="Dividend",
                Ticker="AAPL",
                Total="10",
                Time="2023-03-10 09:00:00",
            ),
            make_record(
                row={"Currency (Total)": "EUR"},
                Action="Dividend (Tax Exempted)",
                Ticker="AAPL",
                Total="5",
                Time="2023-06-10 09:00:00",
            ),
            make_record(
                row={"Currency (Total)": "EUR"},
                Action="Dividend (Dividend manufactured payment)",
                Ticker="MSFT",
                Total="3",
                Time="2022-06-01 09:00:00",
            ),
        ]

    def test_totals_and_breakdowns(self, records):
        summary = summarize_dividends(records)

        assert summary.total == Decimal("18")
        assert summary.count == 3
        assert summary.by_stock["AAPL"].total == Decimal("15")
        assert summary.by_stock["AAPL"].count == 2
        assert summary.by_type[DividendType.TAX_EXEMPTED].count == 1
        assert summary.by_type[DividendType.MANUFACTURED_PAYMENT].unique_stocks == 1
        assert summary.by_type[DividendType.REGULAR].total == Decimal("10")
        assert summary.average == Decimal("6")

    def test_periods_and_ranking(self, records):
        summary = summarize_dividends(records, top_n=1)

        assert list(summary.by_month) == [3, 6]
        assert summary.by_month[6].total == Decimal("8")
        assert summary.by_month[6].by_type[DividendType.MANUFACTURED_PAYMENT].count == 1
        assert list(summary.by_year) == [2022, 2023]
        assert [s.ticker for s in summary.top_stocks] == ["AAPL"]

    def test_payments_are_oldest_first(self, records):
        summary = summarize_dividends(records)

        assert [p.ticker for p in summary.payments] == ["MSFT", "AAPL", "AAPL"]
        assert summary.date_range.earliest == datetime(2022, 6, 1, 9, tzinfo=UTC)

    def test_no_dividends(self):
        summary = summarize_dividends([row("Deposit", total="10")])

        assert summary.total == Decimal("0")
        assert summary.average == Decimal("0")
        assert summary.date_range is None


# =============================================================================
# Interest
# =============================================================================


class TestInterest:
    def test_totals_per_currency(self):
        records = [
            make_record(
                row={"Currency (Total)": "USD"},
                Action="Interest on cash",
                Total="2.25",
                Time="2023-02-01 00:00:00",
            ),
            make_record(
                row={"Currency (Total)": "EUR"},
                Action="Interest on cash",
                Total="1.50",
                Time="2023-01-01 00:00:00",
            ),
        ]

        summary = summarize_interest(records)

        assert summary.currencies == ("EUR", "USD")
        assert summary.by_currency["EUR"].total == Decimal("1.50")
        assert summary.total_count == 2
        assert summary.monthly["USD"]["2023-02"].total == Decimal("2.25")
        assert summary.yearly["EUR"]["2023"].count == 1

    def test_defaults(self):
        summary = summarize_interest([row("INTEREST ON CASH", total="0.10")])

        payment = summary.payments[0]
        assert payment.currency == "EUR"
        assert payment.notes == "Interest on cash"
        # undated rows are counted but not bucketed
        assert summary.monthly == {}
        assert summary.by_currency["EUR"].count == 1


# =============================================================================
# Cash flows
# =============================================================================


class TestCashFlows:
    def test_deposits_and_withdrawals(self):
        records = [
            row("Deposit", "2023-01-10 10:00:00", "100"),
            row("Spending cashback", "2023-01-20 10:00:00", "1.5"),
            row("Withdrawal", "2023-02-01 10:00:00", "-40"),
            make_record(
                row={
                    "Action": "Card debit",
                    "Time": "2023-02-02 10:00:00",
                    "Total": "-10",
                    "Merchant name": "Cafe",
                }
            ),
            row("Market buy", "2023-02-03 10:00:00", "50"),
        ]

        summary = summarize_cash_flows(records)

        assert summary.total_deposits == Decimal("101.5")
        assert summary.total_withdrawals == Decimal("50")
        assert summary.net_flow == Decimal("51.5")
        assert summary.deposits_by_type["Cashback"].count == 1
        assert summary.withdrawals_by_type["Card Debit"].total == Decimal("10")
        assert summary.deposits[1].notes == "Cashback from card spending"
        assert summary.withdrawals[1].notes == "Cafe - Purchase"
        assert summary.deposits_by_month[1].count == 2
        assert summary.date_range.latest == datetime(2023, 2, 2, 10, tzinfo=UTC)

    def test_month_histogram_always_has_twelve_months(self):
        summary = summarize_cash_flows([])

        assert sorted(summary.deposits_by_month) == list(range(1, 13))
        assert all(m.count == 0 for m in summary.deposits_by_month.values())


# =============================================================================
# Trading
# =============================================================================


class TestTrading:
    @pytest.fixture
    def records(self) -> list[TransactionRecord]:
        return [
            # out of order on purpose; the sell must replay after the buys
            trade("Market sell", "2023-03-01 10:00:00", "AAPL", "2", "-260", result="20"),
            trade("Market buy", "2023-01-01 10:00:00", "AAPL", "2", "200"),
            trade("Limit buy", "2023-02-01 10:00:00", "AAPL", "2", "240"),
            trade("Market buy", "2023-02-15 10:00:00", "TSLA", "1", "100"),
            trade("Stop sell", "2023-03-05 10:00:00", "TSLA", "1", "-90", result="-10"),
        ]

    def test_positions(self, records):
        summary = summarize_trading(records)

        aapl = summary.positions["AAPL"]
        assert aapl.shares == Decimal("2")
        assert aapl.invested == Decimal("440")
        assert aapl.average_buy_price == Decimal("110")
        assert aapl.realized_pnl == Decimal("20")
        assert aapl.is_open

        tsla = summary.positions["TSLA"]
        assert tsla.shares == Decimal("0")
        assert not tsla.is_open
        assert tsla.average_buy_price == Decimal("100")

    def test_totals(self, records):
        summary = summarize_trading(records)

        assert summary.total_trades == 5
        assert summary.total_buys == 3
        assert summary.total_sells == 2
        assert summary.total_invested == Decimal("540")
        assert summary.total_realized == Decimal("350")
        assert summary.realized_gains == Decimal("20")
        assert summary.realized_losses == Decimal("10")
        assert summary.realized_pnl == Decimal("10")
        assert summary.open_positions == 1
        assert summary.order_types == ("Limit buy", "Market buy", "Market sell", "Stop sell")

    def test_monthly_activity_and_top_companies(self, records):
        summary = summarize_trading(records, top_n=1)

        assert list(summary.monthly_activity) == ["2023-01", "2023-02", "2023-03"]
        march = summary.monthly_activity["2023-03"]
        assert (march.buys, march.sells, march.count) == (0, 2, 2)
        assert march.volume == Decimal("350")
        assert [c.name for c in summary.top_companies] == ["AAPL"]
        assert summary.top_companies[0].volume == Decimal("700")

    def test_ignores_non_orders(self):
        summary = summarize_trading([row("Deposit", total="10")])

        assert summary.total_trades == 0
        assert summary.positions == {}


# =============================================================================
# Actions
# =============================================================================


class TestActions:
    def test_counts_and_percentages(self):
        records = [
            row("Deposit", "2023-01-01 00:00:00"),
            row("Deposit", "2023-01-05 00:00:00"),
            row("Market buy", "2023-01-03 00:00:00"),
            row(""),
        ]

        summary = summarize_actions(records)

        assert summary.total_count == 4
        assert [(a.action, a.count, a.percentage) for a in summary.actions] == [
            ("Deposit", 2, 50.0),
            ("Market buy", 1, 25.0),
            ("Unknown", 1, 25.0),
        ]
        assert summary.most_common.action == "Deposit"
        assert summary.date_range.total_days == 4

    def test_tie_resolves_alphabetically(self):
        summary = summarize_actions([row("b"), row("a")])

        assert summary.most_common.action == "a"

    def test_empty(self):
        summary = summarize_actions([])

        assert summary.most_common is None
        assert summary.actions == ()


def test_date_range_rounds_up_partial_days():
    span = DateRange(
        earliest=datetime(2023, 1, 1, tzinfo=UTC),
        latest=datetime(2023, 1, 2, 1, tzinfo=UTC),
    )

    assert span.total_days == 2


# =============================================================================
# Handler
# =============================================================================


class TestGetPortfolioAnalyticsHandler:
    async def test_computes_every_facet(self, mock_logger):
        handler = GetPortfolioAnalyticsHandler(logger=mock_logger)
        records = [
            row("Deposit", "2023-01-01 00:00:00", "100"),
            row("Dividend", "2023-01-02 00:00:00", "2", Ticker="AAPL"),
            row("Interest on cash", "2023-01-03 00:00:00", "0.5"),
            trade("Market buy", "2023-01-04 00:00:00", "AAPL", "1", "50"),
        ]

        result = await handler.handle(GetPortfolioAnalytics(records=records))

        assert isinstance(result, Success)
        analytics = result.value
        assert analytics.cash_flows.total_deposits == Decimal("100")
        assert analytics.dividends.total == Decimal("2")
        assert analytics.interest.total_count == 1
        assert analytics.trading.total_trades == 1
        assert analytics.actions.total_count == 4

    @pytest.mark.parametrize(
        "query",
        [
            GetPortfolioAnalytics(records="Deposit"),
            GetPortfolioAnalytics(records=[{"Action": "Deposit"}]),
            GetPortfolioAnalytics(records=[], top_n=0),
        ],
    )
    async def test_rejects_invalid_queries(self, mock_logger, query):
        handler = GetPortfolioAnalyticsHandler(logger=mock_logger)

        result = await handler.handle(query)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
