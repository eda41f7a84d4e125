"""GetPortfolioAnalytics query handler.

Runs every analytics facet over one transaction list. Side-effect free.
"""

from collections.abc import Sequence

from t212_dashboard.application.analytics import (
    summarize_actions,
    summarize_cash_flows,
    summarize_dividends,
    summarize_interest,
    summarize_trading,
)
from t212_dashboard.application.dtos import PortfolioAnalytics
from t212_dashboard.application.queries.analytics_queries import (
    GetPortfolioAnalytics,
)
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.errors import ValidationError
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.entities import TransactionRecord
from t212_dashboard.domain.protocols import LoggerProtocol


class GetPortfolioAnalyticsHandler:
    """Handler for GetPortfolioAnalytics query.

    Returns:
        Result[PortfolioAnalytics, ValidationError]
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def handle(
        self, query: GetPortfolioAnalytics
    ) -> Result[PortfolioAnalytics, ValidationError]:
        records = query.records
        if (
            isinstance(records, str | bytes)
            or not isinstance(records, Sequence)
            or not all(isinstance(r, TransactionRecord) for r in records)
        ):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="Records must be a sequence of TransactionRecord",
                    field="records",
                )
            )
        if query.top_n < 1:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="top_n must be at least 1",
                    field="top_n",
                    details={"top_n": query.top_n},
                )
            )

        analytics = PortfolioAnalytics(
            cash_flows=summarize_cash_flows(records),
            dividends=summarize_dividends(records, top_n=query.top_n),
            interest=summarize_interest(records),
            trading=summarize_trading(records, top_n=query.top_n),
            actions=summarize_actions(records),
        )
        self._logger.debug(
            "portfolio_analytics_computed",
            records=len(records),
            dividends=analytics.dividends.count,
            interest_payments=analytics.interest.total_count,
            trades=analytics.trading.total_trades,
        )
        return Success(value=analytics)
