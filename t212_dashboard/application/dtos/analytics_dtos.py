"""Analytics DTOs."""

from dataclasses import dataclass

from t212_dashboard.application.analytics import (
    ActionSummary,
    CashFlowSummary,
    DividendSummary,
    InterestSummary,
    TradingSummary,
)


@dataclass(frozen=True, kw_only=True)
class PortfolioAnalytics:
    """Every analytics facet computed over one transaction list."""

    cash_flows: CashFlowSummary
    dividends: DividendSummary
    interest: InterestSummary
    trading: TradingSummary
    actions: ActionSummary
