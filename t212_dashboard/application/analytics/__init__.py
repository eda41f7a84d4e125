"""Analytics facets.

Each facet is a pure function over a transaction list that returns a
frozen summary. Nothing is cached; callers recompute when the list changes.
"""

from t212_dashboard.application.analytics.actions import (
    ActionCount,
    ActionSummary,
    summarize_actions,
)
from t212_dashboard.application.analytics.cash_flows import (
    CashFlow,
    CashFlowSummary,
    MonthlyDeposits,
    summarize_cash_flows,
)
from t212_dashboard.application.analytics.common import DateRange, Tally
from t212_dashboard.application.analytics.dividends import (
    DividendPayment,
    DividendSummary,
    PeriodDividends,
    StockDividends,
    TypeDividends,
    summarize_dividends,
)
from t212_dashboard.application.analytics.interest import (
    InterestPayment,
    InterestSummary,
    summarize_interest,
)
from t212_dashboard.application.analytics.trading import (
    POSITION_EPSILON,
    CompanyVolume,
    MonthlyActivity,
    Position,
    Trade,
    TradingSummary,
    summarize_trading,
)

__all__ = [
    "POSITION_EPSILON",
    "ActionCount",
    "ActionSummary",
    "CashFlow",
    "CashFlowSummary",
    "CompanyVolume",
    "DateRange",
    "DividendPayment",
    "DividendSummary",
    "InterestPayment",
    "InterestSummary",
    "MonthlyActivity",
    "MonthlyDeposits",
    "PeriodDividends",
    "Position",
    "StockDividends",
    "Tally",
    "Trade",
    "TradingSummary",
    "TypeDividends",
    "summarize_actions",
    "summarize_cash_flows",
    "summarize_dividends",
    "summarize_interest",
    "summarize_trading",
]
