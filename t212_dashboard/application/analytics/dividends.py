"""Dividend facet.

Selects rows whose `Action` contains "dividend" and classifies each one as
Regular Dividend, Manufactured Payment or Tax Exempted.
"""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from t212_dashboard.application.analytics.common import (
    DateRange,
    Tally,
    chronological,
)
from t212_dashboard.domain.entities import TransactionRecord
from t212_dashboard.domain.enums import DividendType
from t212_dashboard.domain.parsing import ZERO

DEFAULT_TOP_N = 10


@dataclass(frozen=True, slots=True, kw_only=True)
class DividendPayment:
    time: str
    timestamp: datetime | None
    ticker: str
    name: str
    amount: Decimal
    currency: str
    shares: Decimal
    id: str
    type: DividendType
    action: str


@dataclass(frozen=True, slots=True, kw_only=True)
class StockDividends:
    """Dividends received from one ticker."""

    ticker: str
    name: str
    total: Decimal
    count: int
    payments: tuple[DividendPayment, ...]
    by_type: dict[DividendType, Tally]


@dataclass(frozen=True, slots=True, kw_only=True)
class PeriodDividends:
    """Dividends of one month of year (1-12) or one calendar year."""

    period: int
    total: Decimal
    count: int
    by_type: dict[DividendType, Tally]


@dataclass(frozen=True, slots=True, kw_only=True)
class TypeDividends:
    type: DividendType
    total: Decimal
    count: int
    unique_stocks: int
    payments: tuple[DividendPayment, ...]


@dataclass(frozen=True, kw_only=True)
class DividendSummary:
    """Dividend totals and breakdowns.

    Attributes:
        total: Sum of all dividend amounts.
        count: Number of dividend rows.
        payments: Every payment, oldest first.
        by_stock: Ticker → StockDividends.
        by_month: Month of year → totals across years (months with
            payments only).
        by_year: Calendar year → totals.
        by_type: DividendType → totals with unique stock count.
        average: `total / count` (0 without payments).
        top_stocks: Highest-paying tickers, by total descending.
        date_range: Span of the dividend rows.
    """

    total: Decimal = ZERO
    count: int = 0
    payments: tuple[DividendPayment, ...] = ()
    by_stock: dict[str, StockDividends] = field(default_factory=dict)
    by_month: dict[int, PeriodDividends] = field(default_factory=dict)
    by_year: dict[int, PeriodDividends] = field(default_factory=dict)
    by_type: dict[DividendType, TypeDividends] = field(default_factory=dict)
    average: Decimal = ZERO
    top_stocks: tuple[StockDividends, ...] = ()
    date_range: DateRange | None = None


def is_dividend(record: TransactionRecord) -> bool:
    return "dividend" in record.action.lower()


def _payment(record: TransactionRecord) -> DividendPayment:
    return DividendPayment(
        time=record.time,
        timestamp=record.parsed_time,
        ticker=record.ticker_label,
        name=record.name_label,
        amount=record.total_amount,
        currency=record.currency_code,
        shares=record.share_count,
        id=record.id,
        type=DividendType.from_action(record.action),
        action=record.action,
    )


def _type_tallies(payments: Sequence[DividendPayment]) -> dict[DividendType, Tally]:
    tallies: dict[DividendType, Tally] = {}
    for payment in payments:
        tallies[payment.type] = tallies.get(payment.type, Tally()).add(payment.amount)
    return tallies


def _total(payments: Sequence[DividendPayment]) -> Decimal:
    return sum((p.amount for p in payments), ZERO)


def _periods(
    groups: dict[int, list[DividendPayment]],
) -> dict[int, PeriodDividends]:
    return {
        period: PeriodDividends(
            period=period,
            total=_total(payments),
            count=len(payments),
            by_type=_type_tallies(payments),
        )
        for period, payments in sorted(groups.items())
    }


def summarize_dividends(
    records: Sequence[TransactionRecord],
    top_n: int = DEFAULT_TOP_N,
) -> DividendSummary:
    """Compute the dividend facet.

    Args:
        records: Transactions in any order.
        top_n: Size of the top-stock ranking.

    Returns:
        DividendSummary: Empty summary when no dividend rows exist.
    """
    rows = [r for r in records if is_dividend(r)]
    if not rows:
        return DividendSummary()

    payments = chronological([_payment(r) for r in rows], lambda p: p.timestamp)

    per_stock: dict[str, list[DividendPayment]] = defaultdict(list)
    per_month: dict[int, list[DividendPayment]] = defaultdict(list)
    per_year: dict[int, list[DividendPayment]] = defaultdict(list)
    per_type: dict[DividendType, list[DividendPayment]] = defaultdict(list)
    for payment in payments:
        per_stock[payment.ticker].append(payment)
        per_type[payment.type].append(payment)
        if payment.timestamp is not None:
            per_month[payment.timestamp.month].append(payment)
            per_year[payment.timestamp.year].append(payment)

    by_stock = {
        ticker: StockDividends(
            ticker=ticker,
            # first payment's name wins
            name=stock_payments[0].name,
            total=_total(stock_payments),
            count=len(stock_payments),
            payments=tuple(stock_payments),
            by_type=_type_tallies(stock_payments),
        )
        for ticker, stock_payments in per_stock.items()
    }
    by_type = {
        kind: TypeDividends(
            type=kind,
            total=_total(type_payments),
            count=len(type_payments),
            unique_stocks=len({p.ticker for p in type_payments}),
            payments=tuple(type_payments),
        )
        for kind, type_payments in per_type.items()
    }

    total = _total(payments)
    return DividendSummary(
        total=total,
        count=len(payments),
        payments=payments,
        by_stock=by_stock,
        by_month=_periods(per_month),
        by_year=_periods(per_year),
        by_type=by_type,
        average=total / len(payments),
        top_stocks=tuple(
            sorted(by_stock.values(), key=lambda s: s.total, reverse=True)[
                : max(top_n, 0)
            ]
        ),
        date_range=DateRange.of(rows),
    )
