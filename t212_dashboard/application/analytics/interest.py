"""Interest on cash facet."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from t212_dashboard.application.analytics.common import (
    DateRange,
    Tally,
    action_is,
    chronological,
    month_key,
    year_key,
)
from t212_dashboard.domain.entities import TransactionRecord

INTEREST_ACTION = "interest on cash"
DEFAULT_INTEREST_NOTE = "Interest on cash"


@dataclass(frozen=True, slots=True, kw_only=True)
class InterestPayment:
    time: str
    timestamp: datetime | None
    amount: Decimal
    currency: str
    notes: str
    id: str


@dataclass(frozen=True, kw_only=True)
class InterestSummary:
    """Interest totals per currency.

    Attributes:
        total_count: Number of interest rows.
        by_currency: Currency → Tally.
        payments: Every payment, oldest first.
        monthly: Currency → `YYYY-MM` → Tally.
        yearly: Currency → `YYYY` → Tally.
        currencies: Distinct currencies, sorted.
        date_range: Span of the interest rows.
    """

    total_count: int = 0
    by_currency: dict[str, Tally] = field(default_factory=dict)
    payments: tuple[InterestPayment, ...] = ()
    monthly: dict[str, dict[str, Tally]] = field(default_factory=dict)
    yearly: dict[str, dict[str, Tally]] = field(default_factory=dict)
    currencies: tuple[str, ...] = ()
    date_range: DateRange | None = None


def _bump(
    buckets: dict[str, dict[str, Tally]],
    currency: str,
    key: str,
    amount: Decimal,
) -> None:
    per_currency = buckets.setdefault(currency, {})
    per_currency[key] = per_currency.get(key, Tally()).add(amount)


def summarize_interest(records: Sequence[TransactionRecord]) -> InterestSummary:
    """Compute the interest facet.

    Args:
        records: Transactions in any order.

    Returns:
        InterestSummary: Empty summary when no interest rows exist.
    """
    rows = [r for r in records if action_is(r, INTEREST_ACTION)]

    payments = chronological(
        [
            InterestPayment(
                time=r.time,
                timestamp=r.parsed_time,
                amount=r.total_amount,
                currency=r.currency_code,
                notes=r.notes or DEFAULT_INTEREST_NOTE,
                id=r.id,
            )
            for r in rows
        ],
        lambda p: p.timestamp,
    )

    by_currency: dict[str, Tally] = {}
    monthly: dict[str, dict[str, Tally]] = {}
    yearly: dict[str, dict[str, Tally]] = {}
    for payment in payments:
        currency = payment.currency
        by_currency[currency] = by_currency.get(currency, Tally()).add(payment.amount)
        if payment.timestamp is None:
            continue
        _bump(monthly, currency, month_key(payment.timestamp), payment.amount)
        _bump(yearly, currency, year_key(payment.timestamp), payment.amount)

    return InterestSummary(
        total_count=len(payments),
        by_currency=by_currency,
        payments=payments,
        monthly=monthly,
        yearly=yearly,
        currencies=tuple(sorted(by_currency)),
        date_range=DateRange.of(rows),
    )
