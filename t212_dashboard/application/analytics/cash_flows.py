"""Deposits and withdrawals facet.

Deposit-like actions: `Deposit`, `Spending cashback`.
Withdrawal-like actions: `Withdrawal`, `Card debit` (stored as absolute
amounts).
"""

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
from t212_dashboard.domain.parsing import ZERO

# lowercased Action → detail type label
DEPOSIT_TYPES: dict[str, str] = {
    "deposit": "Deposit",
    "spending cashback": "Cashback",
}
WITHDRAWAL_TYPES: dict[str, str] = {
    "withdrawal": "Withdrawal",
    "card debit": "Card Debit",
}

CASHBACK_NOTE = "Cashback from card spending"
CARD_MERCHANT_FALLBACK = "Card payment"
CARD_CATEGORY_FALLBACK = "Purchase"

MONTHS = range(1, 13)


@dataclass(frozen=True, slots=True, kw_only=True)
class CashFlow:
    """One deposit or withdrawal.

    Attributes:
        time: `Time` as written in the CSV.
        timestamp: Parsed `Time` (None when unparsable).
        amount: Signed total for deposits, absolute total for withdrawals.
        type: "Deposit", "Cashback", "Withdrawal" or "Card Debit".
    """

    time: str
    timestamp: datetime | None
    amount: Decimal
    currency: str
    notes: str
    id: str
    type: str


@dataclass(frozen=True, slots=True, kw_only=True)
class MonthlyDeposits:
    month: int
    total: Decimal = ZERO
    count: int = 0
    deposits: tuple[CashFlow, ...] = ()


@dataclass(frozen=True, kw_only=True)
class CashFlowSummary:
    """Deposit and withdrawal totals.

    Attributes:
        total_deposits: Sum of deposit amounts.
        total_withdrawals: Sum of absolute withdrawal amounts.
        deposits_by_type: Type label → Tally.
        withdrawals_by_type: Type label → Tally.
        deposits: Deposit details, oldest first.
        withdrawals: Withdrawal details, oldest first.
        deposits_by_month: Month of year (1-12, all present) → totals
            across every year.
        date_range: Span of the deposit and withdrawal rows.
    """

    total_deposits: Decimal = ZERO
    total_withdrawals: Decimal = ZERO
    deposits_by_type: dict[str, Tally] = field(default_factory=dict)
    withdrawals_by_type: dict[str, Tally] = field(default_factory=dict)
    deposits: tuple[CashFlow, ...] = ()
    withdrawals: tuple[CashFlow, ...] = ()
    deposits_by_month: dict[int, MonthlyDeposits] = field(
        default_factory=lambda: {m: MonthlyDeposits(month=m) for m in MONTHS}
    )
    date_range: DateRange | None = None

    @property
    def net_flow(self) -> Decimal:
        return self.total_deposits - self.total_withdrawals


def _deposit(record: TransactionRecord, label: str) -> CashFlow:
    return CashFlow(
        time=record.time,
        timestamp=record.parsed_time,
        amount=record.total_amount,
        currency=record.currency_code,
        notes=CASHBACK_NOTE if label == "Cashback" else record.notes,
        id=record.id,
        type=label,
    )


def _withdrawal(record: TransactionRecord, label: str) -> CashFlow:
    if label == "Card Debit":
        merchant = record.merchant_name or CARD_MERCHANT_FALLBACK
        category = record.merchant_category or CARD_CATEGORY_FALLBACK
        notes = f"{merchant} - {category}"
    else:
        notes = record.notes
    return CashFlow(
        time=record.time,
        timestamp=record.parsed_time,
        amount=abs(record.total_amount),
        currency=record.currency_code,
        notes=notes,
        id=record.id,
        type=label,
    )


def _by_type(flows: Sequence[CashFlow]) -> dict[str, Tally]:
    tallies: dict[str, Tally] = {}
    for flow in flows:
        tallies[flow.type] = tallies.get(flow.type, Tally()).add(flow.amount)
    return tallies


def summarize_cash_flows(records: Sequence[TransactionRecord]) -> CashFlowSummary:
    """Compute the deposits/withdrawals facet.

    Args:
        records: Transactions in any order.

    Returns:
        CashFlowSummary: Empty summary (all twelve months zeroed) when no
        row matches.
    """
    deposit_rows: list[CashFlow] = []
    withdrawal_rows: list[CashFlow] = []
    matched: list[TransactionRecord] = []

    for record in records:
        action = record.action.strip().lower()
        if action in DEPOSIT_TYPES:
            deposit_rows.append(_deposit(record, DEPOSIT_TYPES[action]))
        elif action in WITHDRAWAL_TYPES:
            withdrawal_rows.append(_withdrawal(record, WITHDRAWAL_TYPES[action]))
        else:
            continue
        matched.append(record)

    deposits = chronological(deposit_rows, lambda flow: flow.timestamp)
    withdrawals = chronological(withdrawal_rows, lambda flow: flow.timestamp)

    month_buckets: dict[int, list[CashFlow]] = {m: [] for m in MONTHS}
    for flow in deposits:
        # undated deposits have no month of year
        if flow.timestamp is not None:
            month_buckets[flow.timestamp.month].append(flow)

    return CashFlowSummary(
        total_deposits=sum((f.amount for f in deposits), ZERO),
        total_withdrawals=sum((f.amount for f in withdrawals), ZERO),
        deposits_by_type=_by_type(deposits),
        withdrawals_by_type=_by_type(withdrawals),
        deposits=deposits,
        withdrawals=withdrawals,
        deposits_by_month={
            month: MonthlyDeposits(
                month=month,
                total=sum((f.amount for f in flows), ZERO),
                count=len(flows),
                deposits=tuple(flows),
            )
            for month, flows in month_buckets.items()
        },
        date_range=DateRange.of(matched),
    )
