"""AccountCash value object (`GET /equity/account/cash`)."""

from dataclasses import dataclass
from decimal import Decimal

from t212_dashboard.domain.parsing import ZERO


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountCash:
    """Account cash snapshot in the account currency.

    Attributes:
        free: Cash available to trade.
        total: Total account value.
        invested: Amount invested in open positions.
        ppl: Unrealized profit/loss of open positions.
        result: Realized result.
        blocked: Cash blocked by pending orders.
        pie_cash: Uninvested cash held in pies.
    """

    free: Decimal = ZERO
    total: Decimal = ZERO
    invested: Decimal = ZERO
    ppl: Decimal = ZERO
    result: Decimal = ZERO
    blocked: Decimal = ZERO
    pie_cash: Decimal = ZERO
