"""Stock trading facet.

Replays buy and sell orders in chronological order to maintain one running
position per ticker.

Position rules:
    buy:  shares += n, invested += total, average = invested / shares
    sell: shares -= n, sold/realized += |total|, realized_pnl += result,
          open while shares > POSITION_EPSILON
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

from t212_dashboard.application.analytics.common import (
    DateRange,
    chronological,
    month_key,
)
from t212_dashboard.domain.entities import TransactionRecord
from t212_dashboard.domain.parsing import ZERO

TRADING_ACTIONS = frozenset(
    {
        "market buy",
        "limit buy",
        "stop buy",
        "market sell",
        "limit sell",
        "stop sell",
    }
)

POSITION_EPSILON = Decimal("0.0001")
"""Net share count at or below which a position counts as closed."""

DEFAULT_TOP_N = 10


@dataclass(frozen=True, slots=True, kw_only=True)
class Trade:
    time: str
    timestamp: datetime | None
    action: str
    ticker: str
    name: str
    shares: Decimal
    price: Decimal
    total: Decimal
    result: Decimal
    id: str
    isin: str

    @property
    def is_buy(self) -> bool:
        return "buy" in self.action.lower()

    @property
    def is_sell(self) -> bool:
        return "sell" in self.action.lower()


@dataclass(frozen=True, slots=True, kw_only=True)
class Position:
    """Running position of one ticker.

    Attributes:
        shares: Net shares held.
        invested: Cumulative buy totals.
        sold: Cumulative absolute sell totals.
        realized: Cumulative realized proceeds (equal to `sold`).
        realized_pnl: Cumulative `Result` of sells.
        average_buy_price: `invested / shares` after the last buy.
        is_open: Whether net shares remain.
    """

    ticker: str
    name: str
    shares: Decimal = ZERO
    invested: Decimal = ZERO
    sold: Decimal = ZERO
    realized: Decimal = ZERO
    realized_pnl: Decimal = ZERO
    average_buy_price: Decimal = ZERO
    is_open: bool = False
    trades: tuple[Trade, ...] = ()

    @property
    def volume(self) -> Decimal:
        return self.invested + self.realized

    def apply(self, trade: Trade) -> "Position":
        """Return the position after one trade."""
        if trade.is_buy:
            shares = self.shares + trade.shares
            invested = self.invested + trade.total
            return replace(
                self,
                shares=shares,
                invested=invested,
                average_buy_price=(
                    invested / shares if shares else self.average_buy_price
                ),
                is_open=shares > 0,
                trades=(*self.trades, trade),
            )
        if trade.is_sell:
            proceeds = abs(trade.total)
            shares = self.shares - trade.shares
            return replace(
                self,
                shares=shares,
                sold=self.sold + proceeds,
                realized=self.realized + proceeds,
                realized_pnl=self.realized_pnl + trade.result,
                is_open=shares > POSITION_EPSILON,
                trades=(*self.trades, trade),
            )
        return replace(self, trades=(*self.trades, trade))


@dataclass(frozen=True, slots=True, kw_only=True)
class MonthlyActivity:
    buys: int = 0
    sells: int = 0
    volume: Decimal = ZERO
    count: int = 0

    def add(self, trade: Trade) -> "MonthlyActivity":
        return MonthlyActivity(
            buys=self.buys + int(trade.is_buy),
            sells=self.sells + int(trade.is_sell and not trade.is_buy),
            volume=self.volume + abs(trade.total),
            count=self.count + 1,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class CompanyVolume:
    name: str
    volume: Decimal


@dataclass(frozen=True, kw_only=True)
class TradingSummary:
    """Order statistics and positions.

    Attributes:
        trades: Every order, oldest first.
        positions: Ticker → Position.
        total_invested: Sum of buy totals.
        total_realized: Sum of absolute sell totals.
        realized_gains: Sum of positive sell results.
        realized_losses: Sum of absolute negative sell results.
        companies: Distinct company names, sorted.
        order_types: Distinct `Action` values, sorted.
        monthly_activity: `YYYY-MM` → MonthlyActivity.
        top_companies: Companies by invested + realized, descending.
        date_range: Span of the order rows.
    """

    trades: tuple[Trade, ...] = ()
    positions: dict[str, Position] = field(default_factory=dict)
    total_buys: int = 0
    total_sells: int = 0
    total_invested: Decimal = ZERO
    total_realized: Decimal = ZERO
    realized_gains: Decimal = ZERO
    realized_losses: Decimal = ZERO
    companies: tuple[str, ...] = ()
    order_types: tuple[str, ...] = ()
    monthly_activity: dict[str, MonthlyActivity] = field(default_factory=dict)
    top_companies: tuple[CompanyVolume, ...] = ()
    date_range: DateRange | None = None

    @property
    def total_trades(self) -> int:
        return len(self.trades)

    @property
    def realized_pnl(self) -> Decimal:
        return self.realized_gains - self.realized_losses

    @property
    def open_positions(self) -> int:
        return sum(1 for p in self.positions.values() if p.is_open)


def is_trade(record: TransactionRecord) -> bool:
    return record.action.strip().lower() in TRADING_ACTIONS


def _trade(record: TransactionRecord) -> Trade:
    return Trade(
        time=record.time,
        timestamp=record.parsed_time,
        action=record.action,
        ticker=record.ticker_label,
        name=record.name_label,
        shares=record.share_count,
        price=record.price_amount,
        total=record.total_amount,
        result=record.result_amount,
        id=record.id,
        isin=record.isin,
    )


def summarize_trading(
    records: Sequence[TransactionRecord],
    top_n: int = DEFAULT_TOP_N,
) -> TradingSummary:
    """Compute the trading facet.

    Args:
        records: Transactions in any order.
        top_n: Size of the top-company ranking.

    Returns:
        TradingSummary: Empty summary when no order rows exist.
    """
    rows = [r for r in records if is_trade(r)]
    trades = chronological([_trade(r) for r in rows], lambda t: t.timestamp)

    positions: dict[str, Position] = {}
    monthly: dict[str, MonthlyActivity] = {}
    total_invested = ZERO
    total_realized = ZERO
    gains = ZERO
    losses = ZERO

    for trade in trades:
        position = positions.get(trade.ticker) or Position(
            ticker=trade.ticker, name=trade.name
        )
        positions[trade.ticker] = position.apply(trade)

        if trade.timestamp is not None:
            key = month_key(trade.timestamp)
            monthly[key] = monthly.get(key, MonthlyActivity()).add(trade)

        if trade.is_buy:
            total_invested += trade.total
        elif trade.is_sell:
            total_realized += abs(trade.total)
            if trade.result > 0:
                gains += trade.result
            elif trade.result < 0:
                losses += abs(trade.result)

    # positions sharing a company name: the later ticker's volume wins
    volumes = {p.name: p.volume for p in positions.values()}
    ranked = sorted(volumes.items(), key=lambda item: item[1], reverse=True)

    return TradingSummary(
        trades=trades,
        positions=positions,
        total_buys=sum(1 for t in trades if t.is_buy),
        total_sells=sum(1 for t in trades if t.is_sell),
        total_invested=total_invested,
        total_realized=total_realized,
        realized_gains=gains,
        realized_losses=losses,
        companies=tuple(sorted({t.name for t in trades})),
        order_types=tuple(sorted({t.action for t in trades})),
        monthly_activity=dict(sorted(monthly.items())),
        top_companies=tuple(
            CompanyVolume(name=name, volume=volume)
            for name, volume in ranked[: max(top_n, 0)]
        ),
        date_range=DateRange.of(rows),
    )
