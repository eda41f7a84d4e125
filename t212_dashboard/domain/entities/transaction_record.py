"""TransactionRecord entity.

One data row of a history export CSV, typed over the columns the analytics
need. Columns the record does not know are kept verbatim in `extra` so new
export columns survive a round trip.

Known columns:
    Action, Time, ISIN, Ticker, Name, Notes, ID, No. of shares,
    Price / share, Result, Total, Currency (Total), Merchant name,
    Merchant category, Type

Provenance:
    Every ingested record carries the report it came from
    (`report_id`, `report_time_from`, `report_time_to`).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from t212_dashboard.core.constants import DEFAULT_CURRENCY, UNKNOWN_LABEL
from t212_dashboard.domain.parsing import parse_amount, parse_timestamp

# CSV column → record attribute
COLUMN_FIELDS: dict[str, str] = {
    "Action": "action",
    "Time": "time",
    "ISIN": "isin",
    "Ticker": "ticker",
    "Name": "name",
    "Notes": "notes",
    "ID": "id",
    "No. of shares": "shares",
    "Price / share": "price_per_share",
    "Result": "result",
    "Total": "total",
    "Currency (Total)": "currency",
    "Merchant name": "merchant_name",
    "Merchant category": "merchant_category",
    "Type": "type",
}


def _empty_extra() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True, kw_only=True)
class TransactionRecord:
    """Typed export row with an extension bag.

    Raw values are kept as the CSV text. Numeric and time accessors parse
    on read with lenient semantics (see `domain.parsing`).

    Attributes:
        action: `Action` column (e.g. "Market buy", "Dividend (Dividend)").
        time: `Time` column as written in the CSV.
        total: `Total` column (signed amount in account currency).
        currency: `Currency (Total)` column.
        extra: Read-only mapping of unrecognized columns.
        columns: Original column order, used by `as_row()`.
        report_id: Export the row was ingested from.
    """

    action: str = ""
    time: str = ""
    isin: str = ""
    ticker: str = ""
    name: str = ""
    notes: str = ""
    id: str = ""
    shares: str = ""
    price_per_share: str = ""
    result: str = ""
    total: str = ""
    currency: str = ""
    merchant_name: str = ""
    merchant_category: str = ""
    type: str = ""
    extra: Mapping[str, str] = field(default_factory=_empty_extra)
    columns: tuple[str, ...] = ()
    report_id: str | None = None
    report_time_from: datetime | None = None
    report_time_to: datetime | None = None

    @classmethod
    def from_row(
        cls,
        row: Mapping[str, str],
        *,
        report_id: str | None = None,
        report_time_from: datetime | None = None,
        report_time_to: datetime | None = None,
    ) -> "TransactionRecord":
        """Build a record from a parsed CSV row.

        Args:
            row: Column → value mapping in file column order.
            report_id: Source export id.
            report_time_from: Source export range start.
            report_time_to: Source export range end.

        Returns:
            TransactionRecord: Typed record; unknown columns land in `extra`.
        """
        known: dict[str, Any] = {}
        extra: dict[str, str] = {}
        for column, value in row.items():
            attribute = COLUMN_FIELDS.get(column)
            if attribute is None:
                extra[column] = value
            else:
                known[attribute] = value
        return cls(
            **known,
            extra=MappingProxyType(extra),
            columns=tuple(row.keys()),
            report_id=report_id,
            report_time_from=report_time_from,
            report_time_to=report_time_to,
        )

    def as_row(self) -> dict[str, str]:
        """Reproduce the flat column mapping the record was built from.

        Records built directly (without `from_row`) emit every known column
        followed by `extra`.
        """
        columns = self.columns or (*COLUMN_FIELDS, *self.extra)
        row: dict[str, str] = {}
        for column in columns:
            attribute = COLUMN_FIELDS.get(column)
            if attribute is None:
                row[column] = self.extra.get(column, "")
            else:
                row[column] = getattr(self, attribute)
        return row

    # ------------------------------------------------------------------
    # Parsed accessors
    # ------------------------------------------------------------------

    @property
    def parsed_time(self) -> datetime | None:
        return parse_timestamp(self.time)

    @property
    def total_amount(self) -> Decimal:
        return parse_amount(self.total)

    @property
    def share_count(self) -> Decimal:
        return parse_amount(self.shares)

    @property
    def price_amount(self) -> Decimal:
        return parse_amount(self.price_per_share)

    @property
    def result_amount(self) -> Decimal:
        return parse_amount(self.result)

    @property
    def currency_code(self) -> str:
        """Currency with the account default for blank cells."""
        return self.currency or DEFAULT_CURRENCY

    @property
    def ticker_label(self) -> str:
        return self.ticker or UNKNOWN_LABEL

    @property
    def name_label(self) -> str:
        """Company name, falling back to ticker, then "Unknown"."""
        return self.name or self.ticker_label
