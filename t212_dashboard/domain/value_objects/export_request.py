"""ExportRequest value object.

Body of `POST /equity/history/exports`:

    {
        "dataIncluded": {
            "includeDividends": true,
            "includeInterest": true,
            "includeOrders": true,
            "includeTransactions": true
        },
        "timeFrom": "2023-01-01T00:00:00Z",
        "timeTo": "2023-12-31T23:59:59Z"
    }
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from t212_dashboard.domain.parsing import format_timestamp


@dataclass(frozen=True, slots=True, kw_only=True)
class ExportRequest:
    """Time range and data categories of one export job.

    Attributes:
        time_from: Range start (UTC).
        time_to: Range end (UTC).
        include_dividends: Include dividend rows.
        include_interest: Include interest rows.
        include_orders: Include order rows.
        include_transactions: Include cash transaction rows.
    """

    time_from: datetime
    time_to: datetime
    include_dividends: bool = True
    include_interest: bool = True
    include_orders: bool = True
    include_transactions: bool = True

    def __post_init__(self) -> None:
        if self.time_to < self.time_from:
            raise ValueError("time_to must not precede time_from")

    @classmethod
    def for_year(cls, year: int, now: datetime) -> "ExportRequest":
        """Build a full calendar-year request.

        Past years span Jan 1 00:00:00Z to Dec 31 23:59:59Z. The current
        year ends at `now`.

        Args:
            year: Calendar year to export.
            now: Current time (aware).

        Returns:
            ExportRequest: Request covering the year.
        """
        now = now.astimezone(UTC)
        time_from = datetime(year, 1, 1, tzinfo=UTC)
        if year >= now.year:
            time_to = now.replace(microsecond=0)
        else:
            time_to = datetime(year, 12, 31, 23, 59, 59, tzinfo=UTC)
        return cls(time_from=time_from, time_to=time_to)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the brokerage wire shape."""
        return {
            "dataIncluded": {
                "includeDividends": self.include_dividends,
                "includeInterest": self.include_interest,
                "includeOrders": self.include_orders,
                "includeTransactions": self.include_transactions,
            },
            "timeFrom": format_timestamp(self.time_from),
            "timeTo": format_timestamp(self.time_to),
        }
