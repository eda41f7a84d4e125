"""Analytics queries."""

from collections.abc import Sequence
from dataclasses import dataclass

from t212_dashboard.domain.entities import TransactionRecord


@dataclass(frozen=True, kw_only=True)
class GetPortfolioAnalytics:
    """Query every analytics facet over one transaction list.

    Attributes:
        records: Ingested transactions (any order).
        top_n: Size of the top-stock and top-company rankings.
    """

    records: Sequence[TransactionRecord]
    top_n: int = 10
