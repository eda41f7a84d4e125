"""Shared building blocks for the analytics facets."""

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import TypeVar

from t212_dashboard.domain.entities import TransactionRecord
from t212_dashboard.domain.parsing import ZERO

T = TypeVar("T")

SECONDS_PER_DAY = 86_400

_UNDATED = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True, slots=True, kw_only=True)
class Tally:
    """Running total and count of one bucket."""

    total: Decimal = ZERO
    count: int = 0

    def add(self, amount: Decimal) -> "Tally":
        return Tally(total=self.total + amount, count=self.count + 1)


@dataclass(frozen=True, slots=True, kw_only=True)
class DateRange:
    """Earliest and latest parsable `Time` of a record set."""

    earliest: datetime
    latest: datetime

    @property
    def total_days(self) -> int:
        """Whole days spanned, rounded up."""
        seconds = (self.latest - self.earliest).total_seconds()
        return math.ceil(seconds / SECONDS_PER_DAY)

    @classmethod
    def of(cls, records: Iterable[TransactionRecord]) -> "DateRange | None":
        times = [t for t in (r.parsed_time for r in records) if t is not None]
        if not times:
            return None
        return cls(earliest=min(times), latest=max(times))


def chronological(
    items: Sequence[T],
    timestamp: Callable[[T], datetime | None],
) -> tuple[T, ...]:
    """Stable ascending sort; undated items keep their order at the end."""

    def key(item: T) -> tuple[bool, datetime]:
        moment = timestamp(item)
        return (moment is None, moment or _UNDATED)

    return tuple(sorted(items, key=key))


def month_key(moment: datetime) -> str:
    """`YYYY-MM` bucket key."""
    return f"{moment.year:04d}-{moment.month:02d}"


def year_key(moment: datetime) -> str:
    return f"{moment.year:04d}"


def action_is(record: TransactionRecord, *actions: str) -> bool:
    """Case-insensitive exact match on `Action`."""
    return record.action.strip().lower() in actions
