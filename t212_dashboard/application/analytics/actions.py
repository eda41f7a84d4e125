"""Transaction action breakdown."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from t212_dashboard.application.analytics.common import DateRange
from t212_dashboard.core.constants import UNKNOWN_LABEL
from t212_dashboard.domain.entities import TransactionRecord


@dataclass(frozen=True, slots=True, kw_only=True)
class ActionCount:
    action: str
    count: int
    percentage: float


@dataclass(frozen=True, kw_only=True)
class ActionSummary:
    """Row count per `Action` value.

    Attributes:
        total_count: Number of records.
        actions: One entry per distinct action, sorted by name.
        most_common: Action with the highest count; the alphabetically
            first one on ties. None without records.
        date_range: Span of every record.
    """

    total_count: int = 0
    actions: tuple[ActionCount, ...] = ()
    most_common: ActionCount | None = None
    date_range: DateRange | None = None


def summarize_actions(records: Sequence[TransactionRecord]) -> ActionSummary:
    counts = Counter(r.action or UNKNOWN_LABEL for r in records)
    total = len(records)
    actions = tuple(
        ActionCount(
            action=action,
            count=count,
            percentage=round(count / total * 100, 1),
        )
        for action, count in sorted(counts.items())
    )
    return ActionSummary(
        total_count=total,
        actions=actions,
        # max() keeps the first maximum, so ties resolve alphabetically
        most_common=max(actions, key=lambda a: a.count, default=None),
        date_range=DateRange.of(records),
    )
