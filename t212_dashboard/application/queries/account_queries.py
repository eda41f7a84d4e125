"""Account queries."""

from dataclasses import dataclass, field

from t212_dashboard.domain.value_objects import AccountSnapshotCache


@dataclass(frozen=True, kw_only=True)
class GetAccountSnapshot:
    """Query the account cash snapshot.

    Attributes:
        credential: Brokerage API key.
        cache: Optional single-use cache returned by credential
            verification. Consumed on first use.
    """

    credential: str = field(repr=False)
    cache: AccountSnapshotCache | None = None
