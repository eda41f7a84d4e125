"""Account DTOs."""

from dataclasses import dataclass

from t212_dashboard.domain.value_objects import AccountCash, AccountSnapshotCache


@dataclass(frozen=True, kw_only=True)
class VerifiedCredential:
    """Outcome of a successful credential probe.

    Attributes:
        snapshot: Account cash fetched by the probe.
        cache: Single-use cache holding the same snapshot, to be passed to
            the first GetAccountSnapshot query.
    """

    snapshot: AccountCash
    cache: AccountSnapshotCache
