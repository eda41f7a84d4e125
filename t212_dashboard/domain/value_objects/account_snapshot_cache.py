"""Caller-owned, single-use account snapshot cache.

Verifying a credential already fetches the account cash snapshot. Instead of
hiding that response in module state, the verification handler hands the
caller an `AccountSnapshotCache`; passing it to the snapshot query lets the
first read reuse it. `take()` empties the cache, so a second read always
goes to the API.
"""

from datetime import UTC, datetime, timedelta

from t212_dashboard.domain.value_objects.account_cash import AccountCash

DEFAULT_SNAPSHOT_MAX_AGE = timedelta(seconds=30)


class AccountSnapshotCache:
    """Holds at most one snapshot, readable once.

    Args:
        snapshot: Snapshot captured during credential verification.
        captured_at: Capture time (UTC). Defaults to now.
        max_age: Snapshots older than this are discarded on `take()`.
    """

    __slots__ = ("_snapshot", "_captured_at", "_max_age")

    def __init__(
        self,
        snapshot: AccountCash | None = None,
        *,
        captured_at: datetime | None = None,
        max_age: timedelta = DEFAULT_SNAPSHOT_MAX_AGE,
    ) -> None:
        self._snapshot = snapshot
        self._captured_at = captured_at or datetime.now(UTC)
        self._max_age = max_age

    @property
    def is_empty(self) -> bool:
        return self._snapshot is None

    def take(self) -> AccountCash | None:
        """Return the cached snapshot and invalidate the cache.

        Returns:
            AccountCash | None: Snapshot if present and fresh, else None.
        """
        snapshot, self._snapshot = self._snapshot, None
        if snapshot is None:
            return None
        if datetime.now(UTC) - self._captured_at > self._max_age:
            return None
        return snapshot
