"""ExportPolicy value object.

Every timing threshold the orchestrator and poller use. Built from settings
by the composition root; tests construct it directly with zero delays.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from t212_dashboard.core.config import Settings


@dataclass(frozen=True, slots=True, kw_only=True)
class ExportPolicy:
    """Rate-limit, freshness and polling policy.

    Attributes:
        min_year: Earliest exportable calendar year.
        request_delay_seconds: Initial delay between yearly requests.
        request_delay_max_seconds: Cap for the escalated delay.
        retry_attempts: Extra attempts after a rate-limited request.
        retry_base_seconds: First retry delay; doubles per retry.
        retry_max_seconds: Cap for a single retry delay.
        outdated_after_days: Age after which the current-year export is stale.
        poll_interval_seconds: Delay between status listings.
        poll_max_attempts: Listings before polling gives up.
    """

    min_year: int = 2019
    request_delay_seconds: float = 20.0
    request_delay_max_seconds: float = 120.0
    retry_attempts: int = 2
    retry_base_seconds: float = 20.0
    retry_max_seconds: float = 60.0
    outdated_after_days: int = 7
    poll_interval_seconds: float = 10.0
    poll_max_attempts: int = 30

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ExportPolicy":
        return cls(
            min_year=settings.export_min_year,
            request_delay_seconds=settings.export_request_delay_seconds,
            request_delay_max_seconds=settings.export_request_delay_max_seconds,
            retry_attempts=settings.export_retry_attempts,
            retry_base_seconds=settings.export_retry_base_seconds,
            retry_max_seconds=settings.export_retry_max_seconds,
            outdated_after_days=settings.export_outdated_after_days,
            poll_interval_seconds=settings.poll_interval_seconds,
            poll_max_attempts=settings.poll_max_attempts,
        )

    @property
    def outdated_after(self) -> timedelta:
        return timedelta(days=self.outdated_after_days)

    def retry_delay(self, retry_index: int, retry_after: int | None = None) -> float:
        """Delay before retry number `retry_index` (0-based).

        `retry_base_seconds * 2**retry_index`, raised to the server's
        Retry-After hint when larger, capped at `retry_max_seconds`.
        """
        delay = self.retry_base_seconds * (2**retry_index)
        if retry_after is not None and retry_after > delay:
            delay = float(retry_after)
        return min(delay, self.retry_max_seconds)

    def escalate(self, delay_seconds: float) -> float:
        """Next inter-request delay after a persistent rate limit (never lower)."""
        return max(delay_seconds, min(delay_seconds * 2, self.request_delay_max_seconds))
