"""Export job status enumeration.

Normalizes the brokerage's job status vocabulary into three lifecycle states.
"""

from enum import Enum


class ExportStatus(str, Enum):
    """Lifecycle status of a server-side history export job.

    **Lifecycle Flow**:
        PROCESSING → FINISHED (normal flow)
        PROCESSING → FAILED (job failed or was cancelled)

    **Terminal States**: FINISHED, FAILED

    **Provider Mappings** (case-insensitive):
        - Queued, Processing, Running → PROCESSING
        - Finished → FINISHED
        - Failed, Canceled → FAILED
        - anything else → PROCESSING
    """

    PROCESSING = "processing"
    FINISHED = "finished"
    FAILED = "failed"

    @classmethod
    def from_remote(cls, value: object) -> "ExportStatus":
        """Map a brokerage status string to an ExportStatus.

        Args:
            value: Raw status from the exports listing (any JSON value).

        Returns:
            ExportStatus: Normalized status. Unknown or non-string values
                are PROCESSING.
        """
        if not isinstance(value, str) or not value:
            return cls.PROCESSING
        return _REMOTE_STATUS_MAP.get(value.strip().lower(), cls.PROCESSING)

    @property
    def is_terminal(self) -> bool:
        """Whether no further status change is expected."""
        return self in (ExportStatus.FINISHED, ExportStatus.FAILED)


_REMOTE_STATUS_MAP: dict[str, ExportStatus] = {
    "queued": ExportStatus.PROCESSING,
    "processing": ExportStatus.PROCESSING,
    "running": ExportStatus.PROCESSING,
    "finished": ExportStatus.FINISHED,
    "failed": ExportStatus.FAILED,
    "canceled": ExportStatus.FAILED,
    "cancelled": ExportStatus.FAILED,
}
