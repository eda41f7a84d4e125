"""ExportDescriptor entity.

A server-side history export job as returned by the exports listing.
Descriptors are never persisted; coverage is recomputed from the listing
on every run.
"""

from dataclasses import dataclass
from datetime import datetime

from t212_dashboard.domain.enums import ExportStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class ExportDescriptor:
    """Export job metadata.

    Attributes:
        report_id: Brokerage-assigned job identifier.
        time_from: Start of the exported range (UTC), None if unparsable.
        time_to: End of the exported range (UTC), None if unparsable.
        status: Normalized job status.
        download_link: Object-storage URL of the CSV once finished.
    """

    report_id: str
    time_from: datetime | None
    time_to: datetime | None
    status: ExportStatus
    download_link: str | None = None

    @property
    def is_finished(self) -> bool:
        """Check if the job completed successfully."""
        return self.status == ExportStatus.FINISHED

    @property
    def is_downloadable(self) -> bool:
        """Finished with a non-empty download link."""
        return self.is_finished and bool(self.download_link)
