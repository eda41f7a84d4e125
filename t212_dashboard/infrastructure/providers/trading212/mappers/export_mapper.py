"""Trading212 export listing mapper.

Converts `GET /equity/history/exports` items to ExportDescriptor.

Response Structure (one item):
    {
        "reportId": 123456,
        "timeFrom": "2023-01-01T00:00:00Z",
        "timeTo": "2023-12-31T23:59:59Z",
        "status": "Finished",
        "downloadLink": "https://<storage-host>/<key>.csv?X-Amz-..."
    }

`dataIncluded` is also present but not needed.
"""

from typing import Any

import structlog

from t212_dashboard.domain.entities import ExportDescriptor
from t212_dashboard.domain.enums import ExportStatus
from t212_dashboard.domain.parsing import parse_timestamp

logger = structlog.get_logger(__name__)


class Trading212ExportMapper:
    """Mapper for converting export listing JSON to ExportDescriptor.

    Thread-safe: No mutable state, can be shared across requests.
    """

    def map_export(self, data: dict[str, Any]) -> ExportDescriptor | None:
        """Map one listing item.

        Unparsable timestamps become None (such descriptors never count as
        full-year exports). Unknown statuses map to processing.

        Returns:
            ExportDescriptor, or None when `reportId` is missing.
        """
        report_id = data.get("reportId")
        if report_id is None or report_id == "":
            logger.warning(
                "trading212_export_missing_report_id",
                keys=sorted(data.keys()),
            )
            return None

        download_link = data.get("downloadLink")
        return ExportDescriptor(
            report_id=str(report_id),
            time_from=parse_timestamp(data.get("timeFrom")),
            time_to=parse_timestamp(data.get("timeTo")),
            status=ExportStatus.from_remote(data.get("status")),
            download_link=download_link if isinstance(download_link, str) else None,
        )

    def map_exports(self, items: list[dict[str, Any]]) -> list[ExportDescriptor]:
        """Map a listing, skipping invalid items."""
        descriptors: list[ExportDescriptor] = []
        for item in items:
            descriptor = self.map_export(item)
            if descriptor is not None:
                descriptors.append(descriptor)
        return descriptors
