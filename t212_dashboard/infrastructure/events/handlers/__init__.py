"""Event handlers subscribed by the composition root."""

from t212_dashboard.infrastructure.events.handlers.export_progress_handler import (
    ExportProgressHandler,
)

__all__ = ["ExportProgressHandler"]
