"""Commands (intent to change or fetch remote export state)."""

from t212_dashboard.application.commands.account_commands import VerifyCredential
from t212_dashboard.application.commands.export_commands import (
    PollExportStatus,
    RunYearlyExports,
)

__all__ = [
    "PollExportStatus",
    "RunYearlyExports",
    "VerifyCredential",
]
