"""Export orchestration errors."""

from dataclasses import dataclass

from t212_dashboard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ExportRunInProgressError(DomainError):
    """An orchestration run for the same credential is already active.

    Attributes:
        credential_prefix: Masked credential prefix, safe for display.
    """

    credential_prefix: str = ""
