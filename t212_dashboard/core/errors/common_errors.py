"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures (bad start year, wrong types)

Usage:
    from t212_dashboard.core.errors import ValidationError
    from t212_dashboard.core.enums import ErrorCode
    from t212_dashboard.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.INVALID_DATE_RANGE,
        message="Start year must not be in the future",
        field="start_year",
    ))
"""

from dataclasses import dataclass

from t212_dashboard.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None
