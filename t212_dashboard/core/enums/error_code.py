"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_INPUT = "invalid_input"
    INVALID_DATE_RANGE = "invalid_date_range"
    VALIDATION_FAILED = "validation_failed"

    # Provider errors
    PROVIDER_AUTHENTICATION_FAILED = "provider_authentication_failed"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_RATE_LIMITED = "provider_rate_limited"
    PROVIDER_INVALID_RESPONSE = "provider_invalid_response"

    # CSV download / parsing
    CSV_PROXY_FETCH_FAILED = "csv_proxy_fetch_failed"
    CSV_PARSE_FAILED = "csv_parse_failed"

    # Export orchestration
    EXPORT_RUN_IN_PROGRESS = "export_run_in_progress"
    EXPORT_COVERAGE_UNAVAILABLE = "export_coverage_unavailable"
