"""Centralized constants for internal implementation details.

These are fixed facts about the brokerage API and the CSV export format,
NOT environment-specific configuration. Tunable policy (delays, retry
counts, thresholds) lives in `t212_dashboard.core.config` instead.

Example:
    >>> from t212_dashboard.core.constants import EXPORTS_PATH
    >>> url = f"{base_url}{EXPORTS_PATH}"
"""

# =============================================================================
# Timeouts
# =============================================================================

PROVIDER_TIMEOUT_DEFAULT: float = 10.0
"""Default timeout for brokerage API calls in seconds."""

PROVIDER_NAME: str = "trading212"
"""Provider identifier used in errors and log context."""


# =============================================================================
# Brokerage API paths
# =============================================================================

EXPORTS_PATH: str = "/equity/history/exports"
"""Create (POST) and list (GET) history export jobs."""

ACCOUNT_CASH_PATH: str = "/equity/account/cash"
"""Account cash snapshot, also used as the credential probe."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length for response body in error messages (truncation limit)."""

CREDENTIAL_LOG_PREFIX_LENGTH: int = 4
"""Number of leading credential characters allowed in log output."""


# =============================================================================
# CSV export format
# =============================================================================

DEFAULT_CURRENCY: str = "EUR"
"""Currency assumed when a row has no `Currency (Total)` value."""

UNKNOWN_LABEL: str = "Unknown"
"""Placeholder for rows without ticker/name."""

CSV_ACCEPT_HEADER: str = "text/csv,text/plain,*/*"
"""Accept header sent when downloading CSV reports."""

USER_AGENT: str = "T212-Dashboard/0.1"
"""User-Agent sent by the proxy endpoints to upstream hosts."""
