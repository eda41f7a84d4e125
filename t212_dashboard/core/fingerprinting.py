"""Credential fingerprinting.

Brokerage API keys must never reach logs, events or in-memory keys in
clear text. Two derived forms are used instead:

- `credential_fingerprint`: SHA256 hash (64 hex characters), used to key
  the run-in-progress guard. Not reversible.
- `mask_credential`: first few characters followed by `***`, for log
  context only.
"""

import hashlib

from t212_dashboard.core.constants import CREDENTIAL_LOG_PREFIX_LENGTH


def credential_fingerprint(credential: str) -> str:
    """Generate SHA256 hash of a credential.

    Examples:
        >>> len(credential_fingerprint("my-api-key"))
        64
    """
    return hashlib.sha256(credential.encode("utf-8")).hexdigest()


def mask_credential(credential: str) -> str:
    """Masked credential prefix safe for logs.

    Examples:
        >>> mask_credential("20812345abcdef")
        '2081***'
    """
    return f"{credential[:CREDENTIAL_LOG_PREFIX_LENGTH]}***"
