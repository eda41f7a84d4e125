"""Core errors package.

Usage:
    from t212_dashboard.core.errors import DomainError, ValidationError
"""

from t212_dashboard.core.errors.common_errors import ValidationError
from t212_dashboard.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
]
