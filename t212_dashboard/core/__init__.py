"""Core shared kernel.

Foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes
- Error code and environment enums

The core module has NO dependencies on other application layers
(the composition root in `core.container` is the single exception and is
not imported here).
"""

from t212_dashboard.core.enums import Environment, ErrorCode
from t212_dashboard.core.errors import DomainError, ValidationError
from t212_dashboard.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "Environment",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
    "ValidationError",
]
