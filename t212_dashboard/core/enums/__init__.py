"""Core enums package.

Usage:
    from t212_dashboard.core.enums import ErrorCode, Environment
"""

from t212_dashboard.core.enums.environment import Environment
from t212_dashboard.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
