"""Application environment types.

Used by Settings to pick environment-specific behavior (log renderer,
base URL defaults).

Environments:
- DEVELOPMENT: Local development against the dev proxy, colored logs
- TESTING: Automated test execution, JSON logs
- CI: Continuous integration, JSON logs
- PRODUCTION: Deployed dashboard backend
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
