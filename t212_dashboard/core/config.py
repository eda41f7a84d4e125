"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables.
Every value has a safe default so the library works with no environment
at all; deployments override through env vars (case-insensitive).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Orchestration thresholds are policy, not constants: they are exposed
  here and folded into `ExportPolicy` by the composition root

Usage:
    from t212_dashboard.core.config import settings

    base_url = settings.broker_api_base_url
    if settings.is_development:
        ...
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from t212_dashboard.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="T212 Dashboard",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Brokerage API base URL switch
    use_dev_proxy: bool = Field(
        default=False,
        description="Route brokerage API calls through the local proxy prefix",
    )
    dev_api_proxy_url: str = Field(
        default="http://localhost:8000/api",
        description="Local same-origin proxy prefix for the brokerage API",
    )
    upstream_api_base_url: str = Field(
        default="https://live.trading212.com/api/v0",
        description="Production brokerage API host",
    )
    provider_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout for brokerage and proxy calls",
    )

    # CSV object storage and proxy
    csv_storage_base_url: str = Field(
        default="https://tzswiy3zk5dms05cfeo.s3.eu-central-1.amazonaws.com",
        description="Object-storage host serving export CSV files",
    )
    csv_proxy_base_url: str = Field(
        default="http://localhost:8000",
        description="Origin hosting the CSV proxy endpoint",
    )
    csv_proxy_prefix: str = Field(
        default="/csv-proxy",
        description="Path prefix of the CSV proxy endpoint",
    )

    # Export orchestration policy
    export_min_year: int = Field(
        default=2019,
        description="Earliest calendar year the brokerage can export",
    )
    export_request_delay_seconds: float = Field(
        default=20.0,
        description="Initial delay between consecutive yearly export requests",
    )
    export_request_delay_max_seconds: float = Field(
        default=120.0,
        description="Upper bound for the escalated inter-request delay",
    )
    export_retry_attempts: int = Field(
        default=2,
        description="Extra attempts per year after a rate-limited request",
    )
    export_retry_base_seconds: float = Field(
        default=20.0,
        description="First retry delay after a rate-limited request",
    )
    export_retry_max_seconds: float = Field(
        default=60.0,
        description="Upper bound for a single retry delay",
    )
    export_outdated_after_days: int = Field(
        default=7,
        description="Current-year export older than this is flagged outdated",
    )

    # Export status polling
    poll_interval_seconds: float = Field(
        default=10.0,
        description="Delay between export status listings",
    )
    poll_max_attempts: int = Field(
        default=30,
        description="Listings before polling gives up",
    )

    # Ingestion
    ingest_max_concurrency: int = Field(
        default=4,
        description="Concurrent CSV downloads during ingestion",
    )

    # CORS configuration (proxy endpoints)
    cors_allow_origin: str = Field(
        default="*",
        description="Access-Control-Allow-Origin value for proxy responses",
    )

    model_config = SettingsConfigDict(
        env_prefix="T212_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "dev_api_proxy_url",
        "upstream_api_base_url",
        "csv_storage_base_url",
        "csv_proxy_base_url",
    )
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    @field_validator("csv_proxy_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Normalize the proxy prefix to a single leading slash, no trailing slash."""
        return "/" + v.strip("/")

    @field_validator(
        "export_request_delay_seconds",
        "export_request_delay_max_seconds",
        "export_retry_base_seconds",
        "export_retry_max_seconds",
        "poll_interval_seconds",
    )
    @classmethod
    def validate_non_negative_delay(cls, v: float) -> float:
        """
        Reject negative delays.

        Raises:
            ValueError: If the delay is negative.
        """
        if v < 0:
            raise ValueError("delays must be >= 0 seconds")
        return v

    @field_validator("ingest_max_concurrency", "poll_max_attempts")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """
        Reject zero or negative counts.

        Raises:
            ValueError: If the value is < 1.
        """
        if v < 1:
            raise ValueError("value must be >= 1")
        return v

    @property
    def broker_api_base_url(self) -> str:
        """Base URL for brokerage API calls, honoring the dev proxy switch."""
        if self.use_dev_proxy:
            return self.dev_api_proxy_url
        return self.upstream_api_base_url

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING

    @property
    def is_ci(self) -> bool:
        """Check if running in CI environment."""
        return self.environment == Environment.CI

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
