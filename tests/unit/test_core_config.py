"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Default values (library works with no environment)
- Environment variable overrides (T212_ prefix)
- Validation (URLs, proxy prefix, delays, counts)
- Brokerage base URL switch
- Cached singleton behavior
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from t212_dashboard.core.config import Settings, get_settings
from t212_dashboard.core.enums import Environment


class TestEnvironmentEnum:
    def test_environment_values(self):
        assert Environment.DEVELOPMENT == "development"
        assert Environment.TESTING == "testing"
        assert Environment.CI == "ci"
        assert Environment.PRODUCTION == "production"


class TestDefaults:
    def test_defaults_without_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.export_min_year == 2019
        assert settings.export_request_delay_seconds == 20.0
        assert settings.export_request_delay_max_seconds == 120.0
        assert settings.export_outdated_after_days == 7
        assert settings.csv_proxy_prefix == "/csv-proxy"
        assert settings.cors_allow_origin == "*"
        assert settings.broker_api_base_url == "https://live.trading212.com/api/v0"


class TestEnvironmentOverrides:
    def test_prefixed_variables_are_read(self):
        env = {
            "T212_ENVIRONMENT": "production",
            "T212_EXPORT_MIN_YEAR": "2020",
            "T212_POLL_INTERVAL_SECONDS": "2.5",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()

        assert settings.is_production
        assert not settings.is_development
        assert settings.export_min_year == 2020
        assert settings.poll_interval_seconds == 2.5

    def test_unprefixed_variables_are_ignored(self):
        with patch.dict(os.environ, {"EXPORT_MIN_YEAR": "2021"}, clear=True):
            assert Settings().export_min_year == 2019

    def test_dev_proxy_switch(self):
        env = {
            "T212_USE_DEV_PROXY": "true",
            "T212_DEV_API_PROXY_URL": "http://localhost:9000/api/",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.broker_api_base_url == "http://localhost:9000/api"


class TestValidation:
    def test_trailing_slashes_are_stripped(self):
        with patch.dict(
            os.environ,
            {"T212_CSV_STORAGE_BASE_URL": "https://bucket.example.com/"},
            clear=True,
        ):
            assert Settings().csv_storage_base_url == "https://bucket.example.com"

    @pytest.mark.parametrize("raw", ["csv-proxy", "/csv-proxy/", "csv-proxy/"])
    def test_proxy_prefix_is_normalized(self, raw):
        with patch.dict(os.environ, {"T212_CSV_PROXY_PREFIX": raw}, clear=True):
            assert Settings().csv_proxy_prefix == "/csv-proxy"

    def test_negative_delay_is_rejected(self):
        with patch.dict(
            os.environ, {"T212_EXPORT_REQUEST_DELAY_SECONDS": "-1"}, clear=True
        ):
            with pytest.raises(ValidationError) as exc_info:
                Settings()

        assert "delays must be >= 0 seconds" in str(exc_info.value)

    @pytest.mark.parametrize("field", ["T212_POLL_MAX_ATTEMPTS", "T212_INGEST_MAX_CONCURRENCY"])
    def test_zero_count_is_rejected(self, field):
        with patch.dict(os.environ, {field: "0"}, clear=True):
            with pytest.raises(ValidationError):
                Settings()


class TestGetSettings:
    def test_returns_cached_instance(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_settings() is get_settings()
