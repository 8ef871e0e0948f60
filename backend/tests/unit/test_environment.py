"""Tests for startup validation and environment info (core/environment.py).

Run with: pytest backend/tests/unit/test_environment.py -v
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from bankdash.config import Settings
from bankdash.core.environment import (
    APP_VERSION,
    get_environment_info,
    to_dict,
    validate_environment,
)


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestEnvironmentInfo:
    @patch("bankdash.core.environment.get_settings")
    def test_snapshot_reflects_settings(self, mock_settings):
        mock_settings.return_value = _settings(
            app_env="staging",
            api_base_url="https://bank.example.com/",
            force_mock_mode=True,
        )

        info = get_environment_info()

        assert info.app_env == "staging"
        assert info.api_base_url == "https://bank.example.com"
        assert info.start_forced_mock is True
        assert to_dict(info) == {
            "app_env": "staging",
            "version": APP_VERSION,
            "api_base_url": "https://bank.example.com",
            "start_forced_mock": True,
        }


class TestValidateEnvironment:
    @patch("bankdash.core.environment.get_settings")
    def test_defaults_are_valid(self, mock_settings):
        mock_settings.return_value = _settings()
        validate_environment()

    @patch("bankdash.core.environment.get_settings")
    def test_forced_mock_start_is_valid(self, mock_settings, caplog):
        mock_settings.return_value = _settings(force_mock_mode=True)
        with caplog.at_level("INFO", logger="bankdash.core.environment"):
            validate_environment()
        assert "FORCED MOCK" in caplog.text

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"api_base_url": "localhost:8080"}, "API_BASE_URL"),
            ({"api_base_url": "ftp://bank.example.com"}, "API_BASE_URL"),
            ({"api_timeout": 0}, "API_TIMEOUT"),
            ({"health_probe_timeout": -1}, "HEALTH_PROBE_TIMEOUT"),
            ({"mock_delay_ms": -5}, "MOCK_DELAY_MS"),
            ({"allowed_origins": "http://ok.example.com,not-a-url"}, "invalid URL"),
        ],
    )
    @patch("bankdash.core.environment.get_settings")
    def test_invalid_values_raise(self, mock_settings, overrides, message):
        mock_settings.return_value = _settings(**overrides)
        with pytest.raises(RuntimeError, match=message):
            validate_environment()

    @patch("bankdash.core.environment.get_settings")
    def test_wildcard_origin_rejected_in_production(self, mock_settings):
        mock_settings.return_value = _settings(app_env="production", allowed_origins="*")
        with pytest.raises(RuntimeError, match="cannot contain"):
            validate_environment()

    @patch("bankdash.core.environment.get_settings")
    def test_wildcard_origin_warns_in_development(self, mock_settings, caplog):
        mock_settings.return_value = _settings(allowed_origins="*")
        with caplog.at_level("WARNING", logger="bankdash.core.environment"):
            validate_environment()
        assert "unsafe" in caplog.text
