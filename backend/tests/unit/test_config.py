"""Tests for application configuration."""

from __future__ import annotations

from bankdash.config import Settings, get_settings


def test_default_settings():
    """Settings should have sensible defaults."""
    settings = Settings(_env_file=None)
    assert settings.app_env == "development"
    assert settings.is_production is False
    assert settings.force_mock_mode is False
    assert settings.api_base_url == "http://localhost:8080"
    assert settings.health_probe_path == "/actuator/health"
    assert settings.health_probe_timeout == 3.0
    assert settings.mock_delay_ms == 300


def test_production_detection():
    settings = Settings(_env_file=None, app_env="production")
    assert settings.is_production is True


def test_force_mock_reads_both_env_names(monkeypatch):
    """FORCE_MOCK_MODE and the dashboard's USE_MOCK_API both work."""
    monkeypatch.setenv("FORCE_MOCK_MODE", "true")
    assert Settings(_env_file=None).force_mock_mode is True

    monkeypatch.delenv("FORCE_MOCK_MODE")
    monkeypatch.setenv("USE_MOCK_API", "1")
    assert Settings(_env_file=None).force_mock_mode is True


def test_api_base_url_accepts_dashboard_variable(monkeypatch):
    monkeypatch.setenv("REACT_APP_API_URL", "https://bank.example.com/")
    settings = Settings(_env_file=None)
    assert settings.normalized_api_base_url == "https://bank.example.com"


def test_allowed_origins_list_parsing():
    """ALLOWED_ORIGINS should parse into a trimmed list."""
    settings = Settings(
        _env_file=None,
        allowed_origins="https://app.example.com, https://admin.example.com ",
    )
    assert settings.allowed_origins_list == [
        "https://app.example.com",
        "https://admin.example.com",
    ]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
