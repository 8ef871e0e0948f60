"""Application settings via pydantic-settings.

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  DEVELOPER QUICK-START  — What env vars do I need?
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#
#  FORCE_MOCK_MODE decides where dashboard data comes from at startup:
#
#    false (default) → The gateway probes the banking backend at API_BASE_URL
#                      on first use and serves live data when it answers.
#                      If the backend is down (or drops mid-session), calls
#                      fall back to the in-memory sample data.
#
#    true            → Every call is served from sample data. The backend is
#                      never contacted until an operator disables the
#                      override from the status widget.
#
#  Demo logins (sample data only):
#    customer  demo@wtfbank.com / demo123
#    customer  priya.sharma@wtfbank.com / priya123
#    admin     admin001 / admin123
#
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration loaded from environment variables.

    Only ``force_mock_mode`` affects the gateway's routing. Everything else
    configures the adapters on either side of it or the HTTP shell.

    Called by: Every module that needs configuration (via ``get_settings()``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ─── Data Source ──────────────────────────────────────────────────────────
    # Read once at startup. Operators can flip it at runtime through
    # PUT /api/v1/backend-status/mock.
    force_mock_mode: bool = Field(
        default=False,
        validation_alias=AliasChoices("FORCE_MOCK_MODE", "USE_MOCK_API"),
    )

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    # Comma-separated CORS origins.
    allowed_origins: str = "http://localhost:3000"

    # ─── Live Banking Backend ─────────────────────────────────────────────────
    # REACT_APP_API_URL is accepted so the dashboard and this service can
    # share one .env file.
    api_base_url: str = Field(
        default="http://localhost:8080",
        validation_alias=AliasChoices("API_BASE_URL", "REACT_APP_API_URL"),
    )
    api_timeout: float = 10.0

    # Liveness probe used to decide between live and mock data.
    health_probe_path: str = "/actuator/health"
    health_probe_timeout: float = 3.0

    # ─── Mock Backend ─────────────────────────────────────────────────────────
    # Artificial latency per mock call so loading states look the same as in
    # live mode. 0 disables it.
    mock_delay_ms: int = 300
    # Signs the JWTs handed out by mock logins. Not a secret: mock tokens
    # are never accepted by the real backend.
    mock_token_secret: str = "bankdash-mock-signing-key-not-for-production"
    mock_token_ttl_minutes: int = 60

    # ─── Computed Properties ──────────────────────────────────────────────────

    @property
    def is_production(self) -> bool:
        """True when app_env is explicitly set to 'production'."""
        return self.app_env == "production"

    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a normalized list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def normalized_api_base_url(self) -> str:
        """Return API_BASE_URL without a trailing slash."""
        return self.api_base_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
