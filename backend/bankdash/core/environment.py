"""environment.py — Startup validation and environment metadata.

Checks the settings the gateway and HTTP shell depend on before the app
starts serving, and builds the environment snapshot shown by /health.

Start mode overview:
    FORCE_MOCK_MODE=true  → forced-mock. Sample data only; backend never probed.
    FORCE_MOCK_MODE=false → live-unknown. First call probes API_BASE_URL.

Called by: main.py (startup), api/routes/health.py
Depends on: config.py (Settings)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from bankdash.config import get_settings

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


# ─── Environment Info ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EnvironmentInfo:
    """Immutable snapshot of the deployment configuration.

    Independent of the gateway's runtime mode, which changes while the app
    runs. This only describes how the process was started.
    """

    app_env: str               # "development" | "staging" | "production"
    version: str
    api_base_url: str
    start_forced_mock: bool


def get_environment_info() -> EnvironmentInfo:
    settings = get_settings()
    return EnvironmentInfo(
        app_env=settings.app_env,
        version=APP_VERSION,
        api_base_url=settings.normalized_api_base_url,
        start_forced_mock=settings.force_mock_mode,
    )


def to_dict(info: EnvironmentInfo) -> dict[str, Any]:
    return {
        "app_env": info.app_env,
        "version": info.version,
        "api_base_url": info.api_base_url,
        "start_forced_mock": info.start_forced_mock,
    }


# ─── Startup Validation ──────────────────────────────────────────────────────


def _is_valid_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_environment() -> None:
    """Validate configuration on startup.

    Checks:
        - API_BASE_URL is a full http(s) URL.
        - Timeouts are positive and the mock delay is not negative.
        - ALLOWED_ORIGINS holds valid URLs, and no '*' in production.

    Called by: main.py ``lifespan()`` on app startup.

    Raises:
        RuntimeError: On any invalid value.
    """
    settings = get_settings()

    if not _is_valid_http_url(settings.normalized_api_base_url):
        raise RuntimeError("API_BASE_URL must be a full http(s) URL (example: http://localhost:8080).")

    if settings.api_timeout <= 0:
        raise RuntimeError("API_TIMEOUT must be greater than 0.")
    if settings.health_probe_timeout <= 0:
        raise RuntimeError("HEALTH_PROBE_TIMEOUT must be greater than 0.")
    if settings.mock_delay_ms < 0:
        raise RuntimeError("MOCK_DELAY_MS cannot be negative.")

    allowed_origins = settings.allowed_origins_list
    if "*" in allowed_origins:
        if settings.is_production:
            raise RuntimeError("ALLOWED_ORIGINS cannot contain '*' in production.")
        logger.warning("ALLOWED_ORIGINS contains '*'. This is unsafe outside local development.")
        allowed_origins = [origin for origin in allowed_origins if origin != "*"]

    invalid_origins = [origin for origin in allowed_origins if not _is_valid_http_url(origin)]
    if invalid_origins:
        raise RuntimeError(f"ALLOWED_ORIGINS has invalid URL(s): {', '.join(invalid_origins)}")

    logger.info(
        "Environment initialized: env=%s, backend=%s",
        settings.app_env,
        settings.normalized_api_base_url,
    )

    if settings.force_mock_mode:
        logger.info("🎭 FORCED MOCK — All dashboard data comes from sample fixtures.")
    else:
        logger.info("🔌 LIVE — Backend is probed on first use; mock data covers outages.")
