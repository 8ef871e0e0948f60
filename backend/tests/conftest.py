"""Global pytest fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from bankdash.config import Settings
from bankdash.core.adapters.mock_backend import MockBankingBackend
from bankdash.core.gateway import ResilientGateway
from bankdash.core.mode import ModeState
from bankdash.mock.factory import create_mock_token


@pytest.fixture
def anyio_backend():
    return "asyncio"


async def _no_sleep(seconds: float) -> None:
    """Drop-in for asyncio.sleep that returns immediately."""


@pytest.fixture
def no_sleep():
    """No-op sleep coroutine function for code that takes ``sleep=``."""
    return _no_sleep


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's .env and environment."""
    return Settings(
        _env_file=None,
        force_mock_mode=False,
        api_base_url="http://bank.test",
        mock_delay_ms=0,
        health_probe_timeout=0.5,
    )


@pytest.fixture
def mock_backend(settings: Settings) -> MockBankingBackend:
    """Mock adapter with latency disabled."""
    return MockBankingBackend(settings, sleep=_no_sleep)


# ─── Mock session tokens ──────────────────────────────────────────────────────


def _token(settings: Settings, subject: str, role: str, user_type: str) -> str:
    return create_mock_token(subject, role=role, user_type=user_type, secret=settings.mock_token_secret)


@pytest.fixture
def customer_token(settings: Settings) -> str:
    """Token of the demo customer (1001, KYC verified)."""
    return _token(settings, "demo@wtfbank.com", "ROLE_CUSTOMER", "CUSTOMER")


@pytest.fixture
def priya_token(settings: Settings) -> str:
    """Token of customer 1002 (KYC pending)."""
    return _token(settings, "priya.sharma@wtfbank.com", "ROLE_CUSTOMER", "CUSTOMER")


@pytest.fixture
def admin_token(settings: Settings) -> str:
    return _token(settings, "admin001", "ROLE_SUPER_ADMIN", "ADMIN")


@pytest.fixture
def customer_headers(customer_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {customer_token}"}


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def live_backend() -> AsyncMock:
    """Stand-in for LiveBankingBackend; every operation is an AsyncMock."""
    return AsyncMock()


@pytest.fixture
def gateway(mock_backend: MockBankingBackend, live_backend: AsyncMock) -> ResilientGateway:
    """Gateway pinned to mock data, as with FORCE_MOCK_MODE=true."""
    return ResilientGateway(mock_backend, live_backend, state=ModeState(force_mock=True), probe_timeout=0.5)


@pytest.fixture
async def client(gateway: ResilientGateway):
    """Async client over the full app (middleware, handlers, routes).

    ASGITransport skips the lifespan, so the gateway is handed to
    create_app() directly.
    """
    from bankdash.main import create_app

    app = create_app(gateway=gateway)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
