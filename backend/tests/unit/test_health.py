"""Tests for the health endpoint and the response headers every route gets."""

from __future__ import annotations

import pytest
from httpx import AsyncClient


@pytest.mark.anyio
async def test_health_reports_data_source(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["backend"]["mode"] == "forced-mock"
    assert data["backend"]["label"] == "MOCK"
    assert data["environment"]["version"] == data["version"]


@pytest.mark.anyio
async def test_health_never_probes(client: AsyncClient, live_backend):
    await client.get("/health")
    live_backend.ping.assert_not_awaited()


@pytest.mark.anyio
async def test_mode_and_source_headers(client: AsyncClient):
    response = await client.get("/health")
    assert response.headers["X-Backend-Mode"] == "forced-mock"
    assert response.headers["X-Data-Source"] == "MOCK"


@pytest.mark.anyio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


@pytest.mark.anyio
async def test_security_headers(client: AsyncClient):
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
