"""backend_status.py — Data-source status widget endpoints.

Lets the dashboard show where its data comes from and lets an operator
pin the gateway to mock data or re-check the live backend.

    GET  /api/v1/backend-status          → current mode + warnings
    PUT  /api/v1/backend-status/mock     → {"enabled": bool} force / release mock
    POST /api/v1/backend-status/refresh  → probe the backend now

Called by: Dashboard status indicator
Depends on: deps.py (GatewayDep), core/mode.py
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter

from bankdash.api.deps import GatewayDep
from bankdash.core.mode import Mode, ModeInfo
from bankdash.models.schemas import BackendStatusResponse, MockModeUpdate, RefreshResponse

router = APIRouter(prefix="/api/v1/backend-status", tags=["backend-status"])
logger = structlog.get_logger()


def _warnings(info: ModeInfo) -> list[str]:
    warnings: list[str] = []
    if info.mode is Mode.FORCED_MOCK:
        warnings.append("Mock mode is forced. All data shown is sample data.")
    if info.mode is Mode.LIVE_UNAVAILABLE:
        warnings.append("Backend unavailable. Showing sample data until it is reachable again.")
    elif info.backend_available is False:
        warnings.append("Backend did not answer the last health check.")
    return warnings


def _status(info: ModeInfo) -> dict:
    return {**info.to_dict(), "warnings": _warnings(info)}


@router.get("", response_model=BackendStatusResponse)
async def get_backend_status(gateway: GatewayDep) -> dict:
    """Current mode. Read only, never triggers a probe."""
    return _status(gateway.get_mode_info())


@router.put("/mock", response_model=BackendStatusResponse)
async def set_mock_mode(body: MockModeUpdate, gateway: GatewayDep) -> dict:
    """Force mock data on, or release it (the next call re-probes)."""
    info = gateway.set_forced_mock(body.enabled)
    logger.info("mock_mode_toggled", enabled=body.enabled, mode=info.mode.value)
    return _status(info)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_backend_status(gateway: GatewayDep) -> dict:
    """Probe the backend now and return the resulting mode."""
    reachable = await gateway.refresh_backend_status()
    return {**_status(gateway.get_mode_info()), "reachable": reachable}
