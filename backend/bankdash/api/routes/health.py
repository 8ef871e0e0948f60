"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from bankdash.api.deps import GatewayDep
from bankdash.core.environment import APP_VERSION, get_environment_info, to_dict
from bankdash.models.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(gateway: GatewayDep) -> HealthResponse:
    """Service liveness plus the gateway's current data source.

    Never probes the banking backend. The service is healthy even while it
    serves mock data; ``backend`` says which source is active.
    """
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        environment=to_dict(get_environment_info()),
        backend=gateway.get_mode_info().to_dict(),
    )
