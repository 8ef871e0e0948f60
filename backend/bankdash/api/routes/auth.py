"""auth.py — Customer and admin login/logout through the gateway.

Called by: Dashboard login screens
Depends on: deps.py (GatewayDep, TokenDep)
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, status

from bankdash.api.deps import GatewayDep, TokenDep
from bankdash.models.schemas import AdminLoginRequest, CustomerLoginRequest

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])
logger = structlog.get_logger()


@router.post("/login")
async def customer_login(body: CustomerLoginRequest, gateway: GatewayDep) -> dict:
    """Customer login. Returns token, customerId and kycStatus.

    Wrong credentials come back as 401 from whichever source served the call.
    """
    result = await gateway.customer_login(body.email, body.password)
    logger.info("customer_login", customer_id=result.get("customerId"))
    return result


@router.post("/admin/login")
async def admin_login(body: AdminLoginRequest, gateway: GatewayDep) -> dict:
    return await gateway.admin_login(body.username, body.password)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(gateway: GatewayDep, token: TokenDep) -> None:
    """End the session of the bearer token sent with the request.

    Tokens live on the client; the dashboard discards its copy after this.
    """
    await gateway.logout(token=token)
