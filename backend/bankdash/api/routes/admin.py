"""admin.py — Admin dashboard: customers, KYC review and support queue.

Access control is the banking backend's job (it rejects non-admin tokens
with 401/403, which the gateway passes through unchanged). The mock backend
applies the same rule to its own tokens.

Called by: Admin dashboard
Depends on: deps.py (GatewayDep, TokenDep), models/schemas.py
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Query, Response

from bankdash.api.deps import GatewayDep, TokenDep
from bankdash.api.responses import document_file_response
from bankdash.models.schemas import KycDecision

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])
logger = structlog.get_logger()

PageQuery = Annotated[int, Query(ge=0)]
SizeQuery = Annotated[int, Query(ge=1, le=100)]


# ─── Customers ─────────────────────────────────────────────────────────────────


@router.get("/customers")
async def list_customers(
    gateway: GatewayDep,
    token: TokenDep,
    page: PageQuery = 0,
    size: SizeQuery = 10,
    search: str | None = None,
) -> dict:
    """Page of customers; ``search`` matches name or email."""
    return await gateway.get_all_customers(page=page, size=size, search=search, token=token)


@router.get("/customers/{customer_id}")
async def get_customer_details(customer_id: int, gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.get_customer_details(customer_id, token=token)


@router.put("/customers/{customer_id}/kyc-status")
async def update_kyc_status(
    customer_id: int,
    body: KycDecision,
    gateway: GatewayDep,
    token: TokenDep,
) -> dict:
    """Set a customer's overall KYC status (PENDING, UNDER_REVIEW, VERIFIED, REJECTED)."""
    result = await gateway.update_kyc_status(customer_id, body.status, body.notes, token=token)
    logger.info("kyc_status_updated", customer_id=customer_id, status=body.status.upper())
    return result


# ─── KYC Review ────────────────────────────────────────────────────────────────


@router.get("/kyc/pending")
async def list_pending_kyc_documents(
    gateway: GatewayDep,
    token: TokenDep,
    page: PageQuery = 0,
    size: SizeQuery = 10,
) -> dict:
    return await gateway.get_pending_kyc_documents(page=page, size=size, token=token)


@router.get("/kyc/customers/{customer_id}")
async def get_customer_kyc_details(customer_id: int, gateway: GatewayDep, token: TokenDep) -> dict:
    """KYC status flags and every document of one customer."""
    return await gateway.get_customer_kyc_details(customer_id, token=token)


@router.get("/kyc/documents/{document_id}/file")
async def view_kyc_document(
    document_id: int,
    gateway: GatewayDep,
    token: TokenDep,
    document_type: Annotated[str, Query(alias="type", pattern="^(aadhar|pan|AADHAR|PAN)$")] = "aadhar",
) -> Response:
    """Open a customer's KYC document inline for review. ``type``: aadhar | pan."""
    document = await gateway.view_kyc_document(document_id, document_type.lower(), token=token)
    return document_file_response(document, inline=True)


@router.get("/kyc/statistics")
async def get_kyc_statistics(gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.get_kyc_statistics(token=token)


@router.post("/kyc/documents/{document_id}/verify")
async def verify_kyc_document(
    document_id: int,
    body: KycDecision,
    gateway: GatewayDep,
    token: TokenDep,
) -> dict:
    """Approve (VERIFIED) or reject (REJECTED) a single KYC document."""
    result = await gateway.verify_kyc_document(document_id, body.status, body.notes, token=token)
    logger.info("kyc_document_reviewed", document_id=document_id, status=body.status.upper())
    return result


# ─── Support ───────────────────────────────────────────────────────────────────


@router.get("/support/tickets")
async def list_support_tickets(
    gateway: GatewayDep,
    token: TokenDep,
    ticket_status: Annotated[str | None, Query(alias="status")] = None,
    page: PageQuery = 0,
    size: SizeQuery = 10,
) -> dict:
    return await gateway.get_admin_support_tickets(status=ticket_status, page=page, size=size, token=token)
