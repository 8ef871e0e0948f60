"""customer.py — Customer dashboard endpoints.

One route per customer-side gateway operation: profile, accounts,
transactions, KYC and support tickets. Routes stay thin; the gateway
decides whether live or sample data answers.

Called by: Customer dashboard
Depends on: deps.py (GatewayDep, TokenDep), models/schemas.py
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response, UploadFile, status

from bankdash.api.deps import GatewayDep, TokenDep
from bankdash.api.responses import document_file_response
from bankdash.models.schemas import (
    ProfileUpdate,
    SupportTicketCreate,
    TicketMessageCreate,
    TransactionCreate,
)

router = APIRouter(prefix="/api/v1/customer", tags=["customer"])

PageQuery = Annotated[int, Query(ge=0)]
SizeQuery = Annotated[int, Query(ge=1, le=100)]


# ─── Profile ───────────────────────────────────────────────────────────────────


@router.get("/me")
async def get_current_customer(gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.get_current_customer(token=token)


@router.put("/me")
async def update_profile(body: ProfileUpdate, gateway: GatewayDep, token: TokenDep) -> dict:
    """Update editable profile fields. Only fields present in the body change."""
    return await gateway.update_customer_profile(body.to_payload(), token=token)


# ─── Accounts ──────────────────────────────────────────────────────────────────


@router.get("/accounts")
async def list_accounts(
    gateway: GatewayDep,
    token: TokenDep,
    page: PageQuery = 0,
    size: SizeQuery = 10,
) -> dict:
    return await gateway.get_accounts(page=page, size=size, token=token)


@router.get("/accounts/{account_id}")
async def get_account(account_id: int, gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.get_account(account_id, token=token)


@router.get("/accounts/{account_id}/balance")
async def get_account_balance(account_id: int, gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.get_account_balance(account_id, token=token)


# ─── Transactions ──────────────────────────────────────────────────────────────


@router.get("/accounts/{account_id}/transactions")
async def get_transaction_history(
    account_id: int,
    gateway: GatewayDep,
    token: TokenDep,
    page: PageQuery = 0,
    size: SizeQuery = 10,
    transaction_type: Annotated[str | None, Query(alias="type")] = None,
    from_date: Annotated[str | None, Query(alias="fromDate")] = None,
    to_date: Annotated[str | None, Query(alias="toDate")] = None,
) -> dict:
    """Paginated history, newest first.

    Query params:
        type: CREDIT | DEBIT | TRANSFER
        fromDate / toDate: YYYY-MM-DD, inclusive
    """
    return await gateway.get_transaction_history(
        account_id,
        page=page,
        size=size,
        transaction_type=transaction_type,
        from_date=from_date,
        to_date=to_date,
        token=token,
    )


@router.get("/accounts/{account_id}/mini-statement")
async def get_mini_statement(account_id: int, gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.get_mini_statement(account_id, token=token)


@router.post("/transactions", status_code=status.HTTP_201_CREATED)
async def create_transaction(body: TransactionCreate, gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.create_transaction(body.to_payload(), token=token)


# ─── KYC ───────────────────────────────────────────────────────────────────────


@router.get("/kyc/status")
async def get_kyc_status(gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.get_kyc_status(token=token)


@router.get("/kyc/documents")
async def get_my_kyc_documents(gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.get_my_kyc_documents(token=token)


@router.post("/kyc/documents/{document_type}", status_code=status.HTTP_201_CREATED)
async def upload_kyc_document(
    document_type: str,
    file: UploadFile,
    gateway: GatewayDep,
    token: TokenDep,
) -> dict:
    """Upload an AADHAR or PAN document (multipart field ``file``)."""
    content = await file.read()
    return await gateway.upload_kyc_document(document_type, file.filename or "document", content, token=token)


@router.get("/kyc/documents/{document_id}/file")
async def download_kyc_document(document_id: int, gateway: GatewayDep, token: TokenDep) -> Response:
    """Download one of the caller's own KYC documents as an attachment."""
    document = await gateway.download_kyc_document(document_id, token=token)
    return document_file_response(document)


# ─── Support ───────────────────────────────────────────────────────────────────


@router.post("/support/tickets", status_code=status.HTTP_201_CREATED)
async def create_support_ticket(body: SupportTicketCreate, gateway: GatewayDep, token: TokenDep) -> dict:
    return await gateway.create_support_ticket(body.to_payload(), token=token)


@router.get("/support/tickets")
async def list_support_tickets(
    gateway: GatewayDep,
    token: TokenDep,
    ticket_status: Annotated[str | None, Query(alias="status")] = None,
    page: PageQuery = 0,
    size: SizeQuery = 10,
) -> dict:
    return await gateway.get_customer_tickets(status=ticket_status, page=page, size=size, token=token)


@router.get("/support/tickets/{ticket_id}")
async def get_ticket_details(ticket_id: int, gateway: GatewayDep, token: TokenDep) -> dict:
    """Ticket with its full message thread."""
    return await gateway.get_ticket_details(ticket_id, token=token)


@router.post("/support/tickets/{ticket_id}/messages", status_code=status.HTTP_201_CREATED)
async def add_ticket_message(
    ticket_id: int,
    body: TicketMessageCreate,
    gateway: GatewayDep,
    token: TokenDep,
) -> dict:
    return await gateway.add_ticket_message(ticket_id, body.content, token=token)
