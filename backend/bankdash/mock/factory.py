"""factory.py — Builders for records created by mock write operations.

Unlike fixtures.py, which holds static data, these functions create fresh
records for POST-style calls (new transaction, new ticket, uploaded KYC
document, ticket message) and mint the JWTs returned by mock logins.

Called by: adapters/mock_backend.py
Depends on: PyJWT
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

_TOKEN_ALGORITHM = "HS256"


def _iso(dt: datetime) -> str:
    """Format a datetime the way the backend does (UTC, trailing Z)."""
    return dt.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def utc_now() -> str:
    return _iso(datetime.now(UTC))


def next_id(records: Iterable[dict[str, Any]], key: str, start: int) -> int:
    """Next sequential id after the largest existing one.

    Sequential ids keep mock sessions reproducible, unlike the random
    ids the browser mock used to hand out.
    """
    return max((record[key] for record in records), default=start - 1) + 1


# ─── Tokens ───────────────────────────────────────────────────────────────────


def create_mock_token(
    subject: str,
    *,
    role: str,
    user_type: str,
    secret: str,
    ttl_minutes: int = 60,
) -> str:
    """Mint a signed JWT shaped like the backend's login tokens.

    Dashboard code decodes ``exp`` to detect expired sessions, so mock
    tokens carry real claims rather than a placeholder string.

    Args:
        subject: Email (customers) or username (admins).
        role: ROLE_CUSTOMER, ROLE_SUPER_ADMIN, ...
        user_type: CUSTOMER or ADMIN.
        secret: HMAC key from settings.mock_token_secret.
        ttl_minutes: Lifetime of the token.

    Returns:
        Encoded HS256 JWT.
    """
    issued = datetime.now(UTC)
    payload = {
        "sub": subject,
        "role": role,
        "userType": user_type,
        "iat": issued,
        "exp": issued + timedelta(minutes=ttl_minutes),
        "mock": True,
    }
    return jwt.encode(payload, secret, algorithm=_TOKEN_ALGORITHM)


def decode_mock_token(token: str, *, secret: str) -> dict[str, Any]:
    """Verify and decode a token minted by ``create_mock_token``."""
    return jwt.decode(token, secret, algorithms=[_TOKEN_ALGORITHM])


# ─── Records ──────────────────────────────────────────────────────────────────


def create_mock_transaction(
    data: dict[str, Any],
    *,
    transaction_id: int,
    transaction_type: str,
    balance_after: float,
) -> dict[str, Any]:
    """Build the transaction record returned by ``create_transaction``.

    Args:
        data: Request body (accountId, amount, description, mode,
            recipientAccountId, ...).
        transaction_id: Id assigned by the mock backend.
        transaction_type: Normalized CREDIT, DEBIT or TRANSFER.
        balance_after: Source account balance once the transaction applied.

    Returns:
        Dict with the same fields as the fixture transactions.
    """
    account_id = data["accountId"]
    source = None if transaction_type == "CREDIT" else account_id
    if transaction_type == "CREDIT":
        destination = account_id
    else:
        destination = data.get("recipientAccountId")

    return {
        "transactionId": transaction_id,
        "accountId": account_id,
        "sourceAccountId": source,
        "destinationAccountId": destination,
        "transactionType": transaction_type,
        "amount": round(float(data["amount"]), 2),
        "description": data.get("description") or transaction_type.title(),
        "mode": data.get("mode") or "ONLINE",
        "status": "COMPLETED",
        "timestamp": utc_now(),
        "balanceAfter": round(balance_after, 2),
        "transactionFee": data.get("transactionFee") or 0,
        "bankName": data.get("bankName"),
        "ifscCode": data.get("ifscCode"),
        "initiatedBy": data.get("initiatedBy") or "CUSTOMER",
        "remarks": data.get("remarks"),
    }


def create_mock_ticket(
    data: dict[str, Any],
    *,
    ticket_id: int,
    customer: dict[str, Any],
) -> dict[str, Any]:
    """Build a freshly opened support ticket for ``customer`` (a nested summary)."""
    return {
        "ticketId": ticket_id,
        "customer": customer,
        "subject": data["subject"],
        "description": data.get("description", ""),
        "category": data.get("category", "GENERAL"),
        "priority": data.get("priority", "MEDIUM"),
        "status": "OPEN",
        "channel": data.get("channel", "WEB"),
        "createdAt": utc_now(),
        "updatedAt": None,
        "assignedAdmin": None,
        "resolutionNotes": None,
        "escalated": False,
        "escalatedTo": None,
        "closedAt": None,
        "messages": [],
    }


def create_mock_ticket_message(
    ticket_id: int,
    content: str,
    *,
    message_id: int,
    sender_type: str,
    sender_name: str,
) -> dict[str, Any]:
    """Build one entry of a ticket's message thread."""
    return {
        "messageId": message_id,
        "ticketId": ticket_id,
        "senderType": sender_type,
        "senderName": sender_name,
        "content": content,
        "createdAt": utc_now(),
    }


def create_mock_kyc_document(
    *,
    document_id: int,
    customer_id: int,
    document_type: str,
    filename: str,
    file_size: int,
) -> dict[str, Any]:
    """Build the record for an uploaded KYC document (always PENDING)."""
    return {
        "documentId": document_id,
        "customerId": customer_id,
        "documentType": document_type,
        "originalFilename": filename,
        "uploadTimestamp": utc_now(),
        "verificationStatus": "PENDING",
        "verificationNotes": "",
        "verifiedAt": None,
        "fileSize": file_size,
    }
