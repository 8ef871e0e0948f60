"""Backend protocols — the single interface every data source implements.

``BankingBackend`` lists every operation the dashboard needs. The live HTTP
adapter, the mock adapter and the resilient gateway all implement it, so a
consumer holding a ``BankingBackend`` cannot tell which one it got. Adding an
operation means adding it here first; the protocol compliance tests then fail
until all three implementations have it.

Payloads are JSON-shaped dicts using the banking backend's camelCase field
names. Every list operation returns the page envelope from ``pagination.py``.

Every operation after login takes the caller's bearer token as the
keyword-only ``token`` argument. Nothing about a session is kept between
calls, so each HTTP request acts strictly as the client that sent it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

# Coroutine function used for artificial latency (``asyncio.sleep`` in
# production, a no-op in tests).
Sleep = Callable[[float], Awaitable[None]]

Payload = dict[str, Any]


# ─── Protocols ─────────────────────────────────────────────────────────────────


@runtime_checkable
class BankingBackend(Protocol):
    """Every operation the customer and admin dashboards call.

    Implementations: LiveBankingBackend, MockBankingBackend, ResilientGateway.
    """

    # ── Auth ──────────────────────────────────────────────────────────────

    async def customer_login(self, email: str, password: str) -> Payload:
        """Authenticate a customer. Returns token, customerId, kycStatus."""
        ...

    async def admin_login(self, username: str, password: str) -> Payload:
        """Authenticate an admin. Returns token, adminId, role."""
        ...

    async def logout(self, *, token: str | None = None) -> None:
        """End the session that ``token`` belongs to."""
        ...

    # ── Customer profile ──────────────────────────────────────────────────

    async def get_current_customer(self, *, token: str | None = None) -> Payload:
        """Profile of the logged-in customer."""
        ...

    async def update_customer_profile(self, changes: Payload, *, token: str | None = None) -> Payload:
        """Apply editable profile fields and return the updated profile."""
        ...

    # ── Accounts ──────────────────────────────────────────────────────────

    async def get_accounts(self, page: int = 0, size: int = 10, *, token: str | None = None) -> Payload:
        """Page of accounts owned by the logged-in customer."""
        ...

    async def get_account(self, account_id: int, *, token: str | None = None) -> Payload:
        """Single account by id."""
        ...

    async def get_account_balance(self, account_id: int, *, token: str | None = None) -> Payload:
        """Balance snapshot: accountId, balance, lastUpdated."""
        ...

    # ── Transactions ──────────────────────────────────────────────────────

    async def get_transaction_history(
        self,
        account_id: int,
        page: int = 0,
        size: int = 10,
        transaction_type: str | None = None,
        from_date: str | None = None,
        to_date: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        """Page of transactions touching an account, newest first."""
        ...

    async def get_mini_statement(self, account_id: int, *, token: str | None = None) -> Payload:
        """Last five transactions of an account."""
        ...

    async def create_transaction(self, data: Payload, *, token: str | None = None) -> Payload:
        """Post a credit, debit or transfer. Returns the new transaction."""
        ...

    # ── KYC ───────────────────────────────────────────────────────────────

    async def get_kyc_status(self, *, token: str | None = None) -> Payload:
        """KYC summary for the logged-in customer."""
        ...

    async def get_my_kyc_documents(self, *, token: str | None = None) -> Payload:
        """Uploaded KYC documents plus overall kycStatus."""
        ...

    async def upload_kyc_document(
        self,
        document_type: str,
        filename: str,
        content: bytes,
        *,
        token: str | None = None,
    ) -> Payload:
        """Upload an AADHAR or PAN document."""
        ...

    async def download_kyc_document(self, document_id: int, *, token: str | None = None) -> Payload:
        """File of one of the caller's own KYC documents.

        Returns ``{"documentId", "filename", "contentType", "content"}`` with
        ``content`` as raw bytes.
        """
        ...

    # ── Support ───────────────────────────────────────────────────────────

    async def create_support_ticket(self, data: Payload, *, token: str | None = None) -> Payload:
        """Open a support ticket for the logged-in customer."""
        ...

    async def get_customer_tickets(
        self,
        status: str | None = None,
        page: int = 0,
        size: int = 10,
        *,
        token: str | None = None,
    ) -> Payload:
        """Page of the logged-in customer's tickets."""
        ...

    async def get_ticket_details(self, ticket_id: int, *, token: str | None = None) -> Payload:
        """One ticket including its ``messages`` thread."""
        ...

    async def add_ticket_message(self, ticket_id: int, content: str, *, token: str | None = None) -> Payload:
        """Append a message to a ticket thread. Returns the new message."""
        ...

    # ── Admin ─────────────────────────────────────────────────────────────

    async def get_all_customers(
        self,
        page: int = 0,
        size: int = 10,
        search: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        """Page of all customers, optionally filtered by name/email."""
        ...

    async def get_customer_details(self, customer_id: int, *, token: str | None = None) -> Payload:
        """Customer profile with accounts and KYC documents."""
        ...

    async def get_customer_kyc_details(self, customer_id: int, *, token: str | None = None) -> Payload:
        """KYC view of one customer: status flags plus every document."""
        ...

    async def get_pending_kyc_documents(self, page: int = 0, size: int = 10, *, token: str | None = None) -> Payload:
        """Page of KYC documents awaiting review."""
        ...

    async def get_kyc_statistics(self, *, token: str | None = None) -> Payload:
        """Counts of documents by verification status."""
        ...

    async def view_kyc_document(
        self,
        document_id: int,
        document_type: str = "aadhar",
        *,
        token: str | None = None,
    ) -> Payload:
        """File of any customer's KYC document, for review. Same shape as download."""
        ...

    async def verify_kyc_document(
        self,
        document_id: int,
        status: str,
        notes: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        """Mark a KYC document VERIFIED or REJECTED."""
        ...

    async def update_kyc_status(
        self,
        customer_id: int,
        status: str,
        notes: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        """Set a customer's overall KYC status."""
        ...

    async def get_admin_support_tickets(
        self,
        status: str | None = None,
        page: int = 0,
        size: int = 10,
        *,
        token: str | None = None,
    ) -> Payload:
        """Page of every customer's tickets."""
        ...


@runtime_checkable
class HealthCheck(Protocol):
    """Lightweight liveness call used by the gateway's probe."""

    async def ping(self) -> None:
        """Return normally when the backend is reachable; raise ApiError otherwise."""
        ...
