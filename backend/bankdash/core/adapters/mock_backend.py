"""mock_backend.py — In-memory banking backend built on sample data.

Implements the BankingBackend protocol against the fixtures in
``bankdash.mock``. Responses use the same envelopes and field names as
the live backend. Each instance works on its own deep copy of the
fixtures, so writes (new transactions, tickets, uploads, KYC decisions)
last for the session and vanish on restart.

The only failures this adapter produces are deliberate DomainErrors
(wrong credentials, unknown ids, invalid input). It never raises
network errors.

Called by: ResilientGateway (forced mock, backend unavailable, network fallback)
Depends on: mock/fixtures.py, mock/factory.py, mock/latency.py
"""


from __future__ import annotations

import asyncio
import copy
import logging
import math
import mimetypes
from typing import Any, NoReturn

import jwt

from bankdash.config import Settings, get_settings
from bankdash.core.pagination import paginate
from bankdash.core.protocols import Payload, Sleep
from bankdash.mock.factory import (
    create_mock_kyc_document,
    create_mock_ticket,
    create_mock_ticket_message,
    create_mock_token,
    create_mock_transaction,
    decode_mock_token,
    next_id,
    utc_now,
)
from bankdash.mock.fixtures import (
    KYC_DOCUMENT_TYPES,
    MOCK_ACCOUNTS,
    MOCK_ADMIN_CREDENTIALS,
    MOCK_ADMINS,
    MOCK_CUSTOMER_CREDENTIALS,
    MOCK_CUSTOMERS,
    MOCK_KYC_DOCUMENTS,
    MOCK_SUPPORT_TICKETS,
    MOCK_TRANSACTIONS,
)
from bankdash.mock.latency import delay, delayed_error

logger = logging.getLogger(__name__)

_EDITABLE_PROFILE_FIELDS = frozenset({
    "firstName",
    "lastName",
    "phoneNumber",
    "city",
    "state",
    "zipCode",
    "country",
    "profilePhotoUrl",
})
_TRANSACTION_TYPES = frozenset({"CREDIT", "DEBIT", "TRANSFER"})
_DOCUMENT_DECISIONS = frozenset({"VERIFIED", "REJECTED"})
_KYC_STATUSES = frozenset({"PENDING", "UNDER_REVIEW", "VERIFIED", "REJECTED"})
_DOCUMENTS_REQUIRED = 2
_MINI_STATEMENT_ROWS = 5

CUSTOMER = "CUSTOMER"
ADMIN = "ADMIN"


def _newest_first(records: list[dict[str, Any]], time_key: str, id_key: str) -> list[dict[str, Any]]:
    return sorted(records, key=lambda r: (r[time_key], r[id_key]), reverse=True)


def _positive_amount(value: Any) -> float | None:
    """Parse a money amount; None unless it is a finite number above zero."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


class MockBankingBackend:
    """Fake banking backend — sample data, artificial latency, zero network.

    Usage:
        backend = MockBankingBackend(settings, sleep=asyncio.sleep)
        login = await backend.customer_login("demo@wtfbank.com", "demo123")
        await backend.get_accounts(token=login["token"])

    The caller of every operation after login is whoever the mock token
    names. A missing, expired or foreign token is rejected with 401, so two
    dashboard users never see each other's data.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        delay_ms: float | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the mock backend with a private copy of the fixtures.

        Args:
            settings: App settings (latency and token signing). Defaults to get_settings().
            delay_ms: Overrides settings.mock_delay_ms.
            sleep: Coroutine function used for latency; inject a no-op in tests.
        """
        self._settings = settings or get_settings()
        self._delay_ms = self._settings.mock_delay_ms if delay_ms is None else delay_ms
        self._sleep = sleep

        self._customers = copy.deepcopy(MOCK_CUSTOMERS)
        self._admins = copy.deepcopy(MOCK_ADMINS)
        self._accounts = copy.deepcopy(MOCK_ACCOUNTS)
        self._transactions = copy.deepcopy(MOCK_TRANSACTIONS)
        self._documents = copy.deepcopy(MOCK_KYC_DOCUMENTS)
        self._tickets = copy.deepcopy(MOCK_SUPPORT_TICKETS)
        # Bytes of documents uploaded this session, by documentId.
        self._document_files: dict[int, bytes] = {}
        logger.info("🎭 MockBankingBackend initialized — sample data, no network calls")

    # ─── Helpers ──────────────────────────────────────────────────────────────

    async def _respond(self, value: Any) -> Any:
        return await delay(value, self._delay_ms, sleep=self._sleep)

    async def _reject(self, message: str, status: int) -> NoReturn:
        logger.debug("MockBackend rejecting: %s (%d)", message, status)
        await delayed_error(message, status, ms=self._delay_ms, sleep=self._sleep)

    def _find(self, records: list[dict[str, Any]], key: str, value: Any) -> dict[str, Any] | None:
        return next((record for record in records if record[key] == value), None)

    async def _caller(self, token: str | None) -> tuple[str, dict[str, Any]]:
        """Resolve a mock token to ``(CUSTOMER | ADMIN, customer or admin record)``."""
        if not token:
            await self._reject("Authentication required", 401)
        try:
            claims = decode_mock_token(token, secret=self._settings.mock_token_secret)
        except jwt.ExpiredSignatureError:
            await self._reject("Your session has expired. Please login again.", 401)
        except jwt.PyJWTError:
            await self._reject("Invalid session token", 401)

        if claims.get("userType") == ADMIN:
            admin = self._find(self._admins, "username", claims.get("sub"))
            if admin is not None:
                return ADMIN, admin
        else:
            customer = self._find(self._customers, "email", claims.get("sub"))
            if customer is not None:
                return CUSTOMER, customer
        await self._reject("Invalid session token", 401)

    async def _customer(self, token: str | None) -> dict[str, Any]:
        user_type, record = await self._caller(token)
        if user_type != CUSTOMER:
            await self._reject("This operation requires a customer session", 403)
        return record

    async def _admin(self, token: str | None) -> dict[str, Any]:
        user_type, record = await self._caller(token)
        if user_type != ADMIN:
            await self._reject("Admin access required", 403)
        return record

    def _summary(self, customer: dict[str, Any]) -> dict[str, Any]:
        return {
            "customerId": customer["customerId"],
            "firstName": customer["firstName"],
            "lastName": customer["lastName"],
            "email": customer["email"],
        }

    def _accounts_of(self, customer_id: int) -> list[dict[str, Any]]:
        return [a for a in self._accounts if a["customer"]["customerId"] == customer_id]

    def _documents_of(self, customer_id: int) -> list[dict[str, Any]]:
        return [d for d in self._documents if d["customerId"] == customer_id]

    async def _owned_account(self, account_id: int, token: str | None) -> dict[str, Any]:
        """Look up an account the caller may see.

        Admin sessions see every account; customers only their own.
        """
        user_type, record = await self._caller(token)
        account = self._find(self._accounts, "accountId", account_id)
        if account is None:
            await self._reject(f"Account {account_id} not found", 404)
        if user_type == CUSTOMER and account["customer"]["customerId"] != record["customerId"]:
            await self._reject("Account does not belong to the logged-in customer", 403)
        return account

    async def _visible_ticket(self, ticket_id: int, token: str | None) -> tuple[str, dict[str, Any], dict[str, Any]]:
        user_type, record = await self._caller(token)
        ticket = self._find(self._tickets, "ticketId", ticket_id)
        if ticket is None:
            await self._reject(f"Ticket {ticket_id} not found", 404)
        if user_type == CUSTOMER and ticket["customer"]["customerId"] != record["customerId"]:
            await self._reject("Ticket does not belong to the logged-in customer", 403)
        return user_type, record, ticket

    def _transactions_of(self, account_id: int) -> list[dict[str, Any]]:
        # A transfer is one record that lists both accounts, so it shows up
        # in the history of the sender and of an internal recipient.
        touching = [
            t for t in self._transactions
            if t["sourceAccountId"] == account_id or t["destinationAccountId"] == account_id
        ]
        return _newest_first(touching, "timestamp", "transactionId")

    def _recompute_kyc(self, customer: dict[str, Any]) -> None:
        """Derive overall KYC status from the latest document of each type."""
        latest: dict[str, dict[str, Any]] = {}
        for document in sorted(self._documents_of(customer["customerId"]), key=lambda d: d["documentId"]):
            latest[document["documentType"]] = document
        statuses = {d["verificationStatus"] for d in latest.values()}
        if "REJECTED" in statuses:
            customer["kycStatus"] = "REJECTED"
        elif len(latest) >= _DOCUMENTS_REQUIRED and statuses == {"VERIFIED"}:
            customer["kycStatus"] = "VERIFIED"
        elif latest:
            customer["kycStatus"] = "PENDING"

    def _document_file(self, document: dict[str, Any]) -> Payload:
        filename = document["originalFilename"]
        content = self._document_files.get(document["documentId"])
        if content is None:
            # Sample documents have no real scan behind them.
            content = f"Sample {document['documentType']} document #{document['documentId']}\n".encode()
            content_type = "text/plain"
        else:
            content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        return {
            "documentId": document["documentId"],
            "filename": filename,
            "contentType": content_type,
            "content": content,
        }

    # ─── Auth ─────────────────────────────────────────────────────────────────

    async def customer_login(self, email: str, password: str) -> Payload:
        entry = MOCK_CUSTOMER_CREDENTIALS.get(email.strip().lower())
        if entry is None or entry[0] != password:
            await self._reject("Invalid email or password", 401)

        customer = self._find(self._customers, "customerId", entry[1])
        if customer is None:
            await self._reject("Invalid email or password", 401)
        accounts = self._accounts_of(customer["customerId"])
        token = create_mock_token(
            customer["email"],
            role="ROLE_CUSTOMER",
            user_type=CUSTOMER,
            secret=self._settings.mock_token_secret,
            ttl_minutes=self._settings.mock_token_ttl_minutes,
        )
        logger.info("Mock: customer login for '%s'", customer["email"])
        return await self._respond({
            "token": token,
            "customerId": customer["customerId"],
            "accountId": accounts[0]["accountId"] if accounts else None,
            "userType": CUSTOMER,
            "kycStatus": customer["kycStatus"],
            "message": "Login successful",
        })

    async def admin_login(self, username: str, password: str) -> Payload:
        entry = MOCK_ADMIN_CREDENTIALS.get(username.strip())
        if entry is None or entry[0] != password:
            await self._reject("Invalid username or password", 401)

        admin = self._find(self._admins, "adminId", entry[1])
        if admin is None:
            await self._reject("Invalid username or password", 401)
        token = create_mock_token(
            admin["username"],
            role=admin["role"],
            user_type=ADMIN,
            secret=self._settings.mock_token_secret,
            ttl_minutes=self._settings.mock_token_ttl_minutes,
        )
        logger.info("Mock: admin login for '%s'", admin["username"])
        return await self._respond({
            "token": token,
            "adminId": admin["adminId"],
            "role": admin["role"],
            "message": "Admin login successful",
        })

    async def logout(self, *, token: str | None = None) -> None:
        # Mock tokens are self-contained; there is no session to revoke.
        await self._respond(None)

    # ─── Customer Profile ─────────────────────────────────────────────────────

    async def get_current_customer(self, *, token: str | None = None) -> Payload:
        return await self._respond(await self._customer(token))

    async def update_customer_profile(self, changes: Payload, *, token: str | None = None) -> Payload:
        customer = await self._customer(token)
        locked = sorted(set(changes) - _EDITABLE_PROFILE_FIELDS)
        if locked:
            await self._reject(f"Field(s) cannot be updated: {', '.join(locked)}", 400)

        customer.update(changes)
        # Keep the nested copies on accounts and tickets in sync.
        summary = self._summary(customer)
        for account in self._accounts_of(customer["customerId"]):
            account["customer"] = dict(summary)
        for ticket in self._tickets:
            if ticket["customer"]["customerId"] == customer["customerId"]:
                ticket["customer"] = dict(summary)
        return await self._respond(customer)

    # ─── Accounts ─────────────────────────────────────────────────────────────

    async def get_accounts(self, page: int = 0, size: int = 10, *, token: str | None = None) -> Payload:
        customer = await self._customer(token)
        return await self._respond(paginate(self._accounts_of(customer["customerId"]), page, size))

    async def get_account(self, account_id: int, *, token: str | None = None) -> Payload:
        return await self._respond(await self._owned_account(account_id, token))

    async def get_account_balance(self, account_id: int, *, token: str | None = None) -> Payload:
        account = await self._owned_account(account_id, token)
        return await self._respond({
            "accountId": account["accountId"],
            "balance": account["balance"],
            "lastUpdated": utc_now(),
        })

    # ─── Transactions ─────────────────────────────────────────────────────────

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
        await self._owned_account(account_id, token)
        transactions = self._transactions_of(account_id)
        if transaction_type:
            wanted = transaction_type.upper()
            transactions = [t for t in transactions if t["transactionType"] == wanted]
        # ISO timestamps compare correctly as strings on their date prefix.
        if from_date:
            transactions = [t for t in transactions if t["timestamp"][:10] >= from_date]
        if to_date:
            transactions = [t for t in transactions if t["timestamp"][:10] <= to_date]
        return await self._respond(paginate(transactions, page, size))

    async def get_mini_statement(self, account_id: int, *, token: str | None = None) -> Payload:
        account = await self._owned_account(account_id, token)
        return await self._respond({
            "accountId": account["accountId"],
            "accountNumber": account["accountNumber"],
            "balance": account["balance"],
            "generatedAt": utc_now(),
            "transactions": self._transactions_of(account_id)[:_MINI_STATEMENT_ROWS],
        })

    async def create_transaction(self, data: Payload, *, token: str | None = None) -> Payload:
        transaction_type = str(data.get("transactionType", "")).upper()
        if transaction_type not in _TRANSACTION_TYPES:
            await self._reject(f"Unsupported transaction type '{data.get('transactionType')}'", 400)
        amount = _positive_amount(data.get("amount"))
        if amount is None:
            await self._reject("Amount must be a finite number greater than zero", 400)
        fee = 0.0
        if data.get("transactionFee"):
            fee = _positive_amount(data["transactionFee"])
            if fee is None:
                await self._reject("Transaction fee must be a finite, non-negative number", 400)

        account = await self._owned_account(data.get("accountId"), token)
        if account["accountStatus"] != "ACTIVE":
            await self._reject(f"Account {account['accountId']} is {account['accountStatus'].lower()}", 400)

        recipient = None
        if transaction_type == "TRANSFER":
            recipient_id = data.get("recipientAccountId")
            if recipient_id is None:
                await self._reject("recipientAccountId is required for transfers", 400)
            if recipient_id == account["accountId"]:
                await self._reject("Cannot transfer to the same account", 400)
            # External recipients are accepted; only internal ones get credited.
            recipient = self._find(self._accounts, "accountId", recipient_id)
            if recipient is not None and recipient["accountStatus"] != "ACTIVE":
                await self._reject(
                    f"Recipient account {recipient_id} is {recipient['accountStatus'].lower()}", 400
                )

        if transaction_type == "CREDIT":
            new_balance = account["balance"] + amount
        else:
            new_balance = account["balance"] - amount - fee
            if new_balance < 0:
                await self._reject("Insufficient funds", 400)

        account["balance"] = round(new_balance, 2)
        if recipient is not None:
            recipient["balance"] = round(recipient["balance"] + amount, 2)

        transaction = create_mock_transaction(
            data,
            transaction_id=next_id(self._transactions, "transactionId", 3001),
            transaction_type=transaction_type,
            balance_after=account["balance"],
        )
        self._transactions.append(transaction)
        logger.info(
            "Mock: %s of %.2f on account %s → balance %.2f",
            transaction_type, amount, account["accountId"], account["balance"],
        )
        return await self._respond(transaction)

    # ─── KYC ──────────────────────────────────────────────────────────────────

    async def get_kyc_status(self, *, token: str | None = None) -> Payload:
        customer = await self._customer(token)
        documents = self._documents_of(customer["customerId"])
        types = {d["documentType"] for d in documents}
        verified = sum(1 for d in documents if d["verificationStatus"] == "VERIFIED")
        return await self._respond({
            "kycStatus": customer["kycStatus"],
            "documentsUploaded": len(documents),
            "documentsVerified": verified,
            "documentsRequired": _DOCUMENTS_REQUIRED,
            "hasAadharCard": "AADHAR" in types,
            "hasPanCard": "PAN" in types,
            "isComplete": customer["kycStatus"] == "VERIFIED",
        })

    async def get_my_kyc_documents(self, *, token: str | None = None) -> Payload:
        customer = await self._customer(token)
        return await self._respond({
            "documents": self._documents_of(customer["customerId"]),
            "kycStatus": customer["kycStatus"],
        })

    async def upload_kyc_document(
        self,
        document_type: str,
        filename: str,
        content: bytes,
        *,
        token: str | None = None,
    ) -> Payload:
        customer = await self._customer(token)
        normalized = document_type.upper()
        if normalized not in KYC_DOCUMENT_TYPES:
            await self._reject(f"Unsupported document type '{document_type}'", 400)
        if not content:
            await self._reject("Uploaded file is empty", 400)

        document = create_mock_kyc_document(
            document_id=next_id(self._documents, "documentId", 4001),
            customer_id=customer["customerId"],
            document_type=normalized,
            filename=filename,
            file_size=len(content),
        )
        self._documents.append(document)
        self._document_files[document["documentId"]] = bytes(content)
        customer["hasAadharDocument" if normalized == "AADHAR" else "hasPanDocument"] = True
        customer["documentsUploadTimestamp"] = document["uploadTimestamp"]
        self._recompute_kyc(customer)
        return await self._respond({
            "document": document,
            "message": f"{normalized} document uploaded successfully",
        })

    async def download_kyc_document(self, document_id: int, *, token: str | None = None) -> Payload:
        customer = await self._customer(token)
        document = self._find(self._documents, "documentId", document_id)
        if document is None:
            await self._reject(f"KYC document {document_id} not found", 404)
        if document["customerId"] != customer["customerId"]:
            await self._reject("Document does not belong to the logged-in customer", 403)
        return await self._respond(self._document_file(document))

    # ─── Support ──────────────────────────────────────────────────────────────

    async def create_support_ticket(self, data: Payload, *, token: str | None = None) -> Payload:
        customer = await self._customer(token)
        if not str(data.get("subject", "")).strip():
            await self._reject("Ticket subject is required", 400)

        ticket = create_mock_ticket(
            data,
            ticket_id=next_id(self._tickets, "ticketId", 5001),
            customer=self._summary(customer),
        )
        self._tickets.append(ticket)
        return await self._respond(ticket)

    async def get_customer_tickets(
        self,
        status: str | None = None,
        page: int = 0,
        size: int = 10,
        *,
        token: str | None = None,
    ) -> Payload:
        customer = await self._customer(token)
        tickets = [t for t in self._tickets if t["customer"]["customerId"] == customer["customerId"]]
        return await self._respond(paginate(self._filter_tickets(tickets, status), page, size))

    def _filter_tickets(self, tickets: list[dict[str, Any]], status: str | None) -> list[dict[str, Any]]:
        if status:
            tickets = [t for t in tickets if t["status"] == status.upper()]
        return _newest_first(tickets, "createdAt", "ticketId")

    async def get_ticket_details(self, ticket_id: int, *, token: str | None = None) -> Payload:
        _, _, ticket = await self._visible_ticket(ticket_id, token)
        return await self._respond(ticket)

    async def add_ticket_message(self, ticket_id: int, content: str, *, token: str | None = None) -> Payload:
        user_type, record, ticket = await self._visible_ticket(ticket_id, token)
        if not content or not content.strip():
            await self._reject("Message content is required", 400)
        if ticket["status"] == "CLOSED":
            await self._reject(f"Ticket {ticket_id} is closed", 400)

        if user_type == ADMIN:
            sender_name = record["fullName"]
        else:
            sender_name = f"{record['firstName']} {record['lastName']}"
        thread = ticket.setdefault("messages", [])
        existing = [m for t in self._tickets for m in t.get("messages", [])]
        message = create_mock_ticket_message(
            ticket_id,
            content.strip(),
            message_id=next_id(existing, "messageId", 6001),
            sender_type=user_type,
            sender_name=sender_name,
        )
        thread.append(message)
        ticket["updatedAt"] = message["createdAt"]
        return await self._respond(message)

    # ─── Admin ────────────────────────────────────────────────────────────────

    async def get_all_customers(
        self,
        page: int = 0,
        size: int = 10,
        search: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        await self._admin(token)
        customers = self._customers
        if search:
            needle = search.strip().lower()
            customers = [
                c for c in customers
                if needle in f"{c['firstName']} {c['lastName']}".lower() or needle in c["email"].lower()
            ]
        return await self._respond(paginate(customers, page, size))

    async def _customer_by_id(self, customer_id: int) -> dict[str, Any]:
        customer = self._find(self._customers, "customerId", customer_id)
        if customer is None:
            await self._reject(f"Customer {customer_id} not found", 404)
        return customer

    async def get_customer_details(self, customer_id: int, *, token: str | None = None) -> Payload:
        await self._admin(token)
        customer = await self._customer_by_id(customer_id)
        return await self._respond({
            **customer,
            "accounts": self._accounts_of(customer_id),
            "kycDocuments": self._documents_of(customer_id),
        })

    async def get_customer_kyc_details(self, customer_id: int, *, token: str | None = None) -> Payload:
        await self._admin(token)
        customer = await self._customer_by_id(customer_id)
        documents = self._documents_of(customer_id)
        types = {d["documentType"] for d in documents}
        return await self._respond({
            "customerId": customer_id,
            "customerName": f"{customer['firstName']} {customer['lastName']}",
            "email": customer["email"],
            "kycStatus": customer["kycStatus"],
            "hasAadharDocument": "AADHAR" in types,
            "hasPanDocument": "PAN" in types,
            "documentsUploadTimestamp": customer.get("documentsUploadTimestamp"),
            "documents": documents,
        })

    async def get_pending_kyc_documents(self, page: int = 0, size: int = 10, *, token: str | None = None) -> Payload:
        await self._admin(token)
        pending = []
        for document in self._documents:
            if document["verificationStatus"] != "PENDING":
                continue
            customer = await self._customer_by_id(document["customerId"])
            pending.append({
                **document,
                "customerName": f"{customer['firstName']} {customer['lastName']}",
                "customerEmail": customer["email"],
            })
        return await self._respond(paginate(_newest_first(pending, "uploadTimestamp", "documentId"), page, size))

    async def get_kyc_statistics(self, *, token: str | None = None) -> Payload:
        await self._admin(token)
        by_status = {"PENDING": 0, "VERIFIED": 0, "REJECTED": 0}
        for document in self._documents:
            by_status[document["verificationStatus"]] = by_status.get(document["verificationStatus"], 0) + 1
        return await self._respond({
            "totalDocuments": len(self._documents),
            "pendingDocuments": by_status["PENDING"],
            "verifiedDocuments": by_status["VERIFIED"],
            "rejectedDocuments": by_status["REJECTED"],
            "customersPendingReview": len({
                d["customerId"] for d in self._documents if d["verificationStatus"] == "PENDING"
            }),
        })

    async def view_kyc_document(
        self,
        document_id: int,
        document_type: str = "aadhar",
        *,
        token: str | None = None,
    ) -> Payload:
        await self._admin(token)
        wanted = document_type.upper()
        document = self._find(self._documents, "documentId", document_id)
        if document is None or document["documentType"] != wanted:
            await self._reject(f"{wanted} document {document_id} not found", 404)
        return await self._respond(self._document_file(document))

    async def verify_kyc_document(
        self,
        document_id: int,
        status: str,
        notes: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        await self._admin(token)
        decision = status.upper()
        if decision not in _DOCUMENT_DECISIONS:
            await self._reject(f"Verification status must be one of {sorted(_DOCUMENT_DECISIONS)}", 400)
        document = self._find(self._documents, "documentId", document_id)
        if document is None:
            await self._reject(f"KYC document {document_id} not found", 404)

        document["verificationStatus"] = decision
        document["verificationNotes"] = notes or ""
        document["verifiedAt"] = utc_now()
        self._recompute_kyc(await self._customer_by_id(document["customerId"]))
        return await self._respond(document)

    async def update_kyc_status(
        self,
        customer_id: int,
        status: str,
        notes: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        await self._admin(token)
        new_status = status.upper()
        if new_status not in _KYC_STATUSES:
            await self._reject(f"KYC status must be one of {sorted(_KYC_STATUSES)}", 400)
        customer = await self._customer_by_id(customer_id)

        customer["kycStatus"] = new_status
        return await self._respond({
            "customerId": customer_id,
            "kycStatus": new_status,
            "notes": notes,
            "updatedAt": utc_now(),
        })

    async def get_admin_support_tickets(
        self,
        status: str | None = None,
        page: int = 0,
        size: int = 10,
        *,
        token: str | None = None,
    ) -> Payload:
        await self._admin(token)
        return await self._respond(paginate(self._filter_tickets(self._tickets, status), page, size))
