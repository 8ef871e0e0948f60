"""live_backend.py — BankingBackend over the real banking REST API.

Talks to the banking backend with ``httpx.AsyncClient`` and converts every
failure into the shared error taxonomy before it leaves this module:

    httpx.TransportError (connect, read, timeout, protocol) → NetworkError
    non-2xx response                                        → HttpStatusError(status)
    2xx with a body that is not the JSON shape expected     → HttpStatusError(502)

It also normalizes the few endpoints whose payloads differ from the
contract (bare JSON arrays instead of pages, ``pendingKycRequests``
wrappers) so callers get the same shapes as from the mock backend.

The adapter holds no session. Every call after login carries the caller's
bearer token, passed in as ``token``.

Called by: ResilientGateway, scripts/backend_status.py
Depends on: config.py, core/errors.py, core/pagination.py
"""

from __future__ import annotations

import re
from typing import Any

import httpx
import jwt
import structlog

from bankdash.config import Settings, get_settings
from bankdash.core.errors import ApiError, HttpStatusError, NetworkError
from bankdash.core.pagination import as_page, paginate
from bankdash.core.protocols import Payload

logger = structlog.get_logger()

_BAD_GATEWAY = 502
_FILENAME_PATTERN = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)
_ADMIN_ROLES = frozenset({"ROLE_ADMIN", "ROLE_SUPER_ADMIN", "ROLE_KYC_ADMIN", "ROLE_SUPPORT_ADMIN"})


def _error_message(response: httpx.Response) -> tuple[str, Any]:
    """Pull a readable message (and parsed body) out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase or "An error occurred", None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or body.get("details")
        return str(message or response.reason_phrase or "An error occurred"), body
    return response.reason_phrase or "An error occurred", body


def _is_admin_token(token: str) -> bool:
    """Whether a backend JWT was issued to an admin.

    Only routes logout, so the claims are read without verifying the
    signature. An unreadable token is treated as a customer's.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return False
    if str(claims.get("userType", "")).upper() == "ADMIN":
        return True
    return str(claims.get("role", "")).upper() in _ADMIN_ROLES


def _bad_payload(path: str, reason: str) -> HttpStatusError:
    logger.warning("backend_bad_payload", path=path, reason=reason)
    return HttpStatusError(
        "Unexpected response from the banking server",
        _BAD_GATEWAY,
        details={"path": path, "reason": reason},
    )


class LiveBankingBackend:
    """HTTP client for the banking backend.

    Args:
        settings: App settings (base URL, timeouts, probe path).
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._base_url = self._settings.normalized_api_base_url
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._settings.api_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    # ─── Transport ────────────────────────────────────────────────────────────

    async def _send(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                files=files,
                headers=headers,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TransportError as exc:
            logger.warning(
                "backend_unreachable",
                method=method,
                path=path,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise NetworkError(
                f"Network error - cannot connect to server at {self._base_url}",
                details={"cause": type(exc).__name__},
            ) from exc

        if response.is_error:
            message, body = _error_message(response)
            logger.info(
                "backend_error_response",
                method=method,
                path=path,
                status=response.status_code,
                message=message,
            )
            raise ApiError.from_status(response.status_code, message, details=body)
        return response

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return its parsed JSON body, or None when empty."""
        response = await self._send(method, path, **kwargs)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise _bad_payload(path, "body is not valid JSON") from exc

    async def _object(self, method: str, path: str, **kwargs: Any) -> Payload:
        payload = await self._request(method, path, **kwargs)
        if not isinstance(payload, dict):
            raise _bad_payload(path, f"expected a JSON object, got {type(payload).__name__}")
        return payload

    async def _page(self, path: str, page: int, size: int, **kwargs: Any) -> Payload:
        payload = await self._request("GET", path, **kwargs)
        try:
            return as_page(payload, page, size)
        except TypeError as exc:
            raise _bad_payload(path, str(exc)) from exc

    async def _file(self, path: str, document_id: int, *, token: str | None) -> Payload:
        response = await self._send("GET", path, token=token)
        disposition = response.headers.get("content-disposition", "")
        match = _FILENAME_PATTERN.search(disposition)
        return {
            "documentId": document_id,
            "filename": match.group(1) if match else f"document-{document_id}",
            "contentType": response.headers.get("content-type", "application/octet-stream"),
            "content": response.content,
        }

    # ─── Health ───────────────────────────────────────────────────────────────

    async def ping(self) -> None:
        """GET the liveness endpoint; any 2xx counts as reachable."""
        await self._send(
            "GET",
            self._settings.health_probe_path,
            timeout=self._settings.health_probe_timeout,
        )

    # ─── Auth ─────────────────────────────────────────────────────────────────

    async def customer_login(self, email: str, password: str) -> Payload:
        return await self._object("POST", "/auth/login", json={"email": email, "password": password})

    async def admin_login(self, username: str, password: str) -> Payload:
        response = await self._object(
            "POST", "/admin/auth/login", json={"username": username, "password": password}
        )
        logger.info("admin_login", admin_id=response.get("adminId"), role=response.get("role"))
        return response

    async def logout(self, *, token: str | None = None) -> None:
        if not token:
            return
        path = "/admin/auth/logout" if _is_admin_token(token) else "/auth/logout"
        await self._send("POST", path, token=token)

    # ─── Customer Profile ─────────────────────────────────────────────────────

    async def get_current_customer(self, *, token: str | None = None) -> Payload:
        return await self._object("GET", "/api/customers/me", token=token)

    async def update_customer_profile(self, changes: Payload, *, token: str | None = None) -> Payload:
        return await self._object("PUT", "/api/customers/me", json=changes, token=token)

    # ─── Accounts ─────────────────────────────────────────────────────────────

    async def get_accounts(self, page: int = 0, size: int = 10, *, token: str | None = None) -> Payload:
        # The backend answers with a bare array of the customer's accounts.
        return await self._page("/api/accounts", page, size, token=token)

    async def get_account(self, account_id: int, *, token: str | None = None) -> Payload:
        return await self._object("GET", f"/api/accounts/{account_id}", token=token)

    async def get_account_balance(self, account_id: int, *, token: str | None = None) -> Payload:
        return await self._object("GET", f"/api/accounts/{account_id}/balance", token=token)

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
        return await self._page(
            f"/api/transactions/account/{account_id}",
            page,
            size,
            token=token,
            params={
                "page": page,
                "size": size,
                "type": transaction_type,
                "fromDate": from_date,
                "toDate": to_date,
            },
        )

    async def get_mini_statement(self, account_id: int, *, token: str | None = None) -> Payload:
        path = f"/api/transactions/account/{account_id}/mini-statement"
        payload = await self._request("GET", path, token=token)
        if isinstance(payload, dict):
            return payload
        if not isinstance(payload, list):
            raise _bad_payload(path, "expected a statement or a list of transactions")
        account = await self.get_account(account_id, token=token)
        return {
            "accountId": account_id,
            "accountNumber": account.get("accountNumber"),
            "balance": account.get("balance"),
            "generatedAt": None,
            "transactions": payload,
        }

    async def create_transaction(self, data: Payload, *, token: str | None = None) -> Payload:
        body = dict(data)
        # The backend's enum binding expects lowercase transaction types.
        if isinstance(body.get("transactionType"), str):
            body["transactionType"] = body["transactionType"].lower()
        return await self._object("POST", "/api/transactions/create", json=body, token=token)

    # ─── KYC ──────────────────────────────────────────────────────────────────

    async def get_kyc_status(self, *, token: str | None = None) -> Payload:
        return await self._object("GET", "/api/kyc/status", token=token)

    async def get_my_kyc_documents(self, *, token: str | None = None) -> Payload:
        path = "/api/kyc/my-documents"
        payload = await self._request("GET", path, token=token)
        if isinstance(payload, list):
            return {"documents": payload, "kycStatus": None}
        if not isinstance(payload, dict):
            raise _bad_payload(path, "expected a list of documents")
        return payload

    async def upload_kyc_document(
        self,
        document_type: str,
        filename: str,
        content: bytes,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._object(
            "POST",
            f"/api/kyc/upload/{document_type.upper()}",
            files={"file": (filename, content)},
            token=token,
        )

    async def download_kyc_document(self, document_id: int, *, token: str | None = None) -> Payload:
        return await self._file(f"/api/kyc/download/{document_id}", document_id, token=token)

    # ─── Support ──────────────────────────────────────────────────────────────

    async def create_support_ticket(self, data: Payload, *, token: str | None = None) -> Payload:
        return await self._object("POST", "/api/support/tickets", json=data, token=token)

    async def get_customer_tickets(
        self,
        status: str | None = None,
        page: int = 0,
        size: int = 10,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._page(
            "/api/support/tickets",
            page,
            size,
            token=token,
            params={"status": status, "page": page, "size": size},
        )

    async def get_ticket_details(self, ticket_id: int, *, token: str | None = None) -> Payload:
        return await self._object("GET", f"/api/support/tickets/{ticket_id}", token=token)

    async def add_ticket_message(self, ticket_id: int, content: str, *, token: str | None = None) -> Payload:
        return await self._object(
            "POST",
            f"/api/support/tickets/{ticket_id}/messages",
            json={"content": content},
            token=token,
        )

    # ─── Admin ────────────────────────────────────────────────────────────────

    async def get_all_customers(
        self,
        page: int = 0,
        size: int = 10,
        search: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._page(
            "/admin/customers",
            page,
            size,
            token=token,
            params={"page": page, "size": size, "search": search},
        )

    async def get_customer_details(self, customer_id: int, *, token: str | None = None) -> Payload:
        return await self._object("GET", f"/admin/customers/{customer_id}", token=token)

    async def get_customer_kyc_details(self, customer_id: int, *, token: str | None = None) -> Payload:
        return await self._object("GET", f"/admin/kyc/customer/{customer_id}", token=token)

    async def _pending_kyc(
        self,
        params: dict[str, Any] | None = None,
        *,
        token: str | None,
    ) -> list[dict[str, Any]] | Payload:
        path = "/admin/kyc/pending"
        payload = await self._request("GET", path, params=params, token=token)
        if isinstance(payload, dict) and "pendingKycRequests" in payload:
            payload = payload["pendingKycRequests"]
        if not isinstance(payload, (list, dict)):
            raise _bad_payload(path, "expected a list of pending documents")
        return payload

    async def get_pending_kyc_documents(self, page: int = 0, size: int = 10, *, token: str | None = None) -> Payload:
        pending = await self._pending_kyc({"page": page, "size": size}, token=token)
        if isinstance(pending, list):
            return paginate(pending, page, size)
        try:
            return as_page(pending, page, size)
        except TypeError as exc:
            raise _bad_payload("/admin/kyc/pending", str(exc)) from exc

    async def get_kyc_statistics(self, *, token: str | None = None) -> Payload:
        # No statistics endpoint exists; counts are derived from the
        # pending queue, so verified/rejected totals are unknown (0).
        pending = await self._pending_kyc(token=token)
        documents = pending if isinstance(pending, list) else pending.get("content", [])
        return {
            "totalDocuments": len(documents),
            "pendingDocuments": len(documents),
            "verifiedDocuments": 0,
            "rejectedDocuments": 0,
            "customersPendingReview": len({d.get("customerId") for d in documents}),
        }

    async def view_kyc_document(
        self,
        document_id: int,
        document_type: str = "aadhar",
        *,
        token: str | None = None,
    ) -> Payload:
        kind = "pan" if document_type.lower() == "pan" else "aadhar"
        return await self._file(f"/admin/kyc/download-{kind}/{document_id}", document_id, token=token)

    async def verify_kyc_document(
        self,
        document_id: int,
        status: str,
        notes: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._object(
            "POST",
            f"/admin/kyc/verify-document/{document_id}",
            json={"verificationStatus": status.upper(), "notes": notes},
            token=token,
        )

    async def update_kyc_status(
        self,
        customer_id: int,
        status: str,
        notes: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._object(
            "POST",
            f"/admin/kyc/update-status/{customer_id}",
            json={"kycStatus": status.upper(), "reason": notes},
            token=token,
        )

    async def get_admin_support_tickets(
        self,
        status: str | None = None,
        page: int = 0,
        size: int = 10,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._page(
            "/admin/support/tickets",
            page,
            size,
            token=token,
            params={"status": status, "page": page, "size": size},
        )
