"""Resilient gateway — routes every dashboard call to live or mock data.

The gateway is the only BankingBackend the HTTP routes see. Each call
captures the current Mode once and routes on it:

    forced-mock       → mock adapter, no probe
    live-unknown      → health probe first, then live or mock
    live-available    → live adapter; a network failure falls back to mock once
    live-unavailable  → mock adapter

HTTP-status and domain errors from the live backend are real answers and
are re-raised untouched. Only connectivity failures are recovered.

Usage:
    gateway = build_gateway(get_settings())
    page = await gateway.get_accounts(page=0, size=10)
    info = gateway.get_mode_info()
    await gateway.aclose()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from bankdash.config import Settings, get_settings
from bankdash.core.errors import is_fallback_eligible
from bankdash.core.mode import Mode, ModeInfo, ModeState
from bankdash.core.protocols import BankingBackend, HealthCheck, Payload, Sleep

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 3.0


class ResilientGateway:
    """BankingBackend that picks its data source per call.

    Args:
        mock: Adapter serving sample data. Must never raise network errors.
        live: Adapter talking to the real backend.
        health: Liveness check used by the probe. Defaults to ``live``.
        state: Mode holder. A fresh ``ModeState()`` when omitted.
        probe_timeout: Upper bound in seconds for one health probe.
    """

    def __init__(
        self,
        mock: BankingBackend,
        live: BankingBackend,
        health: HealthCheck | None = None,
        *,
        state: ModeState | None = None,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        self._mock = mock
        self._live = live
        self._health = health if health is not None else live
        self._state = state or ModeState()
        self._probe_timeout = probe_timeout

    @property
    def state(self) -> ModeState:
        return self._state

    # ─── Control ──────────────────────────────────────────────────────────────

    def get_mode_info(self) -> ModeInfo:
        return self._state.snapshot()

    def set_forced_mock(self, enabled: bool) -> ModeInfo:
        """Pin every call to mock data, or lift the pin.

        Lifting it returns to live-unknown, so the next call probes again.
        Repeating the current value is a no-op.
        """
        self._state.set_forced(enabled)
        return self._state.snapshot()

    async def refresh_backend_status(self) -> bool:
        """Probe the backend now and fold the outcome into the mode.

        Under a forced override the probe still runs (the status widget
        shows whether live would work) but the mode stays forced-mock.
        """
        self._state.reset()
        return await self._probe()

    async def aclose(self) -> None:
        close = getattr(self._live, "aclose", None)
        if close is not None:
            await close()

    # ─── Routing ──────────────────────────────────────────────────────────────

    async def _probe(self) -> bool:
        try:
            await asyncio.wait_for(self._health.ping(), timeout=self._probe_timeout)
        except asyncio.TimeoutError:
            logger.warning("Backend health probe timed out after %.1fs", self._probe_timeout)
            available = False
        except Exception as exc:
            logger.warning("Backend health probe failed: %r", exc)
            available = False
        else:
            available = True
        self._state.record_probe(available)
        return available

    async def _call(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        mode = self._state.mode

        if mode is Mode.LIVE_UNKNOWN:
            mode = Mode.LIVE_AVAILABLE if await self._probe() else Mode.LIVE_UNAVAILABLE

        if mode.uses_mock:
            logger.debug("%s → mock (%s)", operation, mode.value)
            return await getattr(self._mock, operation)(*args, **kwargs)

        logger.debug("%s → live", operation)
        try:
            return await getattr(self._live, operation)(*args, **kwargs)
        except Exception as exc:
            if not is_fallback_eligible(exc):
                raise
            logger.warning("%s failed on the network (%s), serving mock data", operation, exc)
            self._state.mark_unavailable(f"{operation} network failure")
            return await getattr(self._mock, operation)(*args, **kwargs)

    # ─── Auth ─────────────────────────────────────────────────────────────────

    async def customer_login(self, email: str, password: str) -> Payload:
        return await self._call("customer_login", email, password)

    async def admin_login(self, username: str, password: str) -> Payload:
        return await self._call("admin_login", username, password)

    async def logout(self, *, token: str | None = None) -> None:
        await self._call("logout", token=token)

    # ─── Customer Profile ─────────────────────────────────────────────────────

    async def get_current_customer(self, *, token: str | None = None) -> Payload:
        return await self._call("get_current_customer", token=token)

    async def update_customer_profile(self, changes: Payload, *, token: str | None = None) -> Payload:
        return await self._call("update_customer_profile", changes, token=token)

    # ─── Accounts ─────────────────────────────────────────────────────────────

    async def get_accounts(self, page: int = 0, size: int = 10, *, token: str | None = None) -> Payload:
        return await self._call("get_accounts", page, size, token=token)

    async def get_account(self, account_id: int, *, token: str | None = None) -> Payload:
        return await self._call("get_account", account_id, token=token)

    async def get_account_balance(self, account_id: int, *, token: str | None = None) -> Payload:
        return await self._call("get_account_balance", account_id, token=token)

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
        return await self._call(
            "get_transaction_history",
            account_id,
            page,
            size,
            transaction_type=transaction_type,
            from_date=from_date,
            to_date=to_date,
            token=token,
        )

    async def get_mini_statement(self, account_id: int, *, token: str | None = None) -> Payload:
        return await self._call("get_mini_statement", account_id, token=token)

    async def create_transaction(self, data: Payload, *, token: str | None = None) -> Payload:
        return await self._call("create_transaction", data, token=token)

    # ─── KYC ──────────────────────────────────────────────────────────────────

    async def get_kyc_status(self, *, token: str | None = None) -> Payload:
        return await self._call("get_kyc_status", token=token)

    async def get_my_kyc_documents(self, *, token: str | None = None) -> Payload:
        return await self._call("get_my_kyc_documents", token=token)

    async def upload_kyc_document(
        self,
        document_type: str,
        filename: str,
        content: bytes,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._call("upload_kyc_document", document_type, filename, content, token=token)

    async def download_kyc_document(self, document_id: int, *, token: str | None = None) -> Payload:
        return await self._call("download_kyc_document", document_id, token=token)

    # ─── Support ──────────────────────────────────────────────────────────────

    async def create_support_ticket(self, data: Payload, *, token: str | None = None) -> Payload:
        return await self._call("create_support_ticket", data, token=token)

    async def get_customer_tickets(
        self,
        status: str | None = None,
        page: int = 0,
        size: int = 10,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._call("get_customer_tickets", status, page, size, token=token)

    async def get_ticket_details(self, ticket_id: int, *, token: str | None = None) -> Payload:
        return await self._call("get_ticket_details", ticket_id, token=token)

    async def add_ticket_message(self, ticket_id: int, content: str, *, token: str | None = None) -> Payload:
        return await self._call("add_ticket_message", ticket_id, content, token=token)

    # ─── Admin ────────────────────────────────────────────────────────────────

    async def get_all_customers(
        self,
        page: int = 0,
        size: int = 10,
        search: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._call("get_all_customers", page, size, search, token=token)

    async def get_customer_details(self, customer_id: int, *, token: str | None = None) -> Payload:
        return await self._call("get_customer_details", customer_id, token=token)

    async def get_customer_kyc_details(self, customer_id: int, *, token: str | None = None) -> Payload:
        return await self._call("get_customer_kyc_details", customer_id, token=token)

    async def get_pending_kyc_documents(self, page: int = 0, size: int = 10, *, token: str | None = None) -> Payload:
        return await self._call("get_pending_kyc_documents", page, size, token=token)

    async def get_kyc_statistics(self, *, token: str | None = None) -> Payload:
        return await self._call("get_kyc_statistics", token=token)

    async def view_kyc_document(
        self,
        document_id: int,
        document_type: str = "aadhar",
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._call("view_kyc_document", document_id, document_type, token=token)

    async def verify_kyc_document(
        self,
        document_id: int,
        status: str,
        notes: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._call("verify_kyc_document", document_id, status, notes, token=token)

    async def update_kyc_status(
        self,
        customer_id: int,
        status: str,
        notes: str | None = None,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._call("update_kyc_status", customer_id, status, notes, token=token)

    async def get_admin_support_tickets(
        self,
        status: str | None = None,
        page: int = 0,
        size: int = 10,
        *,
        token: str | None = None,
    ) -> Payload:
        return await self._call("get_admin_support_tickets", status, page, size, token=token)


# ─── Composition ───────────────────────────────────────────────────────────────


def build_gateway(
    settings: Settings | None = None,
    *,
    sleep: Sleep = asyncio.sleep,
    transport: Any = None,
) -> ResilientGateway:
    """Wire both adapters and a fresh ModeState from settings.

    Called by the app lifespan and the backend_status CLI. Tests pass an
    ``httpx.MockTransport`` and a no-op ``sleep``.
    """
    from bankdash.core.adapters.live_backend import LiveBankingBackend
    from bankdash.core.adapters.mock_backend import MockBankingBackend

    settings = settings or get_settings()
    live = LiveBankingBackend(settings, transport=transport)
    mock = MockBankingBackend(settings, sleep=sleep)
    state = ModeState(force_mock=settings.force_mock_mode)
    logger.info(
        "Gateway built: backend=%s start_mode=%s",
        settings.normalized_api_base_url,
        state.mode.value,
    )
    return ResilientGateway(
        mock,
        live,
        state=state,
        probe_timeout=settings.health_probe_timeout,
    )
