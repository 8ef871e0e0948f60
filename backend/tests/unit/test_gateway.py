"""Tests for the resilient gateway (core/gateway.py).

The live adapter and health check are AsyncMocks so each test controls
exactly how "the network" behaves. The mock side is the real
MockBankingBackend with latency disabled.

Run with: pytest backend/tests/unit/test_gateway.py -v
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import anyio
import httpx
import pytest

from bankdash.core.errors import DomainError, HttpStatusError, NetworkError
from bankdash.core.gateway import ResilientGateway, build_gateway
from bankdash.core.mode import Mode, ModeState


@pytest.fixture
def live() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def health() -> AsyncMock:
    return AsyncMock()


def _gateway(mock_backend, live, health, *, mode: Mode = Mode.LIVE_UNKNOWN, timeout: float = 0.5):
    state = ModeState(force_mock=mode is Mode.FORCED_MOCK)
    if mode is Mode.LIVE_AVAILABLE:
        state.record_probe(True)
    elif mode is Mode.LIVE_UNAVAILABLE:
        state.record_probe(False)
    return ResilientGateway(mock_backend, live, health, state=state, probe_timeout=timeout)


# ─── forced-mock ──────────────────────────────────────────────────────────────


class TestForcedMock:
    @pytest.mark.anyio
    async def test_every_call_served_by_mock_without_probe(
        self, mock_backend, live, health, customer_token, admin_token
    ):
        gateway = _gateway(mock_backend, live, health, mode=Mode.FORCED_MOCK)

        accounts = await gateway.get_accounts(token=customer_token)
        await gateway.get_kyc_status(token=customer_token)
        await gateway.get_all_customers(search="doe", token=admin_token)

        assert accounts["totalElements"] == 2
        health.ping.assert_not_awaited()
        assert live.mock_calls == []
        assert gateway.get_mode_info().mode is Mode.FORCED_MOCK

    @pytest.mark.anyio
    async def test_scenario_b_mock_login(self, mock_backend, live, health):
        gateway = _gateway(mock_backend, live, health, mode=Mode.FORCED_MOCK)

        result = await gateway.customer_login("demo@wtfbank.com", "demo123")
        assert result["token"]
        assert result["kycStatus"] == "VERIFIED"

        with pytest.raises(DomainError) as exc_info:
            await gateway.customer_login("demo@wtfbank.com", "not-the-password")
        assert exc_info.value.status == 401
        assert gateway.get_mode_info().mode is Mode.FORCED_MOCK

    @pytest.mark.anyio
    async def test_set_forced_mock_twice_is_a_no_op(self, mock_backend, live, health, caplog):
        gateway = _gateway(mock_backend, live, health)

        with caplog.at_level("INFO", logger="bankdash.core.mode"):
            first = gateway.set_forced_mock(True)
            second = gateway.set_forced_mock(True)

        assert first.mode is second.mode is Mode.FORCED_MOCK
        assert len([r for r in caplog.records if r.name == "bankdash.core.mode"]) == 1
        health.ping.assert_not_awaited()


# ─── live-unknown ─────────────────────────────────────────────────────────────


class TestProbeOnFirstCall:
    @pytest.mark.anyio
    async def test_probe_success_then_live(self, mock_backend, live, health):
        live.get_accounts.return_value = {"content": [], "totalElements": 0}
        gateway = _gateway(mock_backend, live, health)

        result = await gateway.get_accounts(page=1, size=5)
        await gateway.get_accounts()

        assert result == {"content": [], "totalElements": 0}
        health.ping.assert_awaited_once()
        live.get_accounts.assert_any_await(1, 5, token=None)
        info = gateway.get_mode_info()
        assert info.mode is Mode.LIVE_AVAILABLE
        assert info.backend_available is True

    @pytest.mark.anyio
    async def test_scenario_a_probe_timeout_serves_mock(self, mock_backend, live, health, customer_token):
        async def hang() -> None:
            await asyncio.sleep(10)

        health.ping.side_effect = hang
        gateway = _gateway(mock_backend, live, health, timeout=0.05)

        page = await gateway.get_accounts(token=customer_token)

        assert page["totalElements"] == 2
        assert [a["accountId"] for a in page["content"]] == [2001, 2002]
        live.get_accounts.assert_not_awaited()
        assert gateway.get_mode_info().mode is Mode.LIVE_UNAVAILABLE

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "failure",
        [NetworkError("refused"), HttpStatusError("Service Unavailable", 503), RuntimeError("bug in probe")],
    )
    async def test_any_probe_failure_means_unavailable(self, mock_backend, live, health, customer_token, failure):
        health.ping.side_effect = failure
        gateway = _gateway(mock_backend, live, health)

        statement = await gateway.get_mini_statement(2001, token=customer_token)

        assert statement["accountId"] == 2001
        assert gateway.get_mode_info().mode is Mode.LIVE_UNAVAILABLE

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("first_ok", "second_ok"),
        [(True, False), (False, True)],
        ids=["slow-success-fast-failure", "slow-failure-fast-success"],
    )
    async def test_concurrent_first_calls_last_health_check_wins(
        self, mock_backend, live, health, customer_token, first_ok, second_ok
    ):
        live_page = {"content": [{"accountId": 7001}], "totalElements": 1}
        live.get_accounts.return_value = live_page
        first_started = anyio.Event()
        release_first = anyio.Event()
        pings = 0

        async def ping() -> None:
            nonlocal pings
            pings += 1
            if pings == 1:
                first_started.set()
                await release_first.wait()
                healthy = first_ok
            else:
                healthy = second_ok
            if not healthy:
                raise NetworkError("refused")

        health.ping.side_effect = ping
        gateway = _gateway(mock_backend, live, health, timeout=5)
        results: dict[str, dict] = {}
        second_done = anyio.Event()

        async def first() -> None:
            results["first"] = await gateway.get_accounts(token=customer_token)

        async def second() -> None:
            results["second"] = await gateway.get_accounts(token=customer_token)
            second_done.set()

        async with anyio.create_task_group() as tg:
            tg.start_soon(first)
            await first_started.wait()
            tg.start_soon(second)
            await second_done.wait()
            assert gateway.get_mode_info().backend_available is second_ok
            release_first.set()

        assert pings == 2
        # Each call is routed by its own health check.
        for name, healthy in (("first", first_ok), ("second", second_ok)):
            if healthy:
                assert results[name] == live_page
            else:
                assert {a["accountId"] for a in results[name]["content"]} == {2001, 2002}
        # The probe that finished last decides the mode.
        info = gateway.get_mode_info()
        assert info.backend_available is first_ok
        assert info.mode is (Mode.LIVE_AVAILABLE if first_ok else Mode.LIVE_UNAVAILABLE)

    @pytest.mark.anyio
    async def test_health_defaults_to_live_adapter(self, mock_backend, live):
        gateway = ResilientGateway(mock_backend, live)
        await gateway.refresh_backend_status()
        live.ping.assert_awaited_once()


# ─── live-available ───────────────────────────────────────────────────────────


class TestLiveFailures:
    @pytest.mark.anyio
    async def test_scenario_c_network_error_falls_back_once(self, mock_backend, live, health, customer_token):
        live.get_accounts.side_effect = NetworkError("Network error - cannot connect to server")
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)

        page = await gateway.get_accounts(token=customer_token)

        assert page["totalElements"] == 2
        live.get_accounts.assert_awaited_once_with(0, 10, token=customer_token)
        info = gateway.get_mode_info()
        assert info.mode is Mode.LIVE_UNAVAILABLE
        assert info.backend_available is False

        # Later calls skip live entirely.
        await gateway.get_accounts(token=customer_token)
        live.get_accounts.assert_awaited_once()
        health.ping.assert_not_awaited()

    @pytest.mark.anyio
    async def test_scenario_d_status_error_propagates(self, mock_backend, live, health):
        forbidden = HttpStatusError("Access denied", 403)
        live.get_account.side_effect = forbidden
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)

        with pytest.raises(HttpStatusError) as exc_info:
            await gateway.get_account(2001)

        assert exc_info.value is forbidden
        assert gateway.get_mode_info().mode is Mode.LIVE_AVAILABLE

    @pytest.mark.anyio
    async def test_domain_error_propagates(self, mock_backend, live, health):
        live.create_transaction.side_effect = DomainError("Insufficient funds", 400)
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)

        with pytest.raises(DomainError):
            await gateway.create_transaction({"accountId": 2001, "transactionType": "DEBIT", "amount": 1})
        assert gateway.get_mode_info().mode is Mode.LIVE_AVAILABLE

    @pytest.mark.anyio
    async def test_unclassified_exception_is_not_masked(self, mock_backend, live, health):
        live.get_kyc_status.side_effect = KeyError("token")
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)

        with pytest.raises(KeyError):
            await gateway.get_kyc_status()
        assert gateway.get_mode_info().mode is Mode.LIVE_AVAILABLE

    @pytest.mark.anyio
    async def test_failing_fallback_is_surfaced(self, mock_backend, live, health, customer_token):
        live.get_account.side_effect = NetworkError("down")
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)

        with pytest.raises(DomainError) as exc_info:
            await gateway.get_account(9999, token=customer_token)
        assert exc_info.value.status == 404
        assert gateway.get_mode_info().mode is Mode.LIVE_UNAVAILABLE

    @pytest.mark.anyio
    async def test_arguments_reach_the_fallback_unchanged(self, mock_backend, live, health, customer_token):
        live.get_transaction_history.side_effect = NetworkError("down")
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)

        page = await gateway.get_transaction_history(2001, 0, 3, transaction_type="DEBIT", token=customer_token)

        live.get_transaction_history.assert_awaited_once_with(
            2001, 0, 3, transaction_type="DEBIT", from_date=None, to_date=None, token=customer_token
        )
        assert [t["transactionId"] for t in page["content"]] == [3007, 3004, 3002]


# ─── live-unavailable ─────────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_unavailable_goes_straight_to_mock(mock_backend, live, health, customer_token):
    gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_UNAVAILABLE)

    tickets = await gateway.get_customer_tickets(token=customer_token)

    assert tickets["totalElements"] == 2
    assert live.mock_calls == []
    health.ping.assert_not_awaited()


# ─── Control operations ───────────────────────────────────────────────────────


class TestRefresh:
    @pytest.mark.anyio
    async def test_refresh_always_probes(self, mock_backend, live, health):
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)

        assert await gateway.refresh_backend_status() is True
        assert await gateway.refresh_backend_status() is True
        assert health.ping.await_count == 2

    @pytest.mark.anyio
    async def test_refresh_recovers_from_unavailable(self, mock_backend, live, health):
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_UNAVAILABLE)

        assert await gateway.refresh_backend_status() is True
        assert gateway.get_mode_info().mode is Mode.LIVE_AVAILABLE

    @pytest.mark.anyio
    async def test_refresh_detects_outage(self, mock_backend, live, health):
        health.ping.side_effect = NetworkError("down")
        gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)

        assert await gateway.refresh_backend_status() is False
        assert gateway.get_mode_info().mode is Mode.LIVE_UNAVAILABLE

    @pytest.mark.anyio
    async def test_refresh_under_override_keeps_forced_mode(self, mock_backend, live, health):
        gateway = _gateway(mock_backend, live, health, mode=Mode.FORCED_MOCK)

        assert await gateway.refresh_backend_status() is True

        info = gateway.get_mode_info()
        assert info.mode is Mode.FORCED_MOCK
        assert info.backend_available is True
        health.ping.assert_awaited_once()


class TestOverrideToggle:
    @pytest.mark.anyio
    async def test_lifting_override_reprobes_on_next_call(self, mock_backend, live, health):
        live.get_kyc_status.return_value = {"kycStatus": "VERIFIED"}
        gateway = _gateway(mock_backend, live, health, mode=Mode.FORCED_MOCK)

        info = gateway.set_forced_mock(False)
        assert info.mode is Mode.LIVE_UNKNOWN

        assert await gateway.get_kyc_status() == {"kycStatus": "VERIFIED"}
        health.ping.assert_awaited_once()

    @pytest.mark.anyio
    async def test_override_set_during_probe_is_not_overwritten(self, mock_backend, live, health):
        release = asyncio.Event()

        async def slow_ping() -> None:
            await release.wait()

        health.ping.side_effect = slow_ping
        live.get_accounts.return_value = {"content": []}
        gateway = _gateway(mock_backend, live, health, timeout=5)

        task = asyncio.create_task(gateway.get_accounts())
        await asyncio.sleep(0)
        gateway.set_forced_mock(True)
        release.set()
        await task

        info = gateway.get_mode_info()
        assert info.mode is Mode.FORCED_MOCK
        assert info.backend_available is True


@pytest.mark.anyio
async def test_get_mode_info_is_side_effect_free(mock_backend, live, health):
    gateway = _gateway(mock_backend, live, health)

    first = gateway.get_mode_info()
    second = gateway.get_mode_info()

    assert first == second
    assert first.mode is Mode.LIVE_UNKNOWN
    health.ping.assert_not_awaited()


@pytest.mark.anyio
async def test_logout_routes_like_any_operation(mock_backend, live, health):
    gateway = _gateway(mock_backend, live, health, mode=Mode.LIVE_AVAILABLE)
    await gateway.logout(token="jwt-of-this-caller")
    live.logout.assert_awaited_once_with(token="jwt-of-this-caller")


# ─── build_gateway ────────────────────────────────────────────────────────────


class TestBuildGateway:
    @pytest.mark.anyio
    async def test_end_to_end_fallback_over_http(self, settings, no_sleep):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        gateway = build_gateway(settings, sleep=no_sleep, transport=httpx.MockTransport(refuse))
        try:
            result = await gateway.customer_login("demo@wtfbank.com", "demo123")
            assert result["kycStatus"] == "VERIFIED"
            assert gateway.get_mode_info().mode is Mode.LIVE_UNAVAILABLE
        finally:
            await gateway.aclose()

    @pytest.mark.anyio
    async def test_live_backend_used_when_healthy(self, settings, no_sleep):
        def backend(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/actuator/health":
                return httpx.Response(200, json={"status": "UP"})
            return httpx.Response(200, json=[{"accountId": 7001}])

        gateway = build_gateway(settings, sleep=no_sleep, transport=httpx.MockTransport(backend))
        try:
            page = await gateway.get_accounts()
            assert [a["accountId"] for a in page["content"]] == [7001]
            assert gateway.get_mode_info().label == "API"
        finally:
            await gateway.aclose()

    def test_force_mock_setting_sets_start_mode(self, settings, no_sleep):
        forced = settings.model_copy(update={"force_mock_mode": True})
        gateway = build_gateway(forced, sleep=no_sleep)
        assert gateway.get_mode_info().mode is Mode.FORCED_MOCK
