"""Backend reachability checks for the terminal and CI.

Builds a throwaway gateway from settings, probes the live banking backend
once and reports where dashboard data would come from right now.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from bankdash.config import Settings, get_settings
from bankdash.core.environment import validate_environment
from bankdash.core.gateway import ResilientGateway, build_gateway


@dataclass(frozen=True)
class CheckResult:
    """A single check outcome."""

    name: str
    ok: bool
    detail: str


@dataclass(frozen=True)
class StatusReport:
    """Aggregated report printed by scripts/backend_status.py."""

    ok: bool
    backend: str
    timestamp_utc: str
    mode: dict[str, Any] | None
    checks: list[CheckResult]

    def as_dict(self) -> dict:
        return {
            "ok": self.ok,
            "backend": self.backend,
            "timestamp_utc": self.timestamp_utc,
            "mode": self.mode,
            "checks": [
                {"name": item.name, "ok": item.ok, "detail": item.detail}
                for item in self.checks
            ],
        }


def _pass(name: str, detail: str) -> CheckResult:
    return CheckResult(name=name, ok=True, detail=detail)


def _fail(name: str, detail: str) -> CheckResult:
    return CheckResult(name=name, ok=False, detail=detail)


def check_environment() -> CheckResult:
    settings = get_settings()
    try:
        validate_environment()
    except Exception as exc:
        return _fail("environment", f"validation failed: {exc}")
    return _pass("environment", f"validated (env={settings.app_env})")


async def check_backend(gateway: ResilientGateway) -> CheckResult:
    """Probe the live backend through the gateway's own health check."""
    reachable = await gateway.refresh_backend_status()
    info = gateway.get_mode_info()
    if reachable:
        return _pass("backend", f"reachable (mode={info.mode.value}, source={info.label})")
    return _fail("backend", f"unreachable (mode={info.mode.value}, source={info.label})")


async def run_backend_status(
    *,
    force_mock: bool = False,
    settings: Settings | None = None,
    transport: Any = None,
) -> StatusReport:
    """Run the environment and backend checks and return one report.

    ``force_mock`` starts the gateway pinned to mock data. The probe still
    runs, so the report shows whether live would have been reachable.
    """
    settings = settings or get_settings()
    checks = [check_environment()]
    mode: dict[str, Any] | None = None

    if checks[0].ok:
        gateway = build_gateway(settings, transport=transport)
        try:
            if force_mock:
                gateway.set_forced_mock(True)
            checks.append(await check_backend(gateway))
            mode = gateway.get_mode_info().to_dict()
        finally:
            await gateway.aclose()

    return StatusReport(
        ok=all(item.ok for item in checks),
        backend=settings.normalized_api_base_url,
        timestamp_utc=datetime.now(UTC).isoformat(),
        mode=mode,
        checks=checks,
    )
