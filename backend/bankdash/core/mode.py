"""mode.py — Routing mode of the resilient gateway.

The gateway is always in exactly one of four modes:

    forced-mock       → Operator (or FORCE_MOCK_MODE) pinned every call to mock data.
    live-unknown      → Backend reachability not known yet; next call probes.
    live-available    → Last probe succeeded; calls go to the live backend.
    live-unavailable  → Probe or a live call failed on connectivity; calls go to mock.

``ModeState`` holds the mode for one gateway instance. It is created by the
composition root (``main.py`` lifespan or ``build_gateway()``) and passed in,
so tests can run any number of gateways side by side.

Called by: gateway.py, api/routes/backend_status.py, api/middleware.py
Depends on: Nothing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Routing state of the gateway."""

    FORCED_MOCK = "forced-mock"
    LIVE_UNKNOWN = "live-unknown"
    LIVE_AVAILABLE = "live-available"
    LIVE_UNAVAILABLE = "live-unavailable"

    @property
    def uses_mock(self) -> bool:
        """True when calls in this mode are served from mock data."""
        return self in (Mode.FORCED_MOCK, Mode.LIVE_UNAVAILABLE)


@dataclass(frozen=True)
class ModeInfo:
    """Immutable snapshot of the gateway's routing state.

    Returned by ``ResilientGateway.get_mode_info()`` and rendered by the
    status widget. Reading it has no side effects.
    """

    mode: Mode
    forced_mock: bool
    backend_available: bool | None  # None until the first probe finishes
    last_checked_at: datetime | None

    @property
    def using_mock(self) -> bool:
        return self.mode.uses_mock

    @property
    def label(self) -> str:
        """Short badge text: MOCK whenever data may be sample data."""
        return "MOCK" if self.using_mock else "API"

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "forced_mock": self.forced_mock,
            "backend_available": self.backend_available,
            "using_mock": self.using_mock,
            "label": self.label,
            "last_checked_at": self.last_checked_at.isoformat() if self.last_checked_at else None,
        }


class ModeState:
    """Mutable mode holder for a single gateway.

    No locking: the gateway runs on one asyncio event loop and every
    transition below completes without awaiting. Transitions are idempotent,
    so redundant probes that reach the same conclusion are harmless.

    A forced override always wins. Probe outcomes and network failures that
    arrive while it is set only update ``backend_available``.
    """

    def __init__(self, *, force_mock: bool = False) -> None:
        self._forced = force_mock
        self._mode = Mode.FORCED_MOCK if force_mock else Mode.LIVE_UNKNOWN
        self._backend_available: bool | None = None
        self._last_checked_at: datetime | None = None

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def forced(self) -> bool:
        return self._forced

    def snapshot(self) -> ModeInfo:
        return ModeInfo(
            mode=self._mode,
            forced_mock=self._forced,
            backend_available=self._backend_available,
            last_checked_at=self._last_checked_at,
        )

    def _transition(self, new_mode: Mode, reason: str) -> None:
        if new_mode is self._mode:
            return
        logger.info("Gateway mode %s → %s (%s)", self._mode.value, new_mode.value, reason)
        self._mode = new_mode

    # ── Operator controls ─────────────────────────────────────────────────

    def set_forced(self, enabled: bool) -> bool:
        """Apply the operator override. Returns False when nothing changed."""
        if enabled == self._forced:
            return False
        self._forced = enabled
        if enabled:
            self._transition(Mode.FORCED_MOCK, "mock forced by operator")
        else:
            self._transition(Mode.LIVE_UNKNOWN, "mock override lifted")
        return True

    def reset(self) -> None:
        """Forget live reachability so the next call probes again."""
        if not self._forced:
            self._transition(Mode.LIVE_UNKNOWN, "backend status refresh")

    # ── Probe / runtime outcomes ──────────────────────────────────────────

    def record_probe(self, available: bool) -> None:
        self._backend_available = available
        self._last_checked_at = datetime.now(UTC)
        if self._forced:
            return
        if available:
            self._transition(Mode.LIVE_AVAILABLE, "health probe succeeded")
        else:
            self._transition(Mode.LIVE_UNAVAILABLE, "health probe failed")

    def mark_unavailable(self, reason: str) -> None:
        """Downgrade after a live call failed on connectivity."""
        self._backend_available = False
        self._last_checked_at = datetime.now(UTC)
        if not self._forced:
            self._transition(Mode.LIVE_UNAVAILABLE, reason)
