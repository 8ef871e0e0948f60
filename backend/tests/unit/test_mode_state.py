"""Tests for the gateway mode holder (core/mode.py)."""

from __future__ import annotations

from bankdash.core.mode import Mode, ModeState


class TestInitialMode:
    def test_starts_unknown(self):
        state = ModeState()
        info = state.snapshot()
        assert info.mode is Mode.LIVE_UNKNOWN
        assert info.backend_available is None
        assert info.last_checked_at is None
        assert info.label == "API"

    def test_forced_at_startup(self):
        state = ModeState(force_mock=True)
        assert state.mode is Mode.FORCED_MOCK
        assert state.snapshot().using_mock is True
        assert state.snapshot().label == "MOCK"


class TestTransitions:
    def test_probe_outcomes(self):
        state = ModeState()
        state.record_probe(True)
        assert state.mode is Mode.LIVE_AVAILABLE
        state.record_probe(False)
        assert state.mode is Mode.LIVE_UNAVAILABLE
        assert state.snapshot().last_checked_at is not None

    def test_forced_override_wins_over_probe(self):
        state = ModeState(force_mock=True)
        state.record_probe(True)
        info = state.snapshot()
        assert info.mode is Mode.FORCED_MOCK
        assert info.backend_available is True

    def test_mark_unavailable_under_override_keeps_forced(self):
        state = ModeState(force_mock=True)
        state.mark_unavailable("network failure")
        assert state.mode is Mode.FORCED_MOCK
        assert state.snapshot().backend_available is False

    def test_set_forced_is_idempotent(self, caplog):
        state = ModeState()
        with caplog.at_level("INFO", logger="bankdash.core.mode"):
            assert state.set_forced(True) is True
            assert state.set_forced(True) is False
        assert state.mode is Mode.FORCED_MOCK
        assert len([r for r in caplog.records if "forced-mock" in r.getMessage()]) == 1

    def test_lifting_override_returns_to_unknown(self):
        state = ModeState()
        state.record_probe(True)
        state.set_forced(True)
        state.set_forced(False)
        assert state.mode is Mode.LIVE_UNKNOWN

    def test_reset_ignored_while_forced(self):
        state = ModeState(force_mock=True)
        state.reset()
        assert state.mode is Mode.FORCED_MOCK


def test_mode_info_to_dict():
    state = ModeState()
    state.record_probe(False)
    data = state.snapshot().to_dict()
    assert data["mode"] == "live-unavailable"
    assert data["using_mock"] is True
    assert data["label"] == "MOCK"
    assert data["backend_available"] is False
    assert isinstance(data["last_checked_at"], str)
