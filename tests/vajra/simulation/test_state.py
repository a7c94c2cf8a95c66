"""Unit tests for state records and snapshots."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from vajra.simulation.random_source import ScriptedRandom
from vajra.simulation.state import (
    Coordinates,
    DroneAlert,
    LogEntry,
    Severity,
    SignalStatus,
    SystemMode,
    TacticalSnapshot,
    TacticalState,
    ViewMode,
    Vitals,
    clamp,
)
from vajra.simulation.squad import CALLSIGNS, generate_squad


pytestmark = pytest.mark.unit


def _make_state() -> TacticalState:
    return TacticalState(coordinates=Coordinates(lat=34.0, lng=-118.0, alt=100.0, heading=45.0))


class TestRecords:
    def test_vitals_range_enforced(self):
        with pytest.raises(ValidationError):
            Vitals(heart_rate=200.0, spo2=98.0, hrv_stress=35.0, hape_risk=12.0)

    def test_bearing_range_enforced(self):
        with pytest.raises(ValidationError):
            DroneAlert(id="d", type="x", distance=100, bearing=360, confidence=80, timestamp=0)

    def test_distance_must_be_positive(self):
        with pytest.raises(ValidationError):
            DroneAlert(id="d", type="x", distance=0, bearing=10, confidence=80, timestamp=0)

    def test_records_are_frozen(self):
        v = Vitals(heart_rate=72.0, spo2=98.0, hrv_stress=35.0, hape_risk=12.0)
        with pytest.raises(ValidationError):
            v.heart_rate = 100.0

    def test_clamp(self):
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0
        assert clamp(0.5, 0.0, 1.0) == 0.5


class TestDefaults:
    def test_seed_values(self):
        state = _make_state()
        assert state.view_mode == ViewMode.OPERATOR
        assert state.signal_status == SignalStatus.GPS
        assert state.system_mode == SystemMode.NORMAL
        assert state.is_jammed is False
        assert state.vitals.heart_rate == 72.0
        assert state.vitals.spo2 == 98.0
        assert state.dead_man_countdown is None

    def test_mode_values_match_wire_names(self):
        assert SystemMode.HIGH_STRESS.value == "high-stress"
        assert SystemMode("stealth") is SystemMode.STEALTH


class TestSnapshot:
    def test_snapshot_is_detached(self):
        state = _make_state()
        snap = TacticalSnapshot.from_state(state, now=1.0)
        state.is_jammed = True
        state.drone_alerts.append(
            DroneAlert(id="d", type="x", distance=100, bearing=10, confidence=80, timestamp=0)
        )
        assert snap.is_jammed is False
        assert snap.drone_alerts == ()

    def test_snapshot_is_frozen(self):
        snap = TacticalSnapshot.from_state(_make_state(), now=0.0)
        with pytest.raises(ValidationError):
            snap.is_jammed = True

    def test_dump_uses_enum_values(self):
        data = TacticalSnapshot.from_state(_make_state(), now=0.0).model_dump(mode="json")
        assert data["system_mode"] == "normal"
        assert data["signal_status"] == "GPS"
        assert data["dead_man_countdown"] is None

    def test_log_entries_passed_in(self):
        entry = LogEntry(id="log-1", message="m", timestamp=0.0, severity=Severity.INFO)
        snap = TacticalSnapshot.from_state(_make_state(), now=0.0, ai_log=[entry])
        assert snap.ai_log == (entry,)
        assert TacticalSnapshot.from_state(_make_state(), now=0.0).ai_log == ()

    def test_armed_flag(self):
        state = _make_state()
        state.dead_man_countdown = 12
        assert TacticalSnapshot.from_state(state, now=0.0).dead_man_armed is True


class TestSquad:
    def test_four_members_with_callsigns(self):
        origin = Coordinates(lat=34.0, lng=-118.0, alt=2847.0, heading=0.0)
        squad = generate_squad(ScriptedRandom(fallback=0.5), origin)
        assert [m.callsign for m in squad] == list(CALLSIGNS)
        assert [m.id for m in squad] == ["squad-0", "squad-1", "squad-2", "squad-3"]

    def test_member_values_from_draws(self):
        origin = Coordinates(lat=34.0, lng=-118.0, alt=2847.0, heading=0.0)
        rng = ScriptedRandom(fallback=0.5)
        squad = generate_squad(rng, origin)
        m = squad[0]
        assert m.vitals.heart_rate == pytest.approx(80.0)
        assert m.vitals.spo2 == pytest.approx(97.5)
        assert m.position.lat == pytest.approx(34.0)
        assert m.position.heading == pytest.approx(180.0)
        assert m.position.alt == 2847.0
        assert rng.draws == 28
