"""Unit tests for DeadManSwitch — countdown, cancellation, trigger.

Tests cover:
  - Arming sets the countdown to 30 and logs
  - One decrement per second via self-rescheduling one-shots
  - Cancel stops the countdown for good, including stale in-flight ticks
  - Reaching zero triggers exactly once and disarms
  - Double-arm is rejected
"""

from __future__ import annotations

import pytest

from vajra.simulation.ai_log import AILog
from vajra.simulation.clock import Scheduler
from vajra.simulation.deadman import (
    CANCEL_MESSAGE,
    DEADMAN_TASK,
    WIPE_MESSAGE,
    DeadManState,
    DeadManSwitch,
)
from vajra.simulation.state import Coordinates, Severity, TacticalState


pytestmark = pytest.mark.unit


def _make_switch(scheduler: Scheduler) -> tuple[DeadManSwitch, AILog]:
    log = AILog(lambda: scheduler.now)
    return DeadManSwitch(scheduler, log), log


def _make_state() -> TacticalState:
    return TacticalState(coordinates=Coordinates(lat=0.0, lng=0.0, alt=0.0, heading=0.0))


class TestArm:
    def test_arm_sets_thirty(self, scheduler):
        switch, log = _make_switch(scheduler)
        state = _make_state()
        assert switch.arm(state) is True
        assert state.dead_man_countdown == 30
        assert switch.state == DeadManState.ARMED
        assert log.entries[0].severity == Severity.CRITICAL
        assert "ARMED" in log.entries[0].message

    def test_double_arm_rejected(self, scheduler):
        switch, log = _make_switch(scheduler)
        state = _make_state()
        switch.arm(state)
        scheduler.advance(5.0)
        assert switch.arm(state) is False
        assert state.dead_man_countdown == 25
        assert len(log) == 1

    def test_one_decrement_per_second(self, scheduler):
        switch, _ = _make_switch(scheduler)
        state = _make_state()
        switch.arm(state)
        for expected in (29, 28, 27):
            scheduler.advance(1.0)
            assert state.dead_man_countdown == expected
        assert scheduler.task_names == [DEADMAN_TASK]


class TestCancel:
    def test_cancel_at_17_stops_countdown(self, scheduler):
        switch, log = _make_switch(scheduler)
        state = _make_state()
        switch.arm(state)
        scheduler.advance(13.0)
        assert state.dead_man_countdown == 17
        assert switch.cancel(state) is True
        assert state.dead_man_countdown is None
        assert log.entries[0].message == CANCEL_MESSAGE
        assert log.entries[0].severity == Severity.INFO
        scheduler.advance(60.0)
        assert state.dead_man_countdown is None
        assert log.count(WIPE_MESSAGE) == 0
        assert scheduler.task_names == []

    def test_stale_tick_after_cancel_is_ignored(self, scheduler):
        switch, log = _make_switch(scheduler)
        state = _make_state()
        switch.arm(state)
        scheduler.advance(29.0)
        in_flight = scheduler._tasks[DEADMAN_TASK].callback
        switch.cancel(state)
        in_flight()  # the tick that was already on its way
        assert state.dead_man_countdown is None
        assert log.count(WIPE_MESSAGE) == 0

    def test_stale_tick_does_not_touch_new_session(self, scheduler):
        switch, _ = _make_switch(scheduler)
        state = _make_state()
        switch.arm(state)
        scheduler.advance(3.0)
        stale = scheduler._tasks[DEADMAN_TASK].callback
        switch.cancel(state)
        switch.arm(state)
        stale()
        assert state.dead_man_countdown == 30

    def test_cancel_when_disarmed_is_noop(self, scheduler):
        switch, log = _make_switch(scheduler)
        assert switch.cancel(_make_state()) is False
        assert len(log) == 0


class TestTrigger:
    def test_restart_and_trigger_once(self, scheduler):
        switch, log = _make_switch(scheduler)
        state = _make_state()
        switch.arm(state)
        scheduler.advance(13.0)
        switch.cancel(state)
        scheduler.advance(10.0)

        wipes = []
        switch.on_wipe(lambda: wipes.append(scheduler.now))
        switch.arm(state)
        armed_at = scheduler.now
        scheduler.advance(29.0)
        assert state.dead_man_countdown == 1
        scheduler.advance(1.0)
        assert log.count(WIPE_MESSAGE) == 1
        assert wipes == [armed_at + 30.0]
        assert state.dead_man_countdown is None
        assert switch.state == DeadManState.DISARMED
        scheduler.advance(60.0)
        assert log.count(WIPE_MESSAGE) == 1
        assert switch.trigger_count == 1

    def test_rearm_after_trigger(self, scheduler):
        switch, _ = _make_switch(scheduler)
        state = _make_state()
        switch.arm(state)
        scheduler.advance(30.0)
        assert switch.arm(state) is True
        assert state.dead_man_countdown == 30

    def test_failing_wipe_handler_does_not_block_reset(self, scheduler):
        switch, log = _make_switch(scheduler)
        state = _make_state()

        def broken():
            raise OSError("disk unavailable")

        switch.on_wipe(broken)
        switch.arm(state)
        scheduler.advance(30.0)
        assert log.count(WIPE_MESSAGE) == 1
        assert state.dead_man_countdown is None

    def test_reset_is_silent(self, scheduler):
        switch, log = _make_switch(scheduler)
        state = _make_state()
        switch.arm(state)
        switch.reset(state)
        scheduler.advance(40.0)
        assert len(log) == 1
        assert state.dead_man_countdown is None
