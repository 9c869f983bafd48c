"""Tests for animation.py: lifecycle, delay-gated stepping, jumps, presets."""

import math

import pytest

from animation import (
    AnimationController, AnimationState, DEFAULT_TTN, RenderFrame,
)
from geometry import InvalidInputError, generate_chords, generate_points
from patterns import PRESETS


def _make(**kwargs):
    """Controller with a frozen clock so tests pass explicit times."""
    kwargs.setdefault("clock", lambda: 0.0)
    return AnimationController(**kwargs)


class TestInitialState:

    def test_starts_stopped(self):
        c = _make()
        assert c.state is AnimationState.STOPPED
        assert not c.is_running

    def test_defaults(self):
        c = _make()
        assert c.ttn == DEFAULT_TTN
        assert c.point_count == 360
        assert len(c.points) == 360

    @pytest.mark.parametrize("kwargs", [
        {"point_count": 0},
        {"point_count": -5},
        {"radius": 0.0},
        {"step_size": -0.1},
        {"delay": -1.0},
        {"ttn": math.nan},
    ])
    def test_invalid_construction(self, kwargs):
        with pytest.raises(InvalidInputError):
            _make(**kwargs)


class TestLifecycle:
    """Test the STOPPED / RUNNING / PAUSED transitions."""

    def test_start(self):
        c = _make()
        c.start(now=0.0)
        assert c.state is AnimationState.RUNNING

    def test_pause_from_running(self):
        c = _make()
        c.start(now=0.0)
        c.pause()
        assert c.state is AnimationState.PAUSED

    def test_pause_when_stopped_is_noop(self):
        c = _make()
        c.pause()
        assert c.state is AnimationState.STOPPED

    def test_resume_from_paused(self):
        c = _make()
        c.start(now=0.0)
        c.pause()
        c.start(now=5.0)
        assert c.state is AnimationState.RUNNING

    @pytest.mark.parametrize("setup", ["stopped", "running", "paused"])
    def test_stop_from_any_state(self, setup):
        c = _make()
        if setup != "stopped":
            c.start(now=0.0)
        if setup == "paused":
            c.pause()
        c.stop()
        assert c.state is AnimationState.STOPPED

    def test_stop_keeps_ttn(self):
        c = _make(ttn=2.0, step_size=0.5, delay=0.0)
        c.start(now=0.0)
        c.tick(now=1.0)
        c.stop()
        assert c.ttn == 2.5

    def test_toggle(self):
        c = _make()
        c.toggle(now=0.0)
        assert c.state is AnimationState.RUNNING
        c.toggle(now=1.0)
        assert c.state is AnimationState.PAUSED
        c.toggle(now=2.0)
        assert c.state is AnimationState.RUNNING

    def test_start_uses_clock_when_no_time_given(self):
        times = iter([10.0, 10.05, 10.2])
        c = AnimationController(step_size=1.0, delay=0.1, clock=lambda: next(times))
        c.start()
        assert c.tick() is None
        assert c.tick() is not None
        assert c.ttn == DEFAULT_TTN + 1.0


class TestTicking:
    """Test delay-gated stepping driven by the render loop."""

    def test_one_step_after_delay(self):
        c = _make(ttn=2.0, step_size=0.1, delay=0.1)
        c.start(now=0.0)
        frame = c.tick(now=0.1)
        assert frame is not None
        assert c.ttn == 2.0 + 0.1
        assert frame.ttn == c.ttn

    def test_ticks_finer_than_delay_are_noops(self):
        c = _make(ttn=2.0, step_size=0.1, delay=0.5)
        c.start(now=0.0)
        for t in (0.1, 0.2, 0.3, 0.4):
            assert c.tick(now=t) is None
        assert c.ttn == 2.0
        assert c.tick(now=0.6) is not None
        assert c.ttn == 2.0 + 0.1

    def test_finer_ticks_do_not_add_steps(self):
        """Ticking every 30 ms or every 100 ms gives the same step count."""
        fine = _make(ttn=0.0, step_size=1.0, delay=0.25)
        coarse = _make(ttn=0.0, step_size=1.0, delay=0.25)
        fine.start(now=0.0)
        coarse.start(now=0.0)
        for k in range(1, 34):
            fine.tick(now=k * 0.03)
        for k in range(1, 11):
            coarse.tick(now=k * 0.1)
        assert fine.ttn == coarse.ttn == 3.0

    def test_zero_delay_steps_every_tick(self):
        c = _make(ttn=0.0, step_size=1.0, delay=0.0)
        c.start(now=0.0)
        for t in (0.0, 0.001, 0.002):
            c.tick(now=t)
        assert c.ttn == 3.0

    def test_tick_when_stopped_is_noop(self):
        c = _make(ttn=2.0, delay=0.0)
        assert c.tick(now=100.0) is None
        assert c.ttn == 2.0

    def test_pause_freezes_ttn(self):
        c = _make(ttn=2.0, step_size=0.1, delay=0.1)
        c.start(now=0.0)
        c.tick(now=0.15)
        frozen = c.ttn
        c.pause()
        for t in (1.0, 2.0, 3.0):
            assert c.tick(now=t) is None
        assert c.ttn == frozen

    def test_resume_waits_a_full_delay(self):
        c = _make(ttn=0.0, step_size=1.0, delay=1.0)
        c.start(now=0.0)
        c.pause()
        c.start(now=10.0)
        assert c.tick(now=10.5) is None
        assert c.tick(now=11.0) is not None
        assert c.ttn == 1.0

    def test_step_only_while_running(self):
        c = _make(ttn=2.0, step_size=0.5)
        assert c.step() is None
        c.start(now=0.0)
        c.step()
        assert c.ttn == 2.5


class TestJumps:
    """Test immediate recomputes."""

    def test_jump_sets_ttn_without_state_change(self):
        c = _make()
        c.start(now=0.0)
        frame = c.jump_to(3.5)
        assert c.ttn == 3.5
        assert frame.ttn == 3.5
        assert c.state is AnimationState.RUNNING

    def test_jump_idempotent(self):
        c = _make()
        assert c.jump_to(math.pi) == c.jump_to(math.pi)

    def test_jump_frame_contents(self):
        c = _make(point_count=360)
        frame = c.jump_to(2.0)
        assert isinstance(frame, RenderFrame)
        assert frame.point_count == 360
        assert len(frame.chords) == 360
        assert frame.chords[90].to_index == 180
        assert frame.pattern_name == "Cardioid"
        assert frame.formula == "n × 2.0 mod 360"

    def test_jump_matches_pure_generation(self):
        c = _make(radius=50.0, point_count=100, color=(0, 128, 255))
        frame = c.jump_to(3.5)
        expected = generate_chords(3.5, generate_points(50.0, 100), (0, 128, 255))
        assert frame.chords == expected

    def test_jump_rejects_non_finite(self):
        c = _make()
        with pytest.raises(InvalidInputError):
            c.jump_to(math.inf)
        assert c.ttn == DEFAULT_TTN

    def test_overflowing_jump_keeps_previous_ttn(self):
        c = _make(ttn=3.0, point_count=360)
        with pytest.raises(InvalidInputError):
            c.jump_to(1e306)
        assert c.ttn == 3.0
        assert c.recompute().ttn == 3.0

    def test_reset_matches_fresh_jump(self):
        a = _make(ttn=2.0, step_size=0.3, delay=0.0)
        a.start(now=0.0)
        a.tick(now=1.0)
        reset_frame = a.reset(5.0)
        assert a.state is AnimationState.STOPPED
        assert a.ttn == 5.0

        b = _make()
        assert reset_frame == b.jump_to(5.0)

    def test_reset_default(self):
        c = _make(ttn=9.0)
        c.reset()
        assert c.ttn == DEFAULT_TTN

    def test_custom_pattern_label(self):
        assert _make().jump_to(2.02).pattern_name == "Custom Pattern"


class TestNudge:
    """Arrow-key nudges; decrements clamp at zero."""

    def test_up(self):
        c = _make(ttn=2.0)
        assert c.nudge(1.0).ttn == 3.0

    def test_down_clamps(self):
        c = _make(ttn=0.05)
        assert c.nudge(-0.1).ttn == 0.0

    def test_up_from_negative_not_clamped(self):
        c = _make(ttn=-3.0)
        assert c.nudge(1.0).ttn == -2.0


class TestOverflowRollback:
    """A TTN that cannot be rendered never becomes the current TTN."""

    def test_step_overflow_keeps_ttn(self):
        c = _make(ttn=0.0, step_size=1e306, point_count=360)
        c.start(now=0.0)
        with pytest.raises(InvalidInputError):
            c.step()
        assert c.ttn == 0.0

    def test_tick_overflow_keeps_ttn(self):
        c = _make(ttn=0.0, step_size=1e306, delay=0.1, point_count=360)
        c.start(now=0.0)
        with pytest.raises(InvalidInputError):
            c.tick(now=1.0)
        assert c.ttn == 0.0
        assert c.state is AnimationState.RUNNING

    def test_nudge_overflow_keeps_ttn(self):
        c = _make(ttn=2.0, point_count=360)
        with pytest.raises(InvalidInputError):
            c.nudge(1e306)
        assert c.ttn == 2.0


class TestPresets:

    def test_select_preset_sets_ttn_and_points(self):
        c = _make(point_count=100)
        frame = c.select_preset(PRESETS[1])
        assert c.ttn == 3.0
        assert c.point_count == 360
        assert frame.pattern_name == "Nephroid"

    def test_select_preset_keeps_state(self):
        c = _make()
        c.start(now=0.0)
        c.select_preset(PRESETS[0])
        assert c.state is AnimationState.RUNNING
        c.stop()
        c.select_preset(PRESETS[2])
        assert c.state is AnimationState.STOPPED


class TestSettings:

    def test_points_reused_when_count_unchanged(self):
        c = _make(point_count=360)
        before = c.points
        c.set_point_count(360)
        assert c.points is before

    def test_points_resampled_on_change(self):
        c = _make(point_count=360)
        c.set_point_count(100)
        assert c.point_count == 100
        assert len(c.points) == 100
        assert len(c.recompute().chords) == 100

    def test_fractional_point_count_truncated(self):
        c = _make()
        c.set_point_count(99.9)
        assert c.point_count == 99

    def test_invalid_point_count_keeps_previous(self):
        c = _make(point_count=50)
        with pytest.raises(InvalidInputError):
            c.set_point_count(0)
        assert c.point_count == 50
        assert len(c.points) == 50

    def test_radius_change_resamples(self):
        c = _make(radius=1.0, point_count=4)
        c.set_radius(10.0)
        assert c.points[0].x == pytest.approx(-10.0)

    def test_negative_step_rejected(self):
        c = _make()
        with pytest.raises(InvalidInputError):
            c.set_step_size(-0.5)

    def test_negative_delay_rejected(self):
        c = _make()
        with pytest.raises(InvalidInputError):
            c.set_delay(-0.5)

    def test_color_applies_to_next_frame(self):
        c = _make()
        c.set_color((1, 2, 3))
        assert all(ch.color == (1, 2, 3) for ch in c.recompute().chords)
