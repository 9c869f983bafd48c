"""Animation controller: owns the TTN and the run/pause/stop lifecycle.

The controller is toolkit-agnostic. A render loop calls ``tick()`` at its
own cadence; the controller advances the TTN by one step each time the
configured delay has elapsed and returns a fresh ``RenderFrame``. Commands
(``jump_to``, ``reset``, ``select_preset``, ``nudge``) recompute
immediately and return the frame to draw.
"""

from __future__ import annotations

import enum
import logging
import math
import time
from typing import Callable, NamedTuple

from geometry import (
    Chord, InvalidInputError, Point, generate_chords, generate_points,
    validate_point_count,
)
from patterns import PresetPattern, format_formula, identify

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 300.0
DEFAULT_TTN = 2.0
DEFAULT_POINT_COUNT = 360
DEFAULT_STEP_SIZE = 0.1
DEFAULT_DELAY = 0.1
DEFAULT_COLOR = (255, 0, 0)


class AnimationState(enum.Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


class RenderFrame(NamedTuple):
    """Everything a renderer needs to draw one frame."""

    ttn: float
    point_count: int
    points: tuple[Point, ...]
    chords: tuple[Chord, ...]
    pattern_name: str

    @property
    def formula(self) -> str:
        return format_formula(self.ttn, self.point_count)


def _require_non_negative(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{name} must be a non-negative number, got {value!r}")
    return value


def _require_finite_ttn(ttn: float) -> float:
    ttn = float(ttn)
    if not math.isfinite(ttn):
        raise InvalidInputError(f"Times-table number must be finite, got {ttn!r}")
    return ttn


class AnimationController:
    """Single-session owner of the times-table state.

    Not thread-safe: all calls are expected from the thread that drives
    the render loop.
    """

    def __init__(
        self,
        radius: float = DEFAULT_RADIUS,
        point_count: int = DEFAULT_POINT_COUNT,
        ttn: float = DEFAULT_TTN,
        step_size: float = DEFAULT_STEP_SIZE,
        delay: float = DEFAULT_DELAY,
        color: tuple[int, int, int] = DEFAULT_COLOR,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._radius = radius
        self._points: tuple[Point, ...] = ()
        self._point_count = 0
        self.set_point_count(point_count)
        self._ttn = _require_finite_ttn(ttn)
        self._step_size = _require_non_negative("Step size", step_size)
        self._delay = _require_non_negative("Delay", delay)
        self._color = tuple(color)
        self._state = AnimationState.STOPPED
        self._last_step_time: float | None = None

    # -- Read-only state --

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def ttn(self) -> float:
        return self._ttn

    @property
    def point_count(self) -> int:
        return self._point_count

    @property
    def points(self) -> tuple[Point, ...]:
        return self._points

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def step_size(self) -> float:
        return self._step_size

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def color(self) -> tuple[int, int, int]:
        return self._color

    @property
    def is_running(self) -> bool:
        return self._state is AnimationState.RUNNING

    # -- Configuration --

    def set_point_count(self, point_count) -> None:
        """Change N. Points are resampled only when N actually changes.

        Fractional counts are truncated toward zero.
        """
        n = validate_point_count(point_count)
        if self._points and n == self._point_count:
            return
        self._points = generate_points(self._radius, n)
        self._point_count = n

    def set_radius(self, radius: float) -> None:
        if radius == self._radius:
            return
        self._points = generate_points(radius, self._point_count)
        self._radius = radius

    def set_step_size(self, step_size: float) -> None:
        self._step_size = _require_non_negative("Step size", step_size)

    def set_delay(self, delay: float) -> None:
        self._delay = _require_non_negative("Delay", delay)

    def set_color(self, color: tuple[int, int, int]) -> None:
        self._color = tuple(color)

    # -- Lifecycle commands --

    def start(self, now: float | None = None) -> None:
        """STOPPED or PAUSED -> RUNNING. The first step comes one delay later."""
        if self._state is AnimationState.RUNNING:
            return
        self._last_step_time = self._clock() if now is None else now
        logger.debug("Animation %s -> running", self._state.value)
        self._state = AnimationState.RUNNING

    def pause(self) -> None:
        """RUNNING -> PAUSED. The TTN and last frame stay as they are."""
        if self._state is not AnimationState.RUNNING:
            return
        logger.debug("Animation running -> paused at ttn=%.4f", self._ttn)
        self._state = AnimationState.PAUSED

    def toggle(self, now: float | None = None) -> None:
        if self._state is AnimationState.RUNNING:
            self.pause()
        else:
            self.start(now)

    def stop(self) -> None:
        """Any state -> STOPPED. Keeps the TTN; see ``reset``."""
        if self._state is not AnimationState.STOPPED:
            logger.debug("Animation %s -> stopped", self._state.value)
        self._state = AnimationState.STOPPED
        self._last_step_time = None

    def reset(self, ttn: float = DEFAULT_TTN) -> RenderFrame:
        """Stop and jump back to ``ttn``."""
        self.stop()
        return self.jump_to(ttn)

    # -- Stepping --

    def tick(self, now: float | None = None) -> RenderFrame | None:
        """Advance one step if running and the delay has elapsed.

        Returns the new frame, or None when nothing changed.
        """
        if self._state is not AnimationState.RUNNING:
            return None
        if now is None:
            now = self._clock()
        if self._last_step_time is not None and now - self._last_step_time < self._delay:
            return None
        self._last_step_time = now
        return self.step()

    def step(self) -> RenderFrame | None:
        """Add one step to the TTN and recompute. No-op unless running."""
        if self._state is not AnimationState.RUNNING:
            return None
        return self._commit(self._ttn + self._step_size)

    # -- Immediate recomputes --

    def jump_to(self, ttn: float) -> RenderFrame:
        """Set the TTN directly and recompute, in any state."""
        return self._commit(_require_finite_ttn(ttn))

    def nudge(self, delta: float) -> RenderFrame:
        """Shift the TTN by ``delta``. Decrements never go below zero."""
        ttn = self._ttn + delta
        if delta < 0:
            ttn = max(0.0, ttn)
        return self.jump_to(ttn)

    def select_preset(self, preset: PresetPattern) -> RenderFrame:
        """Load a preset's TTN and point count without touching the state."""
        logger.info("Preset selected: %s (ttn=%.5f, points=%d)",
                    preset.name, preset.ttn, preset.point_count)
        self.set_point_count(preset.point_count)
        return self.jump_to(preset.ttn)

    def _commit(self, ttn: float) -> RenderFrame:
        """Render ``ttn`` and only then make it current."""
        frame = self._frame_for(ttn)
        self._ttn = ttn
        return frame

    def recompute(self) -> RenderFrame:
        """Build the frame for the current (ttn, N, points, color) snapshot."""
        return self._frame_for(self._ttn)

    def _frame_for(self, ttn: float) -> RenderFrame:
        points = self._points
        chords = generate_chords(ttn, points, self._color, self._point_count)
        return RenderFrame(
            ttn=ttn,
            point_count=self._point_count,
            points=points,
            chords=chords,
            pattern_name=identify(ttn),
        )
