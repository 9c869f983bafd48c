"""Circle sampling and chord generation for times-table patterns.

Points are spaced evenly around a circle starting at 180 degrees. For a
times-table number ``ttn`` each point ``i`` is joined to point
``trunc(i * ttn) mod N``. Everything here is a pure function of its
arguments; screen offsets and scaling belong to the renderer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

# Angle of point 0, in degrees. Only rotates the whole pattern.
START_ANGLE_DEG = 180.0

# Upper bound on N; larger counts stall the UI thread without adding detail
MAX_POINT_COUNT = 10_000


class InvalidInputError(ValueError):
    """Raised for structurally invalid input (non-positive radius or count,
    non-finite numbers, unparseable text)."""


class InvalidStateError(RuntimeError):
    """Raised when a point set does not match the point count in use."""


@dataclass(frozen=True)
class Point:
    """A sampled point, relative to the circle centre."""

    index: int
    x: float
    y: float


@dataclass(frozen=True)
class Chord:
    """A line from ``source`` to ``target`` drawn in ``color``."""

    source: Point
    target: Point
    color: tuple[int, int, int]

    @property
    def from_index(self) -> int:
        return self.source.index

    @property
    def to_index(self) -> int:
        return self.target.index

    @property
    def is_degenerate(self) -> bool:
        """True for fixed points of the mapping (zero-length chords)."""
        return self.source.index == self.target.index


def validate_point_count(count) -> int:
    """Truncate ``count`` toward zero and require 1 <= N <= MAX_POINT_COUNT."""
    try:
        n = int(count)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError(f"Point count must be a number, got {count!r}") from exc
    if n <= 0:
        raise InvalidInputError(f"Point count must be positive, got {count!r}")
    if n > MAX_POINT_COUNT:
        raise InvalidInputError(
            f"Point count must be at most {MAX_POINT_COUNT}, got {count!r}"
        )
    return n


def generate_points(radius: float, count) -> tuple[Point, ...]:
    """Place ``count`` points evenly on a circle of ``radius``.

    Point ``i`` sits at angle ``180 + i * 360 / N`` degrees. A fractional
    ``count`` is truncated toward zero before use, so ``generate_points(r,
    12.9)`` yields 12 points.

    Raises:
        InvalidInputError: radius is not a positive finite number, or the
            truncated count is outside 1..MAX_POINT_COUNT.
    """
    if not math.isfinite(radius) or radius <= 0:
        raise InvalidInputError(f"Radius must be positive, got {radius!r}")
    n = validate_point_count(count)

    angles = np.radians(START_ANGLE_DEG + np.arange(n) * (360.0 / n))
    xs = radius * np.cos(angles)
    ys = radius * np.sin(angles)

    return tuple(
        Point(i, float(x), float(y)) for i, (x, y) in enumerate(zip(xs, ys))
    )


def target_indices(ttn: float, count: int) -> np.ndarray:
    """Vectorised chord targets for indices ``0..count-1``.

    The product ``ttn * i`` is truncated toward zero and then reduced
    modulo ``count`` with a non-negative result, so negative multipliers
    wrap around instead of indexing backwards.
    """
    if not math.isfinite(ttn):
        raise InvalidInputError(f"Times-table number must be finite, got {ttn!r}")
    n = validate_point_count(count)
    with np.errstate(over="ignore"):
        products = np.trunc(ttn * np.arange(n, dtype=np.float64))
    if not np.all(np.isfinite(products)):
        raise InvalidInputError(f"Times-table number {ttn!r} overflows for {n} points")
    # np.mod follows the sign of the divisor, so results land in [0, n)
    return np.mod(products, n).astype(np.intp)


def target_index(ttn: float, index: int, count: int) -> int:
    """Chord target for a single source index."""
    if not math.isfinite(ttn):
        raise InvalidInputError(f"Times-table number must be finite, got {ttn!r}")
    n = validate_point_count(count)
    product = ttn * index
    if not math.isfinite(product):
        raise InvalidInputError(f"Times-table number {ttn!r} overflows at index {index}")
    return int(math.trunc(product)) % n


def generate_chords(ttn: float, points, color, point_count=None) -> tuple[Chord, ...]:
    """Build one chord per point, in source-index order.

    Args:
        ttn: Times-table number.
        points: Sequence produced by ``generate_points``.
        color: (r, g, b) tuple attached to every chord.
        point_count: The N the caller believes is in use. Defaults to
            ``len(points)``.

    Raises:
        InvalidInputError: empty point set or non-finite ``ttn``.
        InvalidStateError: ``points`` is shorter than ``point_count`` or
            its indices are not ``0..N-1`` in order.
    """
    points = tuple(points)
    if not points:
        raise InvalidInputError("Cannot generate chords from an empty point set")
    n = len(points) if point_count is None else validate_point_count(point_count)
    if len(points) < n:
        raise InvalidStateError(
            f"Point set has {len(points)} entries but point count is {n}"
        )
    for i in range(n):
        if points[i].index != i:
            raise InvalidStateError(
                f"Point at position {i} has index {points[i].index}"
            )

    rgb = tuple(int(c) for c in color)
    targets = target_indices(ttn, n)
    return tuple(
        Chord(points[i], points[int(t)], rgb) for i, t in enumerate(targets)
    )


def chord_segments(chords) -> np.ndarray:
    """Flatten chords into an (N, 4) float array of x0, y0, x1, y1."""
    segments = np.empty((len(chords), 4), dtype=np.float64)
    for row, chord in enumerate(chords):
        segments[row] = (chord.source.x, chord.source.y,
                         chord.target.x, chord.target.y)
    return segments
