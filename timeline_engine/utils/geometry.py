"""Pure geometry helpers shared by the transition engine and gestures."""

from __future__ import annotations

import math
from dataclasses import dataclass

from timeline_engine.models.timeline_models import TransitionDirection


_DIRECTION_VECTORS: dict[TransitionDirection, tuple[int, int]] = {
    TransitionDirection.LEFT: (1, 0),
    TransitionDirection.RIGHT: (-1, 0),
    TransitionDirection.UP: (0, 1),
    TransitionDirection.DOWN: (0, -1),
}

# Far enough from the center to cover the layer's corners (~70.7%).
_SWEEP_RADIUS = 75.0
_SWEEP_STEP = math.pi / 16


def direction_vector(direction: TransitionDirection | str | None) -> tuple[int, int]:
    """
    Unit vector for a transition direction.

    Positive x means the incoming layer enters from the right and travels
    left. Missing or unknown directions behave like ``left``.
    """
    if direction is None:
        return _DIRECTION_VECTORS[TransitionDirection.LEFT]
    try:
        key = TransitionDirection(direction)
    except ValueError:
        return _DIRECTION_VECTORS[TransitionDirection.LEFT]
    return _DIRECTION_VECTORS[key]


def is_vertical(direction: TransitionDirection | str | None) -> bool:
    return direction in (
        TransitionDirection.UP,
        TransitionDirection.DOWN,
        TransitionDirection.UP.value,
        TransitionDirection.DOWN.value,
    )


def clock_sweep_points(angle: float) -> tuple[tuple[float, float], ...]:
    """
    Polygon covering a clockwise sweep from 12 o'clock through ``angle`` radians.

    Coordinates are percentages of the layer with the pivot at (50, 50).
    """
    angle = max(0.0, min(2 * math.pi, angle))
    points = [(50.0, 50.0)]
    step = 0
    while True:
        a = min(step * _SWEEP_STEP, angle)
        points.append((
            50 + _SWEEP_RADIUS * math.sin(a),
            50 - _SWEEP_RADIUS * math.cos(a),
        ))
        if a >= angle:
            break
        step += 1
    return tuple(points)


def plus_points(arm_width: float) -> tuple[tuple[float, float], ...]:
    """12-point plus shape centered on the layer with arms ``arm_width`` wide."""
    lo = 50 - arm_width / 2
    hi = 50 + arm_width / 2
    return (
        (lo, 0.0), (hi, 0.0), (hi, lo),
        (100.0, lo), (100.0, hi), (hi, hi),
        (hi, 100.0), (lo, 100.0), (lo, hi),
        (0.0, hi), (0.0, lo), (lo, lo),
    )


@dataclass(frozen=True)
class Bounds:
    """On-screen bounds of an item, in the input collaborator's units."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


def rotation_for_pointer(
    center: tuple[float, float], pointer: tuple[float, float]
) -> float:
    """Rotation in degrees for a handle dragged to ``pointer`` (0 = handle straight up)."""
    dx = pointer[0] - center[0]
    dy = pointer[1] - center[1]
    return math.degrees(math.atan2(dy, dx)) - 90
