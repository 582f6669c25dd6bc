from __future__ import annotations

import math


# Largest float strictly below 1.0; progress is reported in [0, 1).
PROGRESS_CEILING = math.nextafter(1.0, 0.0)


def clamp(value: float, min_value: float = 0.0, max_value: float = 1.0) -> float:
    return max(min_value, min(max_value, value))


def clamp_progress(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return clamp(value, 0.0, PROGRESS_CEILING)


def is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def interpolate(start: float, end: float, t: float) -> float:
    return start + (end - start) * clamp(t)


def bell(t: float) -> float:
    """0 at both ends of the blend, 1 at the midpoint."""
    return math.sin(t * math.pi)


def looping_progress(elapsed_s: float, duration_s: float) -> float:
    """Progress of a window that restarts every ``duration_s`` seconds."""
    if not is_finite(elapsed_s, duration_s) or duration_s <= 0:
        return 0.0
    return (elapsed_s % duration_s) / duration_s
