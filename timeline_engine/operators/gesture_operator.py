"""
Gesture state machine for timeline drags.

A gesture is an explicit value: Idle, Dragging, Resizing or Rotating. The
input collaborator starts a gesture with one of the ``begin_*`` functions,
feeds cumulative deltas to ``update_gesture`` and finishes with
``end_gesture``. Updates are always applied relative to the value captured
when the gesture began, so replaying the same delta is idempotent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from timeline_engine.models.timeline_models import Timeline, TimelineItem, Track
from timeline_engine.operators.timeline_editor import (
    move_item,
    trim_item_end,
    trim_item_start,
)
from timeline_engine.utils.animation_engine import is_finite
from timeline_engine.utils.geometry import Bounds, rotation_for_pointer


logger = logging.getLogger(__name__)

ROTATION_PAYLOAD_KEY = "rotation"


class ResizeEdge(str, Enum):
    START = "start"
    END = "end"


# =============================================================================
# STATES
# =============================================================================


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    item_id: str
    origin_start: float


@dataclass(frozen=True)
class Resizing:
    """``origin_value`` is the start for START edges and the duration for END edges."""
    item_id: str
    edge: ResizeEdge
    origin_value: float


@dataclass(frozen=True)
class Rotating:
    item_id: str
    center: tuple[float, float]


GestureState = Union[Idle, Dragging, Resizing, Rotating]

IDLE = Idle()


# =============================================================================
# TRANSITIONS
# =============================================================================


def begin_drag(item: TimelineItem) -> GestureState:
    if item.is_locked:
        logger.debug(f"Item {item.id} is locked; drag ignored")
        return IDLE
    return Dragging(item_id=item.id, origin_start=item.start)


def begin_resize(item: TimelineItem, edge: ResizeEdge) -> GestureState:
    if item.is_locked:
        logger.debug(f"Item {item.id} is locked; resize ignored")
        return IDLE
    edge = ResizeEdge(edge)
    origin = item.start if edge == ResizeEdge.START else item.duration
    return Resizing(item_id=item.id, edge=edge, origin_value=origin)


def begin_rotate(item: TimelineItem, bounds: Bounds) -> GestureState:
    if item.is_locked:
        logger.debug(f"Item {item.id} is locked; rotate ignored")
        return IDLE
    return Rotating(item_id=item.id, center=bounds.center)


def _locate(timeline: Timeline, item_id: str) -> tuple[Track, TimelineItem] | None:
    found = timeline.find_item(item_id)
    if found is None:
        logger.debug(f"Gesture target {item_id} is no longer on the timeline")
        return None
    _, track, item = found
    return track, item


def update_gesture(
    state: GestureState, timeline: Timeline, delta_seconds: float
) -> GestureState:
    """
    Apply a drag or resize ``delta_seconds`` away from the gesture's origin.

    Idle and Rotating states are returned unchanged. When the target item
    has been removed the gesture falls back to Idle.
    """
    if not isinstance(state, (Dragging, Resizing)):
        return state
    if not is_finite(delta_seconds):
        return state

    located = _locate(timeline, state.item_id)
    if located is None:
        return IDLE
    track, item = located

    if isinstance(state, Dragging):
        move_item(track, item, state.origin_start + delta_seconds)
    elif state.edge == ResizeEdge.START:
        trim_item_start(track, item, state.origin_value + delta_seconds)
    else:
        trim_item_end(track, item, state.origin_value + delta_seconds)
    return state


def update_rotation(
    state: GestureState, timeline: Timeline, pointer: tuple[float, float]
) -> float | None:
    """Store the rotation for ``pointer`` on the item; returns degrees or None."""
    if not isinstance(state, Rotating):
        return None
    located = _locate(timeline, state.item_id)
    if located is None:
        return None
    _, item = located

    degrees = rotation_for_pointer(state.center, pointer)
    item.payload[ROTATION_PAYLOAD_KEY] = degrees
    return degrees


def end_gesture(state: GestureState | None = None) -> GestureState:
    return IDLE
