"""
Timeline operator - lifecycle operations on a Timeline.

Creates timelines with the default track layout, routes new items onto the
right track, and manages transitions and locks. Lookups raise the
TimelineError hierarchy for unknown ids.
"""

from __future__ import annotations

import logging

from timeline_engine import config
from timeline_engine.models.timeline_models import (
    ClipKind,
    Timeline,
    TimelineItem,
    Track,
    TrackKind,
    Transition,
)


logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class TimelineError(Exception):
    """Base exception for timeline operations."""
    pass


class TrackNotFoundError(TimelineError):
    """Raised when a track id is unknown."""
    def __init__(self, track_id: str):
        self.track_id = track_id
        super().__init__(f"Track not found: {track_id}")


class ItemNotFoundError(TimelineError):
    """Raised when an item id is not on any track."""
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")


class InvalidOperationError(TimelineError):
    """Raised when an operation is invalid."""
    pass


# =============================================================================
# CREATE OPERATIONS
# =============================================================================


def create_timeline(
    name: str = "Untitled Project",
    duration: float | None = None,
) -> Timeline:
    """Create a timeline with one video, one audio and one overlay track."""
    timeline = Timeline(
        name=name,
        duration=config.DEFAULT_TIMELINE_DURATION if duration is None else duration,
        tracks=[
            Track(id="t1", kind=TrackKind.VIDEO, name="Video 1"),
            Track(id="t2", kind=TrackKind.AUDIO, name="Audio 1"),
            Track(id="t3", kind=TrackKind.OVERLAY, name="Overlay 1"),
        ],
    )
    logger.info(f"Created timeline '{name}' ({timeline.duration}s)")
    return timeline


def add_track(
    timeline: Timeline,
    kind: TrackKind = TrackKind.VIDEO,
    name: str | None = None,
    index: int | None = None,
) -> Track:
    same_kind = len(timeline.tracks_of_kind(kind))
    track = Track(kind=kind, name=name or f"{kind.value.title()} {same_kind + 1}")

    if index is None or index >= len(timeline.tracks):
        timeline.tracks.append(track)
    else:
        timeline.tracks.insert(max(0, index), track)
    logger.info(f"Added {kind.value} track '{track.name}'")
    return track


# =============================================================================
# READ OPERATIONS
# =============================================================================


def get_track(timeline: Timeline, track_id: str) -> Track:
    for track in timeline.tracks:
        if track.id == track_id:
            return track
    raise TrackNotFoundError(track_id)


def get_item(timeline: Timeline, item_id: str) -> tuple[Track, TimelineItem]:
    found = timeline.find_item(item_id)
    if found is None:
        raise ItemNotFoundError(item_id)
    _, track, item = found
    return track, item


def _target_kind(item: TimelineItem) -> TrackKind:
    if item.kind == ClipKind.VIDEO:
        return TrackKind.VIDEO
    if item.kind == ClipKind.AUDIO:
        return TrackKind.AUDIO
    return TrackKind.OVERLAY


# =============================================================================
# ITEM OPERATIONS
# =============================================================================


def add_item(timeline: Timeline, item: TimelineItem, playhead: float) -> Track:
    """
    Place ``item`` at the playhead on the first track of the matching kind.

    Video goes to the first video track, audio to the first audio track and
    everything else (images, text, colors) to the first overlay track.
    Returns the track the item was added to.
    """
    kind = _target_kind(item)
    candidates = timeline.tracks_of_kind(kind)
    if not candidates:
        raise InvalidOperationError(f"Timeline has no {kind.value} track for {item.kind.value} item")
    track = candidates[0]
    if timeline.find_item(item.id) is not None:
        raise InvalidOperationError(f"Item {item.id} is already on the timeline")

    item.start = max(0.0, playhead)
    track.items.append(item)
    track.items = track.sorted_items()
    logger.debug(f"Added {item.kind.value} item {item.id} to track '{track.name}' at {item.start}")
    return track


def remove_item(timeline: Timeline, item_id: str) -> TimelineItem:
    track, item = get_item(timeline, item_id)
    track.items = [i for i in track.items if i.id != item_id]
    logger.debug(f"Removed item {item_id} from track '{track.name}'")
    return item


def toggle_lock(timeline: Timeline, item_id: str) -> bool:
    _, item = get_item(timeline, item_id)
    item.is_locked = not item.is_locked
    return item.is_locked


# =============================================================================
# TRANSITIONS
# =============================================================================


def set_transition(
    timeline: Timeline, item_id: str, transition: Transition
) -> TimelineItem:
    """Attach ``transition`` to the cut into ``item_id``."""
    _, item = get_item(timeline, item_id)
    item.transition = transition.model_copy()
    return item


def clear_transition(timeline: Timeline, item_id: str) -> TimelineItem:
    _, item = get_item(timeline, item_id)
    item.transition = None
    return item


def apply_transition_to_all(timeline: Timeline, transition: Transition) -> int:
    """
    Give every item on video and overlay tracks its own copy of ``transition``.

    Returns the number of items updated.
    """
    count = 0
    for track in timeline.tracks:
        if track.kind not in (TrackKind.VIDEO, TrackKind.OVERLAY):
            continue
        for item in track.items:
            item.transition = transition.model_copy()
            count += 1
    logger.info(f"Applied {transition.type.value} transition to {count} items")
    return count
