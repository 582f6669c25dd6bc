"""
Clip editing operations on a single track.

Operations mutate items in place. Proposals are
clamped against the item's neighbors so the track never ends up with
overlapping items; invalid invocations are logged and ignored.
"""

from __future__ import annotations

import logging
import math

from timeline_engine.models.timeline_models import (
    MIN_CLIP_DURATION,
    TimelineItem,
    Track,
    new_item_id,
)
from timeline_engine.utils.animation_engine import clamp


logger = logging.getLogger(__name__)

# Float rounding of start + duration when an edge is clamped onto a neighbor.
_OVERLAP_TOLERANCE = 1e-9


def _neighbors_on_track(
    track: Track, item: TimelineItem
) -> tuple[TimelineItem | None, TimelineItem | None] | None:
    if track.get_item(item.id) is None:
        logger.debug(f"Item {item.id} is not on track '{track.name}'; ignoring edit")
        return None
    return track.neighbors(item.id)


def _min_start(prev_item: TimelineItem | None) -> float:
    return prev_item.end if prev_item is not None else 0.0


def move_item(track: Track, item: TimelineItem, proposed_start: float) -> TimelineItem:
    if not math.isfinite(proposed_start):
        logger.debug(f"Ignoring move of {item.id} to non-finite start {proposed_start}")
        return item
    neighbors = _neighbors_on_track(track, item)
    if neighbors is None:
        return item
    prev_item, next_item = neighbors

    min_start = _min_start(prev_item)
    max_start = next_item.start - item.duration if next_item is not None else math.inf
    if max_start < min_start:
        logger.debug(f"No room to move {item.id} between its neighbors")
        return item

    new_start = clamp(proposed_start, min_start, max_start)
    if new_start != proposed_start:
        logger.debug(f"Clamped move of {item.id} from {proposed_start} to {new_start}")
    item.start = new_start
    return item


def trim_item_start(
    track: Track, item: TimelineItem, proposed_start: float
) -> TimelineItem:
    """Move the left edge, keeping the right edge fixed."""
    if not math.isfinite(proposed_start):
        logger.debug(f"Ignoring trim of {item.id} to non-finite start {proposed_start}")
        return item
    neighbors = _neighbors_on_track(track, item)
    if neighbors is None:
        return item
    prev_item, _ = neighbors

    min_start = _min_start(prev_item)
    max_start = item.start + item.duration - MIN_CLIP_DURATION
    if max_start < min_start:
        logger.debug(f"No room to trim the start of {item.id}")
        return item

    new_start = clamp(proposed_start, min_start, max_start)
    item.duration = item.duration + (item.start - new_start)
    item.start = new_start
    return item


def trim_item_end(
    track: Track, item: TimelineItem, proposed_duration: float
) -> TimelineItem:
    """Move the right edge, keeping the start fixed."""
    if not math.isfinite(proposed_duration):
        logger.debug(
            f"Ignoring trim of {item.id} to non-finite duration {proposed_duration}"
        )
        return item
    neighbors = _neighbors_on_track(track, item)
    if neighbors is None:
        return item
    _, next_item = neighbors

    max_duration = next_item.start - item.start if next_item is not None else math.inf
    # The neighbor bound wins over the minimum duration.
    item.duration = min(max(proposed_duration, MIN_CLIP_DURATION), max_duration)
    return item


def split_item(
    track: Track, item: TimelineItem, at: float
) -> TimelineItem | None:
    """
    Cut ``item`` at time ``at``.

    The cut item keeps its id and becomes the first half. The second half
    gets a fresh id, starts at ``at`` and advances its source offset by the
    same amount; every other field, including the transition, is copied.
    Returns the second half, or None when ``at`` is not strictly inside
    the item.
    """
    if not math.isfinite(at) or track.get_item(item.id) is None:
        logger.debug(f"Ignoring split of {item.id} at {at}")
        return None
    if not item.start < at < item.end:
        logger.debug(f"Split point {at} is outside {item.id} [{item.start}, {item.end})")
        return None

    head = at - item.start
    tail = item.model_copy(deep=True, update={
        "id": new_item_id(),
        "start": at,
        "duration": item.duration - head,
        "offset": item.offset + head,
    })
    item.duration = head

    track.items.append(tail)
    track.items = track.sorted_items()
    return tail


def duplicate_item(track: Track, item: TimelineItem) -> TimelineItem | None:
    """
    Place a copy of ``item`` directly after it. Overlaps are not resolved.

    Returns the copy, or None when ``item`` is not on ``track``.
    """
    neighbors = _neighbors_on_track(track, item)
    if neighbors is None:
        return None
    _, next_item = neighbors

    copy = item.model_copy(deep=True, update={
        "id": new_item_id(),
        "start": item.end,
    })
    if next_item is not None and copy.end > next_item.start:
        logger.warning(
            f"Duplicate of {item.id} overlaps {next_item.id} on track '{track.name}'"
        )

    track.items.append(copy)
    track.items = track.sorted_items()
    return copy


def check_track_invariant(track: Track) -> bool:
    """True when stored intervals are pairwise disjoint and ordered by start."""
    ordered = track.sorted_items()
    for item in ordered:
        if not math.isfinite(item.start) or not item.duration > 0:
            return False
    for prev_item, next_item in zip(ordered, ordered[1:]):
        if prev_item.end - next_item.start > _OVERLAP_TOLERANCE:
            return False
    return True
