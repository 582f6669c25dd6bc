"""
Active-set resolution.

Given the tracks and a time ``t``, decide which items are visible and, on
video tracks, whether a blend window between two adjacent items is active.
Resolution is a pure function of its inputs and never raises.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from timeline_engine.models.render_models import ResolvedEntry, Role, TransitionPreview
from timeline_engine.models.timeline_models import (
    TimelineItem,
    Track,
    TrackKind,
    Transition,
    TransitionTiming,
)
from timeline_engine.utils.animation_engine import clamp_progress, is_finite


logger = logging.getLogger(__name__)


def _is_matchable(item: TimelineItem) -> bool:
    return is_finite(item.start, item.duration) and item.duration > 0


def _matchable_items(track: Track) -> list[TimelineItem]:
    """Valid items in start order; invalid ones are dropped before sorting."""
    return sorted(
        (item for item in track.items if _is_matchable(item)),
        key=lambda item: item.start,
    )


def _effective_transition(
    item: TimelineItem, preview: TransitionPreview | None
) -> Transition | None:
    transition = item.transition
    if preview is not None and preview.target_id == item.id:
        transition = preview.transition
    if transition is None or not transition.is_effective:
        return None
    return transition


def _incoming_window(
    main: TimelineItem, transition: Transition, t: float
) -> float | None:
    """Progress when ``t`` lies in the blend window that ``main`` owns."""
    tau = t - main.start
    window_start = transition.window_offset
    if window_start <= tau < window_start + transition.duration:
        return (tau - window_start) / transition.duration
    return None


def _outgoing_window(
    upcoming: TimelineItem, transition: Transition, t: float
) -> float | None:
    """Progress when ``t`` lies in the lead-in of the next item's window."""
    if transition.timing == TransitionTiming.POSTFIX:
        return None
    lead_in = transition.lead_in
    delta = upcoming.start - t
    if 0 <= delta <= lead_in:
        return (lead_in - delta) / transition.duration
    return None


def _resolve_video_track(
    track: Track,
    track_index: int,
    t: float,
    preview: TransitionPreview | None,
) -> list[ResolvedEntry]:
    ordered = _matchable_items(track)

    main_index: int | None = None
    for i, item in enumerate(ordered):
        if item.contains(t):
            main_index = i
            break

    if main_index is not None:
        next_index = main_index + 1 if main_index + 1 < len(ordered) else None
    else:
        next_index = next(
            (i for i, item in enumerate(ordered) if item.start > t), None
        )

    incoming_index: int | None = None
    transition: Transition | None = None
    progress: float | None = None

    if main_index is not None:
        candidate = _effective_transition(ordered[main_index], preview)
        if candidate is not None:
            progress = _incoming_window(ordered[main_index], candidate, t)
            if progress is not None:
                incoming_index, transition = main_index, candidate

    if incoming_index is None and next_index is not None:
        candidate = _effective_transition(ordered[next_index], preview)
        if candidate is not None:
            progress = _outgoing_window(ordered[next_index], candidate, t)
            if progress is not None:
                incoming_index, transition = next_index, candidate

    if incoming_index is None or transition is None or progress is None:
        if main_index is None:
            return []
        return [ResolvedEntry(ordered[main_index], Role.MAIN, track_index)]

    progress = clamp_progress(progress)
    entries: list[ResolvedEntry] = []
    if incoming_index > 0:
        entries.append(ResolvedEntry(
            ordered[incoming_index - 1], Role.OUTGOING, track_index, transition, progress
        ))
    entries.append(ResolvedEntry(
        ordered[incoming_index], Role.MAIN, track_index, transition, progress
    ))
    return entries


def resolve(
    tracks: Sequence[Track],
    t: float,
    preview: TransitionPreview | None = None,
) -> list[ResolvedEntry]:
    """
    Resolve the active set at time ``t``.

    Each visible video track contributes zero, one or two entries; other
    tracks contribute every item whose interval contains ``t``. Entries are
    returned in track order.
    """
    if not math.isfinite(t):
        logger.debug(f"Ignoring resolve at non-finite time {t}")
        return []

    entries: list[ResolvedEntry] = []
    for track_index, track in enumerate(tracks):
        if track.is_hidden:
            continue
        if track.kind == TrackKind.VIDEO:
            entries.extend(_resolve_video_track(track, track_index, t, preview))
            continue
        for item in _matchable_items(track):
            if item.contains(t):
                entries.append(ResolvedEntry(item, Role.MAIN, track_index))
    return entries
