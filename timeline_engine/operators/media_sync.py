"""
Keep media elements in step with the playhead.

The engine computes where each playing element should be; a MediaPlayer
implementation owned by the host applies it.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Protocol, Sequence

from timeline_engine import config
from timeline_engine.models.render_models import MediaDirective, ResolvedEntry, Role
from timeline_engine.models.timeline_models import ClipKind, Track


logger = logging.getLogger(__name__)

_MEDIA_KINDS = (ClipKind.VIDEO, ClipKind.AUDIO)


class MediaPlayer(Protocol):
    def seek(self, item_id: str, t: float) -> None: ...

    def play(self, item_id: str) -> None: ...

    def pause(self, item_id: str) -> None: ...

    def set_rate(self, item_id: str, rate: float) -> None: ...

    def set_volume(self, item_id: str, volume: float, muted: bool) -> None: ...


def media_time_for(entry: ResolvedEntry, t: float) -> float:
    """
    Position inside the source media for ``entry`` at timeline time ``t``.

    An outgoing layer keeps playing past its end while the blend runs, so
    its position is extrapolated from the end of the item.
    """
    item = entry.item
    if entry.role == Role.OUTGOING:
        media_time = item.duration * item.speed + item.offset + (t - item.end) * item.speed
    else:
        media_time = (t - item.start) * item.speed + item.offset

    media_time = max(0.0, media_time)
    if item.media_duration is not None and math.isfinite(item.media_duration):
        media_time = min(media_time, item.media_duration)
    return media_time


def muted_track_indexes(tracks: Sequence[Track]) -> frozenset[int]:
    return frozenset(i for i, track in enumerate(tracks) if track.is_muted)


def media_directives(
    entries: Sequence[ResolvedEntry],
    t: float,
    is_playing: bool,
    muted_tracks: frozenset[int] = frozenset(),
) -> list[MediaDirective]:
    """Directives for every video/audio entry in the active set."""
    directives: list[MediaDirective] = []
    for entry in entries:
        item = entry.item
        if item.kind not in _MEDIA_KINDS:
            continue
        directives.append(MediaDirective(
            item_id=item.id,
            media_time=media_time_for(entry, t),
            playback_rate=item.speed,
            volume=max(0.0, min(1.0, item.volume / 100)),
            muted=entry.track_index in muted_tracks,
            playing=is_playing,
        ))
    return directives


def apply_media_directives(
    player: MediaPlayer,
    directives: Sequence[MediaDirective],
    current_times: Mapping[str, float],
    tolerance: float | None = None,
) -> None:
    """
    Push directives to ``player``.

    Elements are only re-seeked when their reported position has drifted by
    more than ``tolerance`` seconds; elements with no reported position are
    always seeked.
    """
    tolerance = config.MEDIA_SEEK_TOLERANCE if tolerance is None else tolerance
    for directive in directives:
        current = current_times.get(directive.item_id)
        if current is None or abs(current - directive.media_time) > tolerance:
            logger.debug(
                f"Seeking {directive.item_id} to {directive.media_time:.3f} "
                f"(was {current})"
            )
            player.seek(directive.item_id, directive.media_time)

        player.set_rate(directive.item_id, directive.playback_rate)
        player.set_volume(directive.item_id, directive.volume, directive.muted)
        if directive.playing:
            player.play(directive.item_id)
        else:
            player.pause(directive.item_id)
