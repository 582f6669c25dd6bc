"""
Pydantic models for the editor timeline.

This module implements the data model the compositing engine reads and the
editing operators mutate:
- Timeline -> Tracks -> TimelineItems
- Transitions attached to the *incoming* item of a cut
- Half-open item intervals [start, start + duration) in float seconds

Time fields are intentionally unconstrained floats. Invalid values (negative
durations, NaN) are representable and are ignored or clamped by the engine
instead of being rejected at construction time.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field


MIN_CLIP_DURATION = 0.5


def new_item_id() -> str:
    """Mint a fresh item id."""
    return uuid4().hex


# =============================================================================
# ENUMS
# =============================================================================


class TrackKind(str, Enum):
    """Type of track content."""
    VIDEO = "video"
    AUDIO = "audio"
    OVERLAY = "overlay"


class ClipKind(str, Enum):
    """Kind of media an item carries."""
    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"
    TEXT = "text"
    COLOR = "color"


class TransitionTiming(str, Enum):
    """Where the blend window sits relative to the incoming item's start."""
    PREFIX = "prefix"
    OVERLAP = "overlap"
    POSTFIX = "postfix"


class TransitionDirection(str, Enum):
    """Entry direction used by directional transition families."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class TransitionType(str, Enum):
    """Transition families known to the parameter engine."""
    NONE = "none"

    # Dissolves
    DISSOLVE = "dissolve"
    FILM_DISSOLVE = "film-dissolve"
    ADDITIVE_DISSOLVE = "additive-dissolve"
    NON_ADDITIVE_DISSOLVE = "non-additive-dissolve"
    DIP_TO_BLACK = "dip-to-black"
    DIP_TO_WHITE = "dip-to-white"
    FADE_DISSOLVE = "fade-dissolve"
    MORPH_CUT = "morph-cut"
    GRADIENT_WIPE = "gradient-wipe"
    RIPPLE_DISSOLVE = "ripple-dissolve"

    # Motion
    SLIDE = "slide"
    PUSH = "push"
    WHIP = "whip"
    BAND_SLIDE = "band-slide"
    STACK = "stack"
    SMOOTH_WIPE = "smooth-wipe"
    FILM_ROLL = "film-roll"
    SPIN = "spin"

    # Shapes & wipes
    SPLIT = "split"
    IRIS_ROUND = "iris-round"
    IRIS_BOX = "iris-box"
    IRIS_DIAMOND = "iris-diamond"
    IRIS_CROSS = "iris-cross"
    CIRCLE = "circle"
    WIPE = "wipe"
    BARN_DOORS = "barn-doors"
    CLOCK_WIPE = "clock-wipe"
    RADIAL_WIPE = "radial-wipe"
    PAGE_PEEL = "page-peel"

    # Zooms
    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"
    CROSS_ZOOM = "cross-zoom"
    FLASH_ZOOM_IN = "flash-zoom-in"
    FLASH_ZOOM_OUT = "flash-zoom-out"
    ZOOM_BLUR = "zoom-blur"

    # Stylized
    RGB_SPLIT = "rgb-split"
    FILM_BURN = "film-burn"
    GLITCH = "glitch"


# =============================================================================
# TRANSITIONS
# =============================================================================


class Transition(BaseModel):
    """
    A blend descriptor attached to the incoming item of a cut.

    The timing decides where the blend window of length ``duration`` sits
    relative to the owning item's start:

    prefix:   [=====]|
    overlap:     [==|==]
    postfix:        |[=====]
                    ^ incoming item start
    """
    type: TransitionType = Field(
        default=TransitionType.DISSOLVE,
        description="Transition family"
    )
    duration: float = Field(default=1.0, description="Blend window length in seconds")
    direction: TransitionDirection | None = Field(
        default=None,
        description="Entry direction for directional families"
    )
    timing: TransitionTiming = Field(
        default=TransitionTiming.POSTFIX,
        description="Placement of the blend window"
    )

    @property
    def is_effective(self) -> bool:
        """True when this transition can produce a blend window."""
        return (
            self.type != TransitionType.NONE
            and math.isfinite(self.duration)
            and self.duration > 0
        )

    @property
    def window_offset(self) -> float:
        """Start of the blend window relative to the owning item's start."""
        if self.timing == TransitionTiming.OVERLAP:
            return -self.duration / 2
        if self.timing == TransitionTiming.PREFIX:
            return -self.duration
        return 0.0

    @property
    def lead_in(self) -> float:
        """Portion of the blend window that lies before the owning item's start."""
        return -self.window_offset


# =============================================================================
# TIMELINE ITEMS
# =============================================================================


class TimelineItem(BaseModel):
    """
    A clip placed on a track.

    ``start`` and ``duration`` define the half-open interval the item occupies
    on its track. ``offset`` is where content begins inside the source media
    and only matters to media playback.
    """
    id: str = Field(default_factory=new_item_id, description="Item identifier")
    kind: ClipKind = Field(default=ClipKind.VIDEO, description="Media kind")
    name: str = Field(default="", description="Display name")
    src: str = Field(default="", description="Source media reference")

    start: float = Field(default=0.0, description="Timeline start (seconds)")
    duration: float = Field(default=5.0, description="Timeline duration (seconds)")
    offset: float = Field(default=0.0, description="Start within the source media (seconds)")

    transition: Transition | None = Field(
        default=None,
        description="Transition into this item"
    )

    is_locked: bool = Field(default=False, description="Locked items ignore gestures")
    is_background: bool = Field(default=False, description="Fills the canvas at base z-order")

    speed: float = Field(default=1.0, description="Playback rate multiplier")
    volume: float = Field(default=100.0, description="Volume, 0 to 100")
    media_duration: float | None = Field(
        default=None,
        description="Length of the source media when known"
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Kind-specific fields (text styling, color, crop, ...)"
    )

    @property
    def end(self) -> float:
        """Exclusive end time on the timeline."""
        return self.start + self.duration

    def contains(self, time: float) -> bool:
        """Check if a time point falls within this item's interval."""
        return self.start <= time < self.start + self.duration


# =============================================================================
# TRACKS
# =============================================================================


def _start_order_key(item: TimelineItem) -> tuple[bool, float]:
    # NaN compares false both ways, which would leave sorted() out of order.
    if math.isfinite(item.start):
        return (False, item.start)
    return (True, 0.0)


class Track(BaseModel):
    """
    An ordered channel of one kind.

    Items on a track never overlap. Tracks are independent; the compositor
    stacks them by index.
    """
    id: str = Field(default_factory=new_item_id, description="Track identifier")
    kind: TrackKind = Field(default=TrackKind.VIDEO, description="Track type")
    name: str = Field(default="", description="Track name")
    items: list[TimelineItem] = Field(default_factory=list)
    is_muted: bool = Field(default=False)
    is_hidden: bool = Field(default=False)

    def sorted_items(self) -> list[TimelineItem]:
        """Items ordered by start time; non-finite starts sort last."""
        return sorted(self.items, key=_start_order_key)

    def get_item(self, item_id: str) -> TimelineItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def index_of(self, item_id: str) -> int:
        """Position of an item in start order, or -1."""
        for i, item in enumerate(self.sorted_items()):
            if item.id == item_id:
                return i
        return -1

    def neighbors(
        self, item_id: str
    ) -> tuple[TimelineItem | None, TimelineItem | None]:
        """Return the (previous, next) items around ``item_id`` in start order."""
        ordered = self.sorted_items()
        for i, item in enumerate(ordered):
            if item.id == item_id:
                prev_item = ordered[i - 1] if i > 0 else None
                next_item = ordered[i + 1] if i + 1 < len(ordered) else None
                return prev_item, next_item
        return None, None

    @property
    def end_time(self) -> float:
        """End of the last item on the track (0 when empty)."""
        if not self.items:
            return 0.0
        return max(item.end for item in self.items)


# =============================================================================
# TOP-LEVEL TIMELINE
# =============================================================================


class Timeline(BaseModel):
    """
    Root of the editing model: an ordered list of tracks.

    Later tracks render above earlier ones.
    """
    name: str = Field(default="Untitled Project", description="Timeline name")
    tracks: list[Track] = Field(default_factory=list)
    duration: float = Field(default=30.0, description="Playback length (seconds)")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def content_end(self) -> float:
        """End of the last item across all tracks."""
        if not self.tracks:
            return 0.0
        return max(track.end_time for track in self.tracks)

    def tracks_of_kind(self, kind: TrackKind) -> list[Track]:
        return [t for t in self.tracks if t.kind == kind]

    def find_item(self, item_id: str) -> tuple[int, Track, TimelineItem] | None:
        """
        Find an item anywhere in the timeline.

        Returns (track_index, track, item) or None.
        """
        for index, track in enumerate(self.tracks):
            item = track.get_item(item_id)
            if item is not None:
                return index, track, item
        return None
