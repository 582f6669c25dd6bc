"""
Render-side value types produced by the engine.

The resolver emits ResolvedEntry values, the transition engine emits
TransitionParams and the compositor wraps both into RenderLayer values for
the rendering surface. Clip paths and filters carry a ``to_css()`` form for
DOM-based surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from timeline_engine.models.timeline_models import TimelineItem, Transition


def _fmt(value: float) -> str:
    rounded = round(value, 4)
    if rounded == 0:
        rounded = 0.0
    return f"{rounded:g}"


# =============================================================================
# ENUMS
# =============================================================================


class Role(str, Enum):
    """Whether a resolved entry is the departing or the current layer."""
    MAIN = "main"
    OUTGOING = "outgoing"


class BlendMode(str, Enum):
    NORMAL = "normal"
    ADDITIVE = "plus-lighter"


# =============================================================================
# RESOLVER OUTPUT
# =============================================================================


@dataclass(frozen=True)
class TransitionPreview:
    """Hover-preview override: use ``transition`` for ``target_id`` only."""
    transition: Transition
    target_id: str


@dataclass(frozen=True)
class ResolvedEntry:
    item: TimelineItem
    role: Role
    track_index: int
    transition: Transition | None = None
    progress: float | None = None

    @property
    def z_index_base(self) -> int:
        return self.track_index * 10

    @property
    def is_transitioning(self) -> bool:
        return self.transition is not None and self.progress is not None


# =============================================================================
# CLIP PATHS
# =============================================================================


@dataclass(frozen=True)
class InsetClip:
    """Rectangular clip; each edge is inset by a percentage of the layer."""
    top: float
    right: float
    bottom: float
    left: float

    @classmethod
    def uniform(cls, amount: float) -> InsetClip:
        return cls(amount, amount, amount, amount)

    @property
    def visible_fraction(self) -> float:
        width = max(0.0, 100 - self.left - self.right)
        height = max(0.0, 100 - self.top - self.bottom)
        return (width * height) / 10000

    def to_css(self) -> str:
        return (
            f"inset({_fmt(self.top)}% {_fmt(self.right)}% "
            f"{_fmt(self.bottom)}% {_fmt(self.left)}%)"
        )


@dataclass(frozen=True)
class CircleClip:
    radius: float
    center_x: float = 50.0
    center_y: float = 50.0

    def to_css(self) -> str:
        return (
            f"circle({_fmt(self.radius)}% at "
            f"{_fmt(self.center_x)}% {_fmt(self.center_y)}%)"
        )


@dataclass(frozen=True)
class PolygonClip:
    points: tuple[tuple[float, float], ...]

    @property
    def area(self) -> float:
        """Shoelace area in percent-squared units."""
        total = 0.0
        count = len(self.points)
        for i in range(count):
            x1, y1 = self.points[i]
            x2, y2 = self.points[(i + 1) % count]
            total += x1 * y2 - x2 * y1
        return abs(total) / 2

    def to_css(self) -> str:
        coords = ", ".join(f"{_fmt(x)}% {_fmt(y)}%" for x, y in self.points)
        return f"polygon({coords})"


ClipPath = Union[InsetClip, CircleClip, PolygonClip]


# =============================================================================
# FILTERS & PARAMETERS
# =============================================================================


@dataclass(frozen=True)
class VisualFilter:
    blur_px: float | None = None
    brightness: float | None = None
    contrast: float | None = None
    sepia: float | None = None
    saturate: float | None = None
    hue_rotate_deg: float | None = None

    def to_css(self) -> str:
        parts: list[str] = []
        if self.blur_px is not None:
            parts.append(f"blur({_fmt(self.blur_px)}px)")
        if self.brightness is not None:
            parts.append(f"brightness({_fmt(self.brightness)})")
        if self.contrast is not None:
            parts.append(f"contrast({_fmt(self.contrast)})")
        if self.sepia is not None:
            parts.append(f"sepia({_fmt(self.sepia)})")
        if self.saturate is not None:
            parts.append(f"saturate({_fmt(self.saturate)})")
        if self.hue_rotate_deg is not None:
            parts.append(f"hue-rotate({_fmt(self.hue_rotate_deg)}deg)")
        return " ".join(parts)


@dataclass(frozen=True)
class TransitionParams:
    """
    Rendering parameters for one layer during a blend.

    Every field is optional; ``None`` means "leave the layer unmodified" for
    that property. An instance with all fields unset is a static cut.
    """
    opacity: float | None = None
    translate_percent: tuple[float, float] | None = None
    scale: float | None = None
    rotate_deg: float | None = None
    clip_path: ClipPath | None = None
    filter: VisualFilter | None = None
    blend_mode: BlendMode | None = None
    z_index_hint: int | None = None

    @property
    def is_empty(self) -> bool:
        return self == TransitionParams()

    def to_css(self) -> dict[str, str | float | int]:
        css: dict[str, str | float | int] = {}
        if self.opacity is not None:
            css["opacity"] = self.opacity

        transforms: list[str] = []
        if self.translate_percent is not None:
            x, y = self.translate_percent
            transforms.append(f"translate({_fmt(x)}%, {_fmt(y)}%)")
        if self.rotate_deg is not None:
            transforms.append(f"rotate({_fmt(self.rotate_deg)}deg)")
        if self.scale is not None:
            transforms.append(f"scale({_fmt(self.scale)})")
        if transforms:
            css["transform"] = " ".join(transforms)

        if self.clip_path is not None:
            css["clip-path"] = self.clip_path.to_css()
        if self.filter is not None:
            css["filter"] = self.filter.to_css()
        if self.blend_mode is not None:
            css["mix-blend-mode"] = self.blend_mode.value
        if self.z_index_hint is not None:
            css["z-index"] = self.z_index_hint
        return css


# =============================================================================
# COMPOSITOR & MEDIA OUTPUT
# =============================================================================


@dataclass(frozen=True)
class RenderLayer:
    entry: ResolvedEntry
    params: TransitionParams = field(default_factory=TransitionParams)
    z_index: int = 0

    @property
    def item(self) -> TimelineItem:
        return self.entry.item

    @property
    def role(self) -> Role:
        return self.entry.role


@dataclass(frozen=True)
class MediaDirective:
    """What the media-playback collaborator should do with one element."""
    item_id: str
    media_time: float
    playback_rate: float
    volume: float
    muted: bool
    playing: bool
