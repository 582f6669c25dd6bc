"""
Transition parameter engine.

Maps (family, role, progress, direction) to the rendering parameters of one
layer. Every family function receives both roles and returns params for the
one asked for; families that only animate the incoming layer return empty
params for the outgoing role.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from timeline_engine.models.render_models import (
    BlendMode,
    CircleClip,
    InsetClip,
    PolygonClip,
    Role,
    TransitionParams,
    VisualFilter,
)
from timeline_engine.models.timeline_models import TransitionDirection, TransitionType
from timeline_engine.utils.animation_engine import bell, clamp, interpolate
from timeline_engine.utils.geometry import (
    clock_sweep_points,
    direction_vector,
    is_vertical,
    plus_points,
)


logger = logging.getLogger(__name__)

Direction = TransitionDirection | str | None
FamilyFn = Callable[[Role, float, Direction], TransitionParams]

STATIC = TransitionParams()


def _fade(role: Role, p: float) -> float:
    return 1 - p if role == Role.OUTGOING else p


def _translate(direction: Direction, amount: float) -> tuple[float, float]:
    dx, dy = direction_vector(direction)
    return (dx * amount, dy * amount)


# =============================================================================
# DISSOLVES
# =============================================================================


def _dissolve(role: Role, p: float, direction: Direction) -> TransitionParams:
    return TransitionParams(opacity=_fade(role, p))


def _additive_dissolve(role: Role, p: float, direction: Direction) -> TransitionParams:
    return TransitionParams(opacity=_fade(role, p), blend_mode=BlendMode.ADDITIVE)


def _non_additive_dissolve(role: Role, p: float, direction: Direction) -> TransitionParams:
    return TransitionParams(opacity=_fade(role, p) ** 2)


def _dip_opacity(role: Role, p: float) -> float:
    if role == Role.OUTGOING:
        return 1 - 2 * p if p < 0.5 else 0.0
    return 2 * (p - 0.5) if p > 0.5 else 0.0


def _dip_to_black(role: Role, p: float, direction: Direction) -> TransitionParams:
    return TransitionParams(opacity=_dip_opacity(role, p))


def _dip_to_white(role: Role, p: float, direction: Direction) -> TransitionParams:
    brightness = 1 + 2 * p if role == Role.OUTGOING else 1 + 2 * (1 - p)
    return TransitionParams(
        opacity=_dip_opacity(role, p),
        filter=VisualFilter(brightness=brightness),
    )


def _morph_cut(role: Role, p: float, direction: Direction) -> TransitionParams:
    return TransitionParams(
        opacity=_fade(role, p),
        filter=VisualFilter(blur_px=bell(p) * 5),
    )


def _ripple_dissolve(role: Role, p: float, direction: Direction) -> TransitionParams:
    return TransitionParams(
        opacity=_fade(role, p),
        scale=1 + 0.05 * math.sin(p * 4 * math.pi),
        filter=VisualFilter(blur_px=2 * bell(p)),
    )


# =============================================================================
# MOTION
# =============================================================================


def _slide(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(z_index_hint=10)
    return TransitionParams(
        translate_percent=_translate(direction, 100 * (1 - p)),
        z_index_hint=20,
    )


def _push(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(translate_percent=_translate(direction, -100 * p))
    return TransitionParams(translate_percent=_translate(direction, 100 * (1 - p)))


def _whip(role: Role, p: float, direction: Direction) -> TransitionParams:
    pushed = _push(role, p, direction)
    return TransitionParams(
        translate_percent=pushed.translate_percent,
        filter=VisualFilter(blur_px=bell(p) * 20),
    )


def _band_slide(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    return TransitionParams(translate_percent=_translate(direction, 100 * (1 - p)))


def _stack(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(
            scale=1 - 0.05 * p,
            filter=VisualFilter(brightness=1 - 0.5 * p),
        )
    return TransitionParams(translate_percent=_translate(direction, 100 * (1 - p)))


def _smooth_wipe(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(translate_percent=(-50 * p, 0.0), opacity=1 - p)
    return TransitionParams(translate_percent=(50 * (1 - p), 0.0), opacity=p)


def _film_roll(role: Role, p: float, direction: Direction) -> TransitionParams:
    sepia = VisualFilter(sepia=0.3)
    if role == Role.OUTGOING:
        return TransitionParams(translate_percent=(0.0, -100 * p), filter=sepia)
    return TransitionParams(translate_percent=(0.0, 100 * (1 - p)), filter=sepia)


def _spin(role: Role, p: float, direction: Direction) -> TransitionParams:
    rotate = -180 * p if role == Role.OUTGOING else 180 * (1 - p)
    return TransitionParams(
        rotate_deg=rotate,
        scale=1 - 0.5 * bell(p),
        opacity=_fade(role, p),
    )


# =============================================================================
# SHAPES & WIPES
# =============================================================================


def _split(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    closed = 50 * (1 - p)
    if is_vertical(direction):
        clip = InsetClip(0, closed, 0, closed)
    else:
        clip = InsetClip(closed, 0, closed, 0)
    return TransitionParams(clip_path=clip)


def _barn_doors(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    closed = 50 * (1 - p)
    if is_vertical(direction):
        clip = InsetClip(closed, 0, closed, 0)
    else:
        clip = InsetClip(0, closed, 0, closed)
    return TransitionParams(clip_path=clip)


def _iris_round(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    return TransitionParams(clip_path=CircleClip(radius=75 * p))


def _iris_box(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    return TransitionParams(clip_path=InsetClip.uniform(50 * (1 - p)))


def _iris_diamond(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    r = 50 * p
    return TransitionParams(clip_path=PolygonClip((
        (50.0, 50 - r),
        (50 + r, 50.0),
        (50.0, 50 + r),
        (50 - r, 50.0),
    )))


def _iris_cross(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    return TransitionParams(clip_path=PolygonClip(plus_points(interpolate(20, 100, p))))


def _wipe(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    hidden = 100 - 100 * p
    if direction in (TransitionDirection.RIGHT, TransitionDirection.RIGHT.value):
        clip = InsetClip(0, hidden, 0, 0)
    elif direction in (TransitionDirection.UP, TransitionDirection.UP.value):
        clip = InsetClip(hidden, 0, 0, 0)
    elif direction in (TransitionDirection.DOWN, TransitionDirection.DOWN.value):
        clip = InsetClip(0, 0, hidden, 0)
    else:
        clip = InsetClip(0, 0, 0, hidden)
    return TransitionParams(clip_path=clip)


def _clock_wipe(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    return TransitionParams(clip_path=PolygonClip(clock_sweep_points(p * 2 * math.pi)))


def _page_peel(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return STATIC
    reach = 200 * p
    return TransitionParams(
        clip_path=PolygonClip(((0.0, 0.0), (reach, 0.0), (0.0, reach))),
        z_index_hint=50,
    )


# =============================================================================
# ZOOMS
# =============================================================================


def _zoom_in(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(opacity=1 - p, scale=1 + p)
    return TransitionParams(opacity=p, scale=p)


def _zoom_out(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(opacity=1 - p, scale=1 - p)
    return TransitionParams(opacity=p, scale=2 - p)


def _cross_zoom(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(scale=1 + 4 * p, opacity=1 - p)
    return TransitionParams(scale=0.2 + 0.8 * p, opacity=p)


def _flash_zoom_in(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(
            scale=1 + p,
            opacity=1 - p,
            filter=VisualFilter(brightness=1 + 5 * p),
        )
    return TransitionParams(
        scale=2 - p,
        opacity=p,
        filter=VisualFilter(brightness=1 + 5 * (1 - p)),
    )


def _flash_zoom_out(role: Role, p: float, direction: Direction) -> TransitionParams:
    if role == Role.OUTGOING:
        return TransitionParams(
            scale=1 - 0.5 * p,
            opacity=1 - p,
            filter=VisualFilter(brightness=1 + 5 * p),
        )
    return TransitionParams(
        scale=0.5 + 0.5 * p,
        opacity=p,
        filter=VisualFilter(brightness=1 + 5 * (1 - p)),
    )


def _zoom_blur(role: Role, p: float, direction: Direction) -> TransitionParams:
    scale = 1 + 2 * p if role == Role.OUTGOING else 3 - 2 * p
    return TransitionParams(
        scale=scale,
        opacity=_fade(role, p),
        filter=VisualFilter(blur_px=10 * bell(p)),
    )


# =============================================================================
# STYLIZED
# =============================================================================


def _rgb_split(role: Role, p: float, direction: Direction) -> TransitionParams:
    return TransitionParams(
        opacity=_fade(role, p),
        scale=1 + 0.1 * bell(p),
        filter=VisualFilter(hue_rotate_deg=360 * p),
    )


def _film_burn(role: Role, p: float, direction: Direction) -> TransitionParams:
    b = bell(p)
    return TransitionParams(
        opacity=_fade(role, p),
        scale=1 + 0.1 * b,
        filter=VisualFilter(
            brightness=1 + 3 * b,
            sepia=0.5 * b,
            saturate=1 + b,
            contrast=1 - 0.2 * b,
        ),
    )


FAMILIES: dict[TransitionType, FamilyFn] = {
    TransitionType.DISSOLVE: _dissolve,
    TransitionType.FILM_DISSOLVE: _dissolve,
    TransitionType.GRADIENT_WIPE: _dissolve,
    TransitionType.ADDITIVE_DISSOLVE: _additive_dissolve,
    TransitionType.NON_ADDITIVE_DISSOLVE: _non_additive_dissolve,
    TransitionType.DIP_TO_BLACK: _dip_to_black,
    TransitionType.FADE_DISSOLVE: _dip_to_black,
    TransitionType.DIP_TO_WHITE: _dip_to_white,
    TransitionType.MORPH_CUT: _morph_cut,
    TransitionType.RIPPLE_DISSOLVE: _ripple_dissolve,
    TransitionType.SLIDE: _slide,
    TransitionType.PUSH: _push,
    TransitionType.WHIP: _whip,
    TransitionType.BAND_SLIDE: _band_slide,
    TransitionType.STACK: _stack,
    TransitionType.SMOOTH_WIPE: _smooth_wipe,
    TransitionType.FILM_ROLL: _film_roll,
    TransitionType.SPIN: _spin,
    TransitionType.SPLIT: _split,
    TransitionType.BARN_DOORS: _barn_doors,
    TransitionType.IRIS_ROUND: _iris_round,
    TransitionType.CIRCLE: _iris_round,
    TransitionType.IRIS_BOX: _iris_box,
    TransitionType.IRIS_DIAMOND: _iris_diamond,
    TransitionType.IRIS_CROSS: _iris_cross,
    TransitionType.WIPE: _wipe,
    TransitionType.CLOCK_WIPE: _clock_wipe,
    TransitionType.RADIAL_WIPE: _clock_wipe,
    TransitionType.PAGE_PEEL: _page_peel,
    TransitionType.ZOOM_IN: _zoom_in,
    TransitionType.ZOOM_OUT: _zoom_out,
    TransitionType.CROSS_ZOOM: _cross_zoom,
    TransitionType.FLASH_ZOOM_IN: _flash_zoom_in,
    TransitionType.FLASH_ZOOM_OUT: _flash_zoom_out,
    TransitionType.ZOOM_BLUR: _zoom_blur,
    TransitionType.RGB_SPLIT: _rgb_split,
    TransitionType.FILM_BURN: _film_burn,
}


def transition_parameters(
    transition_type: TransitionType | str | None,
    role: Role,
    progress: float,
    direction: Direction = None,
) -> TransitionParams:
    """
    Evaluate one family for one layer at ``progress``.

    Progress is clamped to [0, 1] (NaN counts as 0). Unknown families,
    ``none`` and ``glitch`` produce empty params, i.e. a static cut.
    """
    try:
        key = TransitionType(transition_type)
    except ValueError:
        logger.debug(f"Unknown transition family {transition_type!r}; using a cut")
        return STATIC

    family = FAMILIES.get(key)
    if family is None:
        return STATIC

    p = 0.0 if math.isnan(progress) else clamp(progress)
    return family(Role(role), p, direction)
