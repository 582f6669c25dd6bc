"""Frame compositor: active set + transition params + stacking order."""

from __future__ import annotations

from typing import Sequence

from timeline_engine.models.render_models import (
    RenderLayer,
    ResolvedEntry,
    Role,
    TransitionParams,
    TransitionPreview,
)
from timeline_engine.models.timeline_models import ClipKind, Track
from timeline_engine.operators.active_set import resolve
from timeline_engine.operators.transition_engine import transition_parameters


Z_INDEX_SELECTED = 1000
Z_INDEX_BACKGROUND = 1
Z_INDEX_ITEM_OFFSET = 5
Z_INDEX_TEXT_BONUS = 2


def layer_params(entry: ResolvedEntry) -> TransitionParams:
    if not entry.is_transitioning:
        return TransitionParams()
    return transition_parameters(
        entry.transition.type,
        entry.role,
        entry.progress,
        entry.transition.direction,
    )


def z_index_for(
    entry: ResolvedEntry,
    params: TransitionParams,
    selected_item_id: str | None = None,
) -> int:
    """
    Stacking order of one layer.

    Tracks stack by index; text sits above media on the same track and the
    outgoing layer of a blend sits just below its incoming layer. Background
    items stay at the bottom. A transition's z hint replaces the computed
    value and selection overrides everything.
    """
    item = entry.item
    outgoing = entry.role == Role.OUTGOING

    if item.is_background:
        z_index = Z_INDEX_BACKGROUND - 1 if outgoing else Z_INDEX_BACKGROUND
    else:
        z_index = entry.z_index_base + Z_INDEX_ITEM_OFFSET
        if item.kind == ClipKind.TEXT:
            z_index += Z_INDEX_TEXT_BONUS
        if outgoing:
            z_index -= 1

    if params.z_index_hint is not None:
        z_index = params.z_index_hint

    if selected_item_id is not None and item.id == selected_item_id:
        z_index = Z_INDEX_BACKGROUND if item.is_background else Z_INDEX_SELECTED
    return z_index


def compose_frame(
    tracks: Sequence[Track],
    t: float,
    selected_item_id: str | None = None,
    preview: TransitionPreview | None = None,
) -> list[RenderLayer]:
    """Resolve ``t`` and return render layers sorted bottom to top."""
    layers: list[RenderLayer] = []
    for entry in resolve(tracks, t, preview=preview):
        params = layer_params(entry)
        layers.append(RenderLayer(
            entry=entry,
            params=params,
            z_index=z_index_for(entry, params, selected_item_id),
        ))
    # sorted() is stable, so equal z keeps resolution order
    return sorted(layers, key=lambda layer: layer.z_index)
