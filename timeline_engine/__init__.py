from timeline_engine.models.render_models import (
    RenderLayer,
    ResolvedEntry,
    Role,
    TransitionParams,
    TransitionPreview,
)
from timeline_engine.models.timeline_models import (
    ClipKind,
    Timeline,
    TimelineItem,
    Track,
    TrackKind,
    Transition,
    TransitionDirection,
    TransitionTiming,
    TransitionType,
)
from timeline_engine.operators.active_set import resolve
from timeline_engine.operators.compositor import compose_frame
from timeline_engine.operators.playback_clock import PlaybackClock
from timeline_engine.operators.transition_engine import transition_parameters

__all__ = [
    "ClipKind",
    "PlaybackClock",
    "RenderLayer",
    "ResolvedEntry",
    "Role",
    "Timeline",
    "TimelineItem",
    "Track",
    "TrackKind",
    "Transition",
    "TransitionDirection",
    "TransitionParams",
    "TransitionPreview",
    "TransitionTiming",
    "TransitionType",
    "compose_frame",
    "resolve",
    "transition_parameters",
]
