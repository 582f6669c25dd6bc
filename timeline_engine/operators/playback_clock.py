"""
Cooperative playback clock.

The host calls ``tick()`` on its own timer (every ``tick_interval`` seconds
by default). There is no background thread; stopping playback is simply not
calling ``tick`` any more.
"""

from __future__ import annotations

import logging
import math

from timeline_engine import config
from timeline_engine.models.timeline_models import Transition
from timeline_engine.utils.animation_engine import looping_progress


logger = logging.getLogger(__name__)


class PlaybackClock:
    def __init__(self, duration: float | None = None, tick_interval: float | None = None):
        self.duration = config.DEFAULT_TIMELINE_DURATION if duration is None else duration
        self.tick_interval = (
            config.TICK_INTERVAL_SECONDS if tick_interval is None else tick_interval
        )
        self.current_time = 0.0
        self.is_playing = False

    def play(self) -> None:
        self.is_playing = True

    def pause(self) -> None:
        self.is_playing = False

    def toggle(self) -> bool:
        self.is_playing = not self.is_playing
        return self.is_playing

    def seek(self, t: float) -> float:
        if not math.isfinite(t):
            logger.debug(f"Ignoring seek to non-finite time {t}")
            return self.current_time
        self.current_time = max(0.0, t)
        return self.current_time

    def set_duration(self, duration: float) -> None:
        if not math.isfinite(duration) or duration < 0:
            logger.debug(f"Ignoring invalid timeline duration {duration}")
            return
        self.duration = duration

    def tick(self, elapsed: float | None = None) -> float:
        """
        Advance one step while playing.

        Once the playhead has reached the end of the timeline, the next tick
        stops playback and rewinds to 0 instead of advancing.
        """
        if not self.is_playing:
            return self.current_time

        if self.current_time >= self.duration:
            logger.debug(f"Reached end of timeline at {self.current_time}; stopping")
            self.is_playing = False
            self.current_time = 0.0
            return self.current_time

        step = self.tick_interval if elapsed is None else elapsed
        if math.isfinite(step) and step > 0:
            self.current_time += step
        return self.current_time


def preview_progress(elapsed: float, transition: Transition) -> float:
    """Looping progress for a hover preview of ``transition``."""
    duration = transition.duration if transition.duration > 0 else 1.0
    return looping_progress(elapsed, duration)
