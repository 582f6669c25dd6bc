import pytest

from timeline_engine.models.timeline_models import Timeline, TimelineItem, Track, TrackKind
from timeline_engine.operators.gesture_operator import (
    IDLE,
    Dragging,
    Idle,
    ResizeEdge,
    Resizing,
    Rotating,
    begin_drag,
    begin_resize,
    begin_rotate,
    end_gesture,
    rotation_for_pointer,
    update_gesture,
    update_rotation,
)
from timeline_engine.utils.geometry import Bounds


@pytest.fixture
def timeline():
    return Timeline(tracks=[
        Track(id="t1", kind=TrackKind.VIDEO, items=[
            TimelineItem(id="a", start=0, duration=4),
            TimelineItem(id="b", start=6, duration=4),
        ]),
    ])


def _item(timeline, item_id):
    return timeline.find_item(item_id)[2]


class TestDrag:
    def test_drag_applies_from_origin(self, timeline):
        state = begin_drag(_item(timeline, "b"))
        assert state == Dragging("b", 6)

        update_gesture(state, timeline, 1.0)
        update_gesture(state, timeline, 1.5)

        assert _item(timeline, "b").start == 7.5

    def test_drag_clamped(self, timeline):
        state = begin_drag(_item(timeline, "b"))
        update_gesture(state, timeline, -10)

        assert _item(timeline, "b").start == 4

    def test_locked_item_stays_idle(self, timeline):
        item = _item(timeline, "b")
        item.is_locked = True

        assert begin_drag(item) == IDLE
        assert begin_resize(item, ResizeEdge.END) == IDLE
        assert begin_rotate(item, Bounds(0, 0, 10, 10)) == IDLE

    def test_removed_target_falls_back_to_idle(self, timeline):
        state = begin_drag(_item(timeline, "b"))
        timeline.tracks[0].items.pop()

        assert isinstance(update_gesture(state, timeline, 1), Idle)


class TestResize:
    def test_resize_start(self, timeline):
        state = begin_resize(_item(timeline, "b"), "start")
        assert state == Resizing("b", ResizeEdge.START, 6)

        update_gesture(state, timeline, -1)

        item = _item(timeline, "b")
        assert (item.start, item.duration) == (5, 5)

    def test_resize_end(self, timeline):
        state = begin_resize(_item(timeline, "a"), ResizeEdge.END)

        update_gesture(state, timeline, 5)

        assert _item(timeline, "a").duration == 6


class TestRotate:
    def test_rotation_for_pointer(self):
        assert rotation_for_pointer((0, 0), (0, 10)) == pytest.approx(0)
        assert rotation_for_pointer((0, 0), (10, 0)) == pytest.approx(-90)
        assert rotation_for_pointer((0, 0), (-10, 0)) == pytest.approx(90)

    def test_pivot_from_bounds(self, timeline):
        state = begin_rotate(_item(timeline, "a"), Bounds(x=100, y=50, width=200, height=100))
        assert state == Rotating("a", (200, 100))

        degrees = update_rotation(state, timeline, (200, 150))

        assert degrees == pytest.approx(0)
        assert _item(timeline, "a").payload["rotation"] == pytest.approx(0)

    def test_update_gesture_ignores_rotation(self, timeline):
        state = begin_rotate(_item(timeline, "a"), Bounds(0, 0, 10, 10))
        assert update_gesture(state, timeline, 3) is state
        assert _item(timeline, "a").start == 0


class TestEndGesture:
    def test_end_returns_idle(self, timeline):
        state = begin_drag(_item(timeline, "a"))
        assert end_gesture(state) == IDLE
        assert update_rotation(IDLE, timeline, (0, 0)) is None
