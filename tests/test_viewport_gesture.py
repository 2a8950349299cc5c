"""Tests for resobox.viewport.gesture."""

from __future__ import annotations

import pytest

from resobox.viewport import (
    TIME_SCALE_LABELS,
    DragMode,
    ViewportGesture,
    ViewportWindow,
    scale_ticks,
)

TRACK = 200.0  # 20 boxes -> 10 units per box


@pytest.fixture
def gesture():
    return ViewportGesture(ViewportWindow(start=0, count=10, total=20))


class TestModeSelection:
    def test_start_edge(self, gesture):
        assert gesture.begin(5.0, TRACK) is DragMode.START_EDGE

    def test_end_edge(self, gesture):
        assert gesture.begin(95.0, TRACK) is DragMode.END_EDGE

    def test_body(self, gesture):
        assert gesture.begin(50.0, TRACK) is DragMode.BODY

    def test_empty_sequence(self):
        g = ViewportGesture(ViewportWindow(total=0))
        assert g.begin(5.0, TRACK) is DragMode.NONE

    def test_zero_width_track(self, gesture):
        assert gesture.begin(5.0, 0.0) is DragMode.NONE

    def test_mode_is_fixed_during_drag(self, gesture):
        gesture.begin(50.0, TRACK)
        gesture.drag(5.0)
        assert gesture.mode is DragMode.BODY


class TestDrag:
    def test_body_moves(self, gesture):
        gesture.begin(50.0, TRACK)
        assert gesture.drag(80.0).start == 3

    def test_half_step_rounds_away_from_zero(self, gesture):
        gesture.begin(50.0, TRACK)
        assert gesture.drag(75.0).start == 3

    def test_drags_do_not_accumulate(self, gesture):
        gesture.begin(50.0, TRACK)
        gesture.drag(80.0)
        gesture.drag(90.0)
        assert gesture.drag(60.0).start == 1

    def test_end_edge_resizes(self, gesture):
        gesture.begin(95.0, TRACK)
        w = gesture.drag(135.0)
        assert (w.start, w.count) == (0, 14)

    def test_start_edge_resizes(self):
        g = ViewportGesture(ViewportWindow(start=0, count=10, total=20))
        g.begin(5.0, TRACK)
        w = g.drag(45.0)
        assert (w.start, w.count) == (4, 6)

    def test_body_clamped_at_track_end(self, gesture):
        gesture.begin(50.0, TRACK)
        assert gesture.drag(1000.0).start == 10

    def test_drag_after_end_is_noop(self, gesture):
        gesture.begin(50.0, TRACK)
        gesture.drag(80.0)
        released = gesture.end()
        assert gesture.mode is DragMode.NONE
        assert gesture.drag(150.0) == released

    def test_next_gesture_starts_from_released_window(self, gesture):
        gesture.begin(50.0, TRACK)
        gesture.drag(80.0)
        gesture.end()
        # window is now [3, 13): body sits at 30..130
        assert gesture.begin(80.0, TRACK) is DragMode.BODY
        assert gesture.drag(100.0).start == 5


class TestScaleTicks:
    def test_labels_in_order(self):
        ticks = scale_ticks(ViewportWindow(total=24))
        assert [t.label for t in ticks] == list(TIME_SCALE_LABELS)
        assert ticks[0].position == 0.0
        assert ticks[-1].position == 1.0

    def test_in_range_flags(self):
        ticks = scale_ticks(ViewportWindow(start=0, count=10, total=24))
        assert sum(t.in_range for t in ticks) == 6
        assert ticks[0].in_range
        assert not ticks[-1].in_range

    def test_empty_sequence_collapses_to_zero(self):
        ticks = scale_ticks(ViewportWindow(total=0))
        assert all(t.in_range for t in ticks)
