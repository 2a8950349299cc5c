"""Drag gestures over the viewport track, and the time-scale ticks under it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from resobox.rounding import round_half_away
from resobox.viewport.window import ViewportWindow

EDGE_HIT_ZONE = 16.0

TIME_SCALE_LABELS: tuple[str, ...] = (
    "1M", "1W", "3D", "1D", "12H", "4H", "1H", "30m", "15m", "5m", "1m", "30s", "1s",
)


class DragMode(str, Enum):
    NONE = "none"
    BODY = "body"
    START_EDGE = "start_edge"
    END_EDGE = "end_edge"


class ViewportGesture:
    """One drag interaction at a time over a viewport track.

    The mode (move body / resize start edge / resize end edge) is chosen in
    :meth:`begin` from where the touch lands relative to the window's edges
    and stays fixed until :meth:`end`.  Every :meth:`drag` is applied to the
    window captured at :meth:`begin`, so intermediate updates never
    accumulate rounding error.

    Parameters
    ----------
    window : ViewportWindow
        Window the gesture starts from.
    edge_hit_zone : float
        Width, in track units, of the grab zone inside each window edge.
    """

    def __init__(self, window: ViewportWindow, edge_hit_zone: float = EDGE_HIT_ZONE) -> None:
        self._window = window
        self._edge_hit_zone = edge_hit_zone
        self._mode = DragMode.NONE
        self._origin_x = 0.0
        self._unit_width = 0.0
        self._initial: Optional[ViewportWindow] = None

    @property
    def window(self) -> ViewportWindow:
        return self._window

    @property
    def mode(self) -> DragMode:
        return self._mode

    def begin(self, x: float, track_width: float) -> DragMode:
        """Start a gesture at track coordinate *x* and pick its mode."""
        window = self._window
        if window.total == 0 or track_width <= 0:
            self._mode = DragMode.NONE
            return self._mode

        unit_width = track_width / window.total
        local_x = x - window.start * unit_width
        selection_width = window.count * unit_width

        if local_x < self._edge_hit_zone:
            self._mode = DragMode.START_EDGE
        elif local_x > selection_width - self._edge_hit_zone:
            self._mode = DragMode.END_EDGE
        else:
            self._mode = DragMode.BODY

        self._origin_x = x
        self._unit_width = unit_width
        self._initial = window
        return self._mode

    def drag(self, x: float) -> ViewportWindow:
        """Move the pointer to *x*; returns the updated window."""
        if self._mode is DragMode.NONE or self._initial is None:
            return self._window

        steps = round_half_away((x - self._origin_x) / self._unit_width)
        if self._mode is DragMode.BODY:
            self._window = self._initial.move(steps)
        elif self._mode is DragMode.START_EDGE:
            self._window = self._initial.resize_start(steps)
        else:
            self._window = self._initial.resize_end(steps)
        return self._window

    def end(self) -> ViewportWindow:
        """Release the pointer; the next gesture picks a fresh mode."""
        self._mode = DragMode.NONE
        self._initial = None
        return self._window


@dataclass(frozen=True)
class ScaleTick:
    label: str
    position: float  # 0.0 (left) .. 1.0 (right)
    in_range: bool


def scale_ticks(window: ViewportWindow) -> list[ScaleTick]:
    """Time-scale labels spread evenly under the track, flagged when the
    window covers them."""
    last = len(TIME_SCALE_LABELS) - 1
    ticks = []
    for i, label in enumerate(TIME_SCALE_LABELS):
        position = i / last
        label_value = int(position * window.total)
        ticks.append(
            ScaleTick(
                label=label,
                position=position,
                in_range=window.start <= label_value <= window.end,
            )
        )
    return ticks
