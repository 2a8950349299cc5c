"""Draggable, resizable window over the ranked boxes."""

from .gesture import (
    EDGE_HIT_ZONE,
    TIME_SCALE_LABELS,
    DragMode,
    ScaleTick,
    ViewportGesture,
    scale_ticks,
)
from .window import DEFAULT_VISIBLE_COUNT, MIN_VISIBLE_COUNT, ViewportWindow

__all__ = [
    "DEFAULT_VISIBLE_COUNT",
    "EDGE_HIT_ZONE",
    "MIN_VISIBLE_COUNT",
    "TIME_SCALE_LABELS",
    "DragMode",
    "ScaleTick",
    "ViewportGesture",
    "ViewportWindow",
    "scale_ticks",
]
