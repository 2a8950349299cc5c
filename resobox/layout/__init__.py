"""Ranking, corner resolution and the fractal builder."""

from .builder import LayoutNode, build_layout, decay_sizes
from .corners import Corner, CornerResolution, resolve_corner, resolve_corner_fallback
from .line_chart import line_series
from .projection import THREE_D, TWO_D, Projection, get_projection
from .ranking import RankedSequence, rank

__all__ = [
    "Corner",
    "CornerResolution",
    "LayoutNode",
    "Projection",
    "RankedSequence",
    "THREE_D",
    "TWO_D",
    "build_layout",
    "decay_sizes",
    "get_projection",
    "line_series",
    "rank",
    "resolve_corner",
    "resolve_corner_fallback",
]
