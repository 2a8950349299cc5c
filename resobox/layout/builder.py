"""Recursive layout builder — sizes and corner-flush positions per box.

Each box is nested inside its ranked predecessor.  Because box ``i`` only
depends on box ``i - 1``, the "recursion" is computed as a left-to-right
fold over the ranked sequence; the resulting nodes form a flat arena
indexed by rank.

Coordinate conventions
----------------------
2D
    Screen space, x to the right and y downwards.  A node's position is
    the top-left corner of its square; the root occupies ``[0, base]²``.
    Children are always right-aligned with their parent, and sit in its
    top-right (upper) or bottom-right (lower) corner.
3D
    World space, y up.  A node's position is the centre of its cube; the
    root sits at the origin.  Children share the parent's ``+x``/``+z``
    corner and its top (upper) or bottom (lower) face, nudged outwards by
    the projection epsilon.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from resobox.layout.corners import Corner, resolve_corner
from resobox.layout.projection import TWO_D, Projection, get_projection
from resobox.layout.ranking import RankedSequence
from resobox.model.box import Box

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutNode:
    """Geometry for one ranked box.

    ``offset`` is relative to the parent (the zero vector for the root);
    ``position`` is the accumulated absolute position.
    """

    index: int
    size: float
    offset: tuple[float, ...]
    position: tuple[float, ...]
    corner: Corner
    is_first_different: bool
    box: Box

    @property
    def depth(self) -> int:
        return self.index

    @property
    def is_root(self) -> bool:
        return self.index == 0

    @property
    def is_positive(self) -> bool:
        return self.box.is_positive


def decay_sizes(base_size: float, decay: float, n: int) -> np.ndarray:
    """``base_size * decay**i`` for ``i`` in ``range(n)``."""
    return base_size * np.power(decay, np.arange(n, dtype=float))


def corner_offset_2d(parent_size: float, child_size: float, corner: Corner) -> np.ndarray:
    gap = parent_size - child_size
    return np.array([gap, 0.0 if corner is Corner.UPPER else gap])


def corner_offset_3d(parent_size: float, child_size: float, corner: Corner) -> np.ndarray:
    half_gap = parent_size / 2 - child_size / 2
    y = half_gap if corner is Corner.UPPER else -half_gap
    return np.array([half_gap, y, half_gap])


def separate(offset: np.ndarray, epsilon: float) -> np.ndarray:
    """Push *offset* out by *epsilon* along its own direction.

    A zero-length offset has no direction and is returned unchanged.
    """
    if epsilon == 0.0:
        return offset
    magnitude = float(np.linalg.norm(offset))
    if magnitude == 0.0:
        return offset
    return offset + offset / magnitude * epsilon


def _validate(base_size: float, decay: float, epsilon: float) -> None:
    if not math.isfinite(base_size) or base_size <= 0:
        raise ValueError(f"base_size must be a positive finite number, got {base_size}")
    if not math.isfinite(decay) or not 0 < decay <= 1:
        raise ValueError(f"decay must be in (0, 1], got {decay}")
    if not math.isfinite(epsilon) or epsilon < 0:
        raise ValueError(f"epsilon must be >= 0, got {epsilon}")


def build_layout(
    ranked: RankedSequence,
    base_size: float,
    projection: Projection | str = TWO_D,
    decay: Optional[float] = None,
    epsilon: Optional[float] = None,
) -> list[LayoutNode]:
    """Lay out a ranked sequence as nested squares (2D) or cubes (3D).

    Parameters
    ----------
    ranked : RankedSequence
        Output of :func:`resobox.layout.ranking.rank`, possibly sliced by a
        viewport window.
    base_size : float
        Size of the root box.
    projection : Projection | str
        ``TWO_D`` / ``THREE_D`` or their registry names.
    decay, epsilon : float, optional
        Override the projection defaults.

    Returns
    -------
    list[LayoutNode]
        One node per ranked box, in rank order.  Empty input gives ``[]``.
    """
    projection = get_projection(projection)
    decay = projection.decay if decay is None else decay
    epsilon = projection.epsilon if epsilon is None else epsilon
    _validate(base_size, decay, epsilon)

    n = len(ranked)
    if n == 0:
        return []

    sizes = decay_sizes(base_size, decay, n)
    place = corner_offset_3d if projection.dims == 3 else corner_offset_2d
    origin = np.zeros(projection.dims)

    nodes: list[LayoutNode] = [
        LayoutNode(
            index=0,
            size=float(sizes[0]),
            offset=projection.origin,
            position=projection.origin,
            corner=Corner.UPPER,
            is_first_different=False,
            box=ranked[0],
        )
    ]

    predecessor = ranked[0]
    parent_position = origin
    for i in range(1, n):
        box = ranked[i]
        resolution = resolve_corner(box, predecessor)
        offset = separate(place(sizes[i - 1], sizes[i], resolution.corner), epsilon)
        position = parent_position + offset

        nodes.append(
            LayoutNode(
                index=i,
                size=float(sizes[i]),
                offset=tuple(float(v) for v in offset),
                position=tuple(float(v) for v in position),
                corner=resolution.corner,
                is_first_different=resolution.is_first_different,
                box=box,
            )
        )
        predecessor = box
        parent_position = position

    log.debug(
        "Built %s layout: %d nodes, base %.4g, decay %.4g", projection.name, n, base_size, decay,
    )
    return nodes
