"""Named projection variants: 2D nested squares and 3D nested cubes."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Projection:
    """One way of projecting the fractal layout.

    Attributes
    ----------
    name : str
        Registry key (``"2d"`` or ``"3d"``).
    dims : int
        Number of coordinates per position.
    decay : float
        Default size ratio between a box and its parent.
    epsilon : float
        Distance added along the corner direction to separate coincident
        faces.  ``0.0`` means exact corner-flush packing.
    """

    name: str
    dims: int
    decay: float
    epsilon: float = 0.0

    @property
    def origin(self) -> tuple[float, ...]:
        return (0.0,) * self.dims


TWO_D = Projection(name="2d", dims=2, decay=0.86)
THREE_D = Projection(name="3d", dims=3, decay=1.0 / math.sqrt(1.5), epsilon=0.005)

_REGISTRY: dict[str, Projection] = {}


def register(projection: Projection) -> None:
    """Register a projection under its name."""
    _REGISTRY[projection.name] = projection


def get_projection(name: str | Projection) -> Projection:
    """Look up a projection by name (case-insensitive)."""
    if isinstance(name, Projection):
        return name
    key = str(name).strip().lower()
    if key not in _REGISTRY:
        raise ValueError(
            f"Unknown projection '{name}'. Registered: {sorted(_REGISTRY)}"
        )
    return _REGISTRY[key]


register(TWO_D)
register(THREE_D)
