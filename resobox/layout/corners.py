"""Sign-transition resolver: which corner of its parent a box occupies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from resobox.model.box import Box


class Corner(str, Enum):
    UPPER = "upper"
    LOWER = "lower"


@dataclass(frozen=True)
class CornerResolution:
    corner: Corner
    is_first_different: bool


def is_first_different(current: Box, predecessor: Optional[Box]) -> bool:
    """True when the sign flips strictly between a box and its ranked
    predecessor (positive to negative or negative to positive).

    A zero value is never part of a flip, on either side.
    """
    if predecessor is None:
        return False
    cur, prev = current.value, predecessor.value
    return (cur > 0 and prev < 0) or (cur < 0 and prev > 0)


def resolve_corner(current: Box, predecessor: Optional[Box]) -> CornerResolution:
    """Pick the parent corner for *current*.

    * root (no predecessor): upper.
    * sign flip: the predecessor's sign decides (upper if it was positive).
    * otherwise: the current sign decides (lower if negative).
    """
    if predecessor is None:
        return CornerResolution(Corner.UPPER, False)

    if is_first_different(current, predecessor):
        corner = Corner.UPPER if predecessor.value > 0 else Corner.LOWER
        return CornerResolution(corner, True)

    corner = Corner.LOWER if current.value < 0 else Corner.UPPER
    return CornerResolution(corner, False)


def resolve_corner_fallback(current: Box, predecessor: Optional[Box]) -> CornerResolution:
    """Same rule phrased the other way round: use the current sign unless the
    sign flips, in which case fall back to the predecessor's sign.
    """
    if predecessor is None:
        return CornerResolution(Corner.UPPER, False)

    flipped = is_first_different(current, predecessor)
    driver = predecessor if flipped else current
    if flipped:
        corner = Corner.UPPER if driver.value > 0 else Corner.LOWER
    else:
        corner = Corner.LOWER if driver.value < 0 else Corner.UPPER
    return CornerResolution(corner, flipped)
