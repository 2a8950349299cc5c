"""Immutable box samples and the per-instrument sequences that carry them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd


class DataError(ValueError):
    """Malformed box data (missing field, non-finite number, high < low)."""


def normalize_instrument(instrument: Optional[str]) -> str:
    """Uppercase and trim an instrument id so it can be used as a key."""
    if instrument is None:
        return ""
    return instrument.strip().upper()


def parse_timestamp(value: Optional[str]) -> Optional[pd.Timestamp]:
    """Parse an ISO-8601 string into a UTC ``pd.Timestamp``.

    Naive timestamps are taken to be UTC.  Returns ``None`` when the value
    is missing or cannot be parsed.
    """
    if not value:
        return None
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError):
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


@dataclass(frozen=True)
class Box:
    """One signed magnitude sample with its high/low price bounds.

    Attributes
    ----------
    high : float
        Upper price bound (label shown on top of the box).
    low : float
        Lower price bound (label shown at the bottom of the box).
    value : float
        Signed magnitude.  Positive = upward deviation, negative = downward.
    """

    high: float
    low: float
    value: float

    @property
    def magnitude(self) -> float:
        return abs(self.value)

    @property
    def is_positive(self) -> bool:
        """Colour polarity as painted: only strictly positive values are up."""
        return self.value > 0


@dataclass(frozen=True)
class BoxSequence:
    """All boxes for one instrument at one timestamp, in arrival order.

    Arrival order is NOT the layout order; layout order comes from
    :func:`resobox.layout.ranking.rank`.
    """

    timestamp: str
    boxes: tuple[Box, ...] = ()
    instrument: str = ""

    def __post_init__(self) -> None:
        # Accept any iterable (e.g. a list) but always store a tuple.
        object.__setattr__(self, "boxes", tuple(self.boxes))
        object.__setattr__(self, "instrument", normalize_instrument(self.instrument))

    def __len__(self) -> int:
        return len(self.boxes)

    @property
    def is_empty(self) -> bool:
        return not self.boxes

    @property
    def date(self) -> Optional[pd.Timestamp]:
        return parse_timestamp(self.timestamp)
