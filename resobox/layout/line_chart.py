"""High/low polylines normalised into a unit square."""

from __future__ import annotations

from typing import Iterable, Union

import numpy as np
import pandas as pd

from resobox.model.box import Box, BoxSequence

LINE_COLUMNS: list[str] = ["x", "high_y", "low_y"]


def line_series(sequence: Union[BoxSequence, Iterable[Box]]) -> pd.DataFrame:
    """Normalise box highs and lows to polyline points.

    Boxes stay in arrival order.  ``x`` runs from 0 to 1; ``y`` is screen
    space (0 = top) scaled over the min/max of all highs and lows.  A
    single box sits at ``x = 0`` and a flat range maps to ``y = 0.5``.
    """
    boxes = list(sequence.boxes if isinstance(sequence, BoxSequence) else sequence)
    if not boxes:
        return pd.DataFrame(columns=LINE_COLUMNS, dtype=float)

    highs = np.array([b.high for b in boxes], dtype=float)
    lows = np.array([b.low for b in boxes], dtype=float)
    n = len(boxes)

    x = np.arange(n, dtype=float) / (n - 1) if n > 1 else np.zeros(1)

    lo = float(min(highs.min(), lows.min()))
    hi = float(max(highs.max(), lows.max()))
    span = hi - lo
    if span == 0:
        high_y = np.full(n, 0.5)
        low_y = np.full(n, 0.5)
    else:
        high_y = 1.0 - (highs - lo) / span
        low_y = 1.0 - (lows - lo) / span

    return pd.DataFrame({"x": x, "high_y": high_y, "low_y": low_y})
