"""Pinned rounding mode shared by the signal matcher and viewport drags."""

from __future__ import annotations

import math


def round_half_away(x: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3).

    Unlike the built-in ``round``, which rounds ties to even.

    Raises ``ValueError`` for NaN or infinite input.
    """
    if not math.isfinite(x):
        raise ValueError(f"cannot round non-finite value {x}")
    magnitude = abs(x)
    whole = math.floor(magnitude)
    # compare the fraction; abs(x) + 0.5 can itself round up to the next integer
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, x))
