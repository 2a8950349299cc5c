"""Does a box's discretised value belong to a signal?"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from resobox.model.box import Box, normalize_instrument
from resobox.model.signal import Signal, SignalType
from resobox.rounding import round_half_away

JPY_UNIT = 0.01
DEFAULT_UNIT = 0.00001


def price_unit(instrument_id: Optional[str]) -> float:
    """Smallest quoted price step: 0.01 for JPY crosses, 0.00001 otherwise."""
    return JPY_UNIT if "JPY" in normalize_instrument(instrument_id) else DEFAULT_UNIT


def discretize(value: float, unit: float) -> Optional[int]:
    """``value / unit`` rounded half away from zero, or ``None`` if that
    quotient is not finite."""
    try:
        return round_half_away(value / unit)
    except (ValueError, ZeroDivisionError):
        return None


def matches(
    box: Box,
    signal: Optional[Signal],
    instrument_id: Optional[str],
    now: Optional[pd.Timestamp] = None,
) -> bool:
    """True when *box* should be highlighted for *signal*.

    Fails fast on a missing signal, an empty pattern or a signal older than
    one hour.  Otherwise the discretised box value must be in the pattern
    and agree in sign with the signal type (LONG > 0, SHORT < 0).
    """
    if signal is None or not signal.pattern_sequence:
        return False
    if not signal.is_recent(now):
        return False

    units = discretize(box.value, price_unit(instrument_id))
    if units is None or units not in signal.pattern_sequence:
        return False

    if signal.signal_type is SignalType.LONG:
        return units > 0
    if signal.signal_type is SignalType.SHORT:
        return units < 0
    return False
