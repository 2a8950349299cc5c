"""Value objects shared by every layer: boxes, sequences, signals."""

from resobox.model.box import Box, BoxSequence, DataError, normalize_instrument
from resobox.model.signal import Signal, SignalType, SIGNAL_MAX_AGE

__all__ = [
    "Box",
    "BoxSequence",
    "DataError",
    "normalize_instrument",
    "Signal",
    "SignalType",
    "SIGNAL_MAX_AGE",
]
