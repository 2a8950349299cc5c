"""Signal — a time-bounded request to highlight boxes matching a pattern."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pandas as pd

from resobox.model.box import normalize_instrument, parse_timestamp

SIGNAL_MAX_AGE = pd.Timedelta(hours=1)


class SignalType(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"

    @classmethod
    def parse(cls, raw: object) -> Optional[SignalType]:
        """Return the matching member, or ``None`` for anything unknown."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class Signal:
    """What the signal service wants highlighted — NOT a layout instruction.

    Attributes
    ----------
    signal_id : str
        Opaque id from the signal service.
    pair : str
        Instrument the signal was issued for (normalised).
    signal_type : SignalType | None
        ``LONG`` highlights positive boxes, ``SHORT`` negative ones.
        ``None`` (unknown type) never matches.
    pattern_sequence : tuple[int, ...]
        Discretised box values that should be highlighted.
    timestamp : str
        ISO-8601 issue time; the signal expires one hour later.
    """

    signal_id: str
    pair: str
    signal_type: Optional[SignalType]
    pattern_sequence: tuple[int, ...]
    timestamp: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "pair", normalize_instrument(self.pair))
        object.__setattr__(self, "pattern_sequence", tuple(self.pattern_sequence))

    @property
    def issued_at(self) -> Optional[pd.Timestamp]:
        return parse_timestamp(self.timestamp)

    def age(self, now: Optional[pd.Timestamp] = None) -> Optional[pd.Timedelta]:
        issued = self.issued_at
        if issued is None:
            return None
        if now is None:
            now = pd.Timestamp.now(tz="UTC")
        elif now.tzinfo is None:
            now = now.tz_localize("UTC")
        return now - issued

    def is_recent(self, now: Optional[pd.Timestamp] = None) -> bool:
        """True while the signal is younger than one hour.

        An unparsable timestamp is never recent.
        """
        age = self.age(now)
        if age is None:
            return False
        return age < SIGNAL_MAX_AGE

    @classmethod
    def from_dict(cls, raw: dict) -> Signal:
        """Build a signal from the service's wire format.

        Pattern entries that are not integers are dropped rather than
        rejected, so a malformed pattern degrades to "matches nothing".
        """
        pattern = raw.get("patternSequence") or []
        if not isinstance(pattern, (list, tuple)):
            pattern = []
        return cls(
            signal_id=str(raw.get("signalId", "")),
            pair=str(raw.get("pair", "")),
            signal_type=SignalType.parse(raw.get("signalType")),
            pattern_sequence=tuple(
                p for p in pattern if isinstance(p, int) and not isinstance(p, bool)
            ),
            timestamp=str(raw.get("timestamp", "")),
        )
