"""LayoutEngine — composes one paintable frame per instrument, projection-agnostic.

Orchestrates the per-update pipeline:
  rank → viewport slice → layout → signal match → label policy

The geometry is recomputed from scratch on every call; the only state the
engine keeps between calls is the viewport window of each instrument.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import pandas as pd

from resobox.labels.policy import format_price, label_visibility
from resobox.labels.signal_match import matches
from resobox.layout.builder import LayoutNode, build_layout
from resobox.layout.projection import TWO_D, Projection, get_projection
from resobox.layout.ranking import rank
from resobox.model.box import BoxSequence, normalize_instrument
from resobox.model.signal import Signal
from resobox.viewport.window import DEFAULT_VISIBLE_COUNT, ViewportWindow

log = logging.getLogger(__name__)

FRAME_COLUMNS: list[str] = [
    "index", "size", "corner", "is_first_different", "is_positive",
    "value", "high", "low", "source_index",
    "show_high", "show_low", "signal_match", "high_label", "low_label",
]


@dataclass(frozen=True)
class AnnotatedNode:
    """A layout node plus everything the renderer needs to label it."""

    node: LayoutNode
    source_index: int
    show_high: bool
    show_low: bool
    signal_match: bool
    high_label: Optional[str]
    low_label: Optional[str]

    def to_dict(self) -> dict:
        node = self.node
        row = {
            "index": node.index,
            "size": node.size,
            "corner": node.corner.value,
            "is_first_different": node.is_first_different,
            "is_positive": node.is_positive,
            "value": node.box.value,
            "high": node.box.high,
            "low": node.box.low,
            "source_index": self.source_index,
            "show_high": self.show_high,
            "show_low": self.show_low,
            "signal_match": self.signal_match,
            "high_label": self.high_label,
            "low_label": self.low_label,
        }
        for axis, offset, position in zip("xyz", node.offset, node.position):
            row[f"offset_{axis}"] = offset
            row[axis] = position
        return row


@dataclass(frozen=True)
class LayoutFrame:
    """Everything painted for one instrument at one timestamp."""

    instrument: str
    timestamp: str
    projection: str
    window: ViewportWindow
    nodes: tuple[AnnotatedNode, ...]

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def to_frame(self) -> pd.DataFrame:
        """One row per node, in rank order."""
        if not self.nodes:
            return pd.DataFrame(columns=FRAME_COLUMNS)
        return pd.DataFrame([n.to_dict() for n in self.nodes])


def compose_frame(
    sequence: Optional[BoxSequence],
    base_size: float,
    projection: Projection | str = TWO_D,
    window: Optional[ViewportWindow] = None,
    signal: Optional[Signal] = None,
    now: Optional[pd.Timestamp] = None,
    decay: Optional[float] = None,
    instrument: Optional[str] = None,
) -> LayoutFrame:
    """Pure pipeline: one box sequence in, one annotated frame out.

    Parameters
    ----------
    sequence : BoxSequence | None
        ``None`` or an empty sequence yields an empty frame.
    window : ViewportWindow, optional
        Visible slice of the ranked boxes; ``None`` shows them all.  The
        window is re-clamped to the sequence length first.
    signal : Signal, optional
        Active highlight request; stale signals have no effect.
    now : pd.Timestamp, optional
        Pins the clock used for signal age.
    instrument : str, optional
        Overrides ``sequence.instrument`` for unit and label formatting.
    """
    projection = get_projection(projection)
    if sequence is None:
        sequence = BoxSequence(timestamp="", boxes=(), instrument=instrument or "")
    pair = normalize_instrument(instrument) if instrument else sequence.instrument

    ranked = rank(sequence)
    if window is None:
        window = ViewportWindow(start=0, count=len(ranked), total=len(ranked))
    else:
        window = window.with_total(len(ranked))
    visible = window.select(ranked)

    layout = build_layout(visible, base_size, projection=projection, decay=decay)

    annotated = []
    for node in layout:
        hit = matches(node.box, signal, pair, now=now)
        labels = label_visibility(node, visible, signal_match=hit)
        annotated.append(
            AnnotatedNode(
                node=node,
                source_index=visible.source_index[node.index],
                show_high=labels.show_high,
                show_low=labels.show_low,
                signal_match=hit,
                high_label=format_price(node.box.high, pair) if labels.show_high else None,
                low_label=format_price(node.box.low, pair) if labels.show_low else None,
            )
        )

    log.debug(
        "Frame %s %s: %d/%d boxes in window [%d, %d), %d signal match(es)",
        pair or "?", projection.name, len(annotated), len(ranked),
        window.start, window.end, sum(a.signal_match for a in annotated),
    )
    return LayoutFrame(
        instrument=pair,
        timestamp=sequence.timestamp,
        projection=projection.name,
        window=window,
        nodes=tuple(annotated),
    )


class LayoutEngine:
    """Per-instrument frame composer; remembers each requested viewport window.

    Parameters
    ----------
    base_size : float
        Size of the root box in renderer units.
    projection : Projection | str
        ``"2d"`` or ``"3d"``; switchable at any time via :attr:`projection`.
    decay : float, optional
        Overrides the projection's default decay.
    default_count : int
        Visible box count for instruments seen for the first time.
    """

    def __init__(
        self,
        base_size: float,
        projection: Projection | str = TWO_D,
        decay: Optional[float] = None,
        default_count: int = DEFAULT_VISIBLE_COUNT,
    ) -> None:
        self.base_size = base_size
        self.projection = get_projection(projection)
        self.decay = decay
        self.default_count = default_count

        self._requested: dict[str, tuple[int, int]] = {}
        self._totals: dict[str, int] = {}

    def window(self, instrument: str) -> ViewportWindow:
        """Requested window for *instrument*, clamped to its latest length."""
        key = normalize_instrument(instrument)
        start, count = self._requested.get(key, (0, self.default_count))
        return ViewportWindow(start=start, count=count, total=self._totals.get(key, 0))

    def adjust_window(
        self, instrument: str, change: Callable[[ViewportWindow], ViewportWindow],
    ) -> ViewportWindow:
        """Apply ``change`` (e.g. ``lambda w: w.move(3)``) to an instrument's window.

        Only the fields the change actually moved replace the request, so
        moving a window that is clamped to a short sequence keeps the
        requested count.
        """
        key = normalize_instrument(instrument)
        before = self.window(key)
        after = change(before)
        start, count = self._requested.get(key, (0, self.default_count))
        if after.start != before.start:
            start = after.start
        if after.count != before.count:
            count = after.count
        self._requested[key] = (start, count)
        return after

    def set_window(self, instrument: str, window: ViewportWindow) -> None:
        self._requested[normalize_instrument(instrument)] = (window.start, window.count)

    def forget(self, instrument: str) -> None:
        """Drop viewport state for an instrument that is no longer shown."""
        key = normalize_instrument(instrument)
        self._requested.pop(key, None)
        self._totals.pop(key, None)

    def update(
        self,
        sequence: Optional[BoxSequence],
        signal: Optional[Signal] = None,
        now: Optional[pd.Timestamp] = None,
        instrument: Optional[str] = None,
    ) -> LayoutFrame:
        """Compose a frame for a freshly delivered sequence.

        The stored request is clamped for this frame only; a short sequence
        never shrinks what the next, longer one shows.
        """
        if instrument:
            key = normalize_instrument(instrument)
        else:
            key = sequence.instrument if sequence is not None else ""
        self._totals[key] = len(sequence) if sequence is not None else 0

        return compose_frame(
            sequence,
            self.base_size,
            projection=self.projection,
            window=self.window(key),
            signal=signal,
            now=now,
            decay=self.decay,
            instrument=key,
        )
