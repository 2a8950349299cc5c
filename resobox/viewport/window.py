"""Viewport window — the visible ``[start, start + count)`` slice of a ranked
sequence.

Every constructor and mutation re-clamps, so a window can never describe a
range outside the sequence.  Invariants for ``total >= 2``::

    0 <= start
    2 <= count
    start + count <= total

With fewer than two boxes the only window is the whole sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from resobox.layout.ranking import RankedSequence

MIN_VISIBLE_COUNT = 2
DEFAULT_VISIBLE_COUNT = 15


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class ViewportWindow:
    start: int = 0
    count: int = DEFAULT_VISIBLE_COUNT
    total: int = 0

    def __post_init__(self) -> None:
        total = max(int(self.total), 0)
        if total < MIN_VISIBLE_COUNT:
            start, count = 0, total
        else:
            count = _clamp(int(self.count), MIN_VISIBLE_COUNT, total)
            start = _clamp(int(self.start), 0, total - count)
        object.__setattr__(self, "total", total)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "count", count)

    # -- public API --------------------------------------------------------

    @property
    def end(self) -> int:
        """Exclusive right edge."""
        return self.start + self.count

    @property
    def is_adjustable(self) -> bool:
        return self.total >= MIN_VISIBLE_COUNT

    def with_total(self, total: int) -> ViewportWindow:
        """Re-clamp against a new sequence length (never raises)."""
        return replace(self, total=total)

    def move(self, delta: int) -> ViewportWindow:
        """Shift the whole window; ``start`` stays within ``[0, total - count]``."""
        if not self.is_adjustable:
            return self
        start = _clamp(self.start + delta, 0, self.total - self.count)
        return replace(self, start=start)

    def resize_start(self, delta: int) -> ViewportWindow:
        """Drag the left edge; the right edge stays where it is."""
        if not self.is_adjustable:
            return self
        start = _clamp(self.start + delta, 0, self.end - MIN_VISIBLE_COUNT)
        count = _clamp(
            self.count - (start - self.start), MIN_VISIBLE_COUNT, self.total - start,
        )
        return replace(self, start=start, count=count)

    def resize_end(self, delta: int) -> ViewportWindow:
        """Drag the right edge; ``count`` stays within ``[2, total - start]``."""
        if not self.is_adjustable:
            return self
        count = _clamp(self.count + delta, MIN_VISIBLE_COUNT, self.total - self.start)
        return replace(self, count=count)

    def select(self, ranked: RankedSequence) -> RankedSequence:
        """Slice *ranked* to this window, re-clamping if its length differs."""
        window = self if len(ranked) == self.total else self.with_total(len(ranked))
        return ranked[window.start:window.end]
