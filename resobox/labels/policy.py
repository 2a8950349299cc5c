"""Label visibility policy — which high/low price labels a box shows.

Rules, per node:

* Long sequences (more than ``LABEL_LIMIT_THRESHOLD`` boxes) only label the
  root and sign flips.
* On a sign flip, only the side matching the new sign is labelled.
* Two consecutive boxes of the same sign share an edge, so the shared
  side's label is shown once (on the first of them) rather than twice.
* A signal match forces both labels on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from resobox.layout.builder import LayoutNode
from resobox.layout.ranking import RankedSequence
from resobox.model.box import normalize_instrument

LABEL_LIMIT_THRESHOLD = 18


@dataclass(frozen=True)
class LabelVisibility:
    show_high: bool
    show_low: bool


def label_visibility(
    node: LayoutNode, ranked: RankedSequence, signal_match: bool = False,
) -> LabelVisibility:
    """Decide whether *node* shows its high and low labels.

    *ranked* is the sequence the node was laid out from (after any
    viewport slicing); it supplies the predecessor and the box count.
    """
    if signal_match:
        return LabelVisibility(show_high=True, show_low=True)

    value = node.box.value
    first_diff = node.is_first_different
    prev_value = ranked[node.index - 1].value if node.index > 0 else 0.0
    should_limit = len(ranked) > LABEL_LIMIT_THRESHOLD

    consecutive_positive = prev_value > 0 and value > 0 and not first_diff
    consecutive_negative = prev_value < 0 and value < 0 and not first_diff
    allowed_by_limit = not should_limit or first_diff or node.index == 0

    show_high = (
        (not first_diff or value > 0)
        and allowed_by_limit
        and not consecutive_positive
    )
    show_low = (
        (not first_diff or value < 0)
        and allowed_by_limit
        and not consecutive_negative
    )
    return LabelVisibility(show_high=show_high, show_low=show_low)


def format_price(price: float, instrument: Optional[str] = None) -> str:
    """Format a price label with the instrument's quoting precision."""
    pair = normalize_instrument(instrument)
    if not pair:
        return f"{price:.5f}"
    if "JPY" in pair:
        return f"{price:.2f}"
    if "USD" in pair or "EUR" in pair or "GBP" in pair:
        return f"{price:.5f}"
    return f"{price:.8f}"
