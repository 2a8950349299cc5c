"""Price-label visibility and signal highlighting."""

from .policy import LABEL_LIMIT_THRESHOLD, LabelVisibility, format_price, label_visibility
from .signal_match import discretize, matches, price_unit

__all__ = [
    "LABEL_LIMIT_THRESHOLD",
    "LabelVisibility",
    "discretize",
    "format_price",
    "label_visibility",
    "matches",
    "price_unit",
]
