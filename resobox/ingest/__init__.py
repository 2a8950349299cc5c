"""
resobox.ingest: turn raw backend payloads into validated box sequences.

Malformed boxes (missing fields, NaN/inf, high < low) raise ``DataError``
in :func:`parse_box` and are dropped, with a warning, everywhere else.
"""

from ._json_source import JsonSnapshotSource
from ._protocols import BoxSource
from .validation import clean_boxes, parse_box, parse_box_response, parse_sequence

__all__ = [
    "BoxSource",
    "JsonSnapshotSource",
    "clean_boxes",
    "parse_box",
    "parse_box_response",
    "parse_sequence",
]
