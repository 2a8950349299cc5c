"""Box source backed by a saved backend response on disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from resobox.model.box import BoxSequence, DataError, normalize_instrument
from resobox.ingest.validation import parse_box_response, parse_sequence

log = logging.getLogger(__name__)


class JsonSnapshotSource:
    """Reads box sequences from a JSON snapshot file.

    Two layouts are accepted:

    * the keyed backend response ``{"value": {PAIR: {timestamp, boxes}}}``
    * a single sequence ``{"instrument": PAIR, "timestamp": ..., "boxes": [...]}``
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, BoxSequence]:
        """Parse the whole file.  Malformed boxes are dropped, not raised."""
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise DataError(f"{self._path} is not valid JSON: {exc}") from exc

        if isinstance(payload, dict) and "value" in payload:
            sequences = parse_box_response(payload)
        elif isinstance(payload, dict) and "boxes" in payload:
            key = normalize_instrument(payload.get("instrument", ""))
            sequences = {key: parse_sequence(payload, instrument=key)}
        else:
            raise DataError(f"{self._path} holds neither a box response nor a sequence")

        log.info(
            "Loaded %d sequence(s) from %s", len(sequences), self._path.name,
        )
        return sequences

    def fetch(self, instruments: Iterable[str]) -> dict[str, BoxSequence]:
        wanted = {normalize_instrument(i) for i in instruments}
        return {k: v for k, v in self.load().items() if k in wanted}
