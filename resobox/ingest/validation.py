"""Data-integrity checks applied to raw box payloads before ranking."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from resobox.model.box import Box, BoxSequence, DataError, normalize_instrument

log = logging.getLogger(__name__)

BOX_FIELDS: tuple[str, ...] = ("high", "low", "value")


def parse_box(raw: Any) -> Box:
    """Validate one raw box object and return a :class:`Box`.

    Raises ``DataError`` on the first problem found so that malformed
    magnitudes never reach the layout builder.
    """

    # 1. Shape ──────────────────────────────────────────────────────────
    if isinstance(raw, Box):
        raw = {"high": raw.high, "low": raw.low, "value": raw.value}
    if not isinstance(raw, Mapping):
        raise DataError(f"Box must be an object, got {type(raw).__name__}")

    missing = [f for f in BOX_FIELDS if f not in raw]
    if missing:
        raise DataError(f"Box missing fields: {missing}")

    # 2. Numeric, finite ────────────────────────────────────────────────
    numbers: dict[str, float] = {}
    for field in BOX_FIELDS:
        item = raw[field]
        if isinstance(item, bool):
            raise DataError(f"Box field '{field}' is not a number: {item!r}")
        try:
            number = float(item)
        except (TypeError, ValueError):
            raise DataError(f"Box field '{field}' is not a number: {item!r}") from None
        if not math.isfinite(number):
            raise DataError(f"Box field '{field}' is not finite: {number}")
        numbers[field] = number

    # 3. Bounds ordering ───────────────────────────────────────────────
    if numbers["high"] < numbers["low"]:
        raise DataError(
            f"Box high {numbers['high']} is below low {numbers['low']}"
        )

    return Box(high=numbers["high"], low=numbers["low"], value=numbers["value"])


def clean_boxes(
    raw_boxes: Iterable[Any] | None, strict: bool = False,
) -> tuple[tuple[Box, ...], int]:
    """Parse every raw box, dropping the malformed ones.

    Returns
    -------
    tuple of (kept boxes in arrival order, number of dropped boxes)

    With ``strict=True`` the first ``DataError`` propagates instead.
    """
    if raw_boxes is None:
        return (), 0

    kept: list[Box] = []
    dropped = 0
    for i, raw in enumerate(raw_boxes):
        try:
            kept.append(parse_box(raw))
        except DataError as exc:
            if strict:
                raise
            dropped += 1
            log.warning("Dropping box %d: %s", i, exc)

    if dropped:
        log.warning("Dropped %d of %d boxes", dropped, dropped + len(kept))
    return tuple(kept), dropped


def parse_sequence(
    raw: Mapping[str, Any] | None, instrument: str = "", strict: bool = False,
) -> BoxSequence:
    """Build a :class:`BoxSequence` from a ``{"timestamp", "boxes"}`` object.

    A missing or ``None`` payload is not an error: it yields an empty
    sequence, which lays out to nothing.
    """
    if raw is None:
        return BoxSequence(timestamp="", boxes=(), instrument=instrument)
    if not isinstance(raw, Mapping):
        raise DataError(f"Box sequence must be an object, got {type(raw).__name__}")

    boxes, _ = clean_boxes(raw.get("boxes"), strict=strict)
    return BoxSequence(
        timestamp=str(raw.get("timestamp") or ""),
        boxes=boxes,
        instrument=instrument,
    )


def parse_box_response(
    payload: Mapping[str, Any], strict: bool = False,
) -> dict[str, BoxSequence]:
    """Decode the keyed box response ``{"value": {PAIR: {...} | null}}``.

    Keys are normalised; ``null`` entries (no data yet for that pair)
    are skipped.
    """
    if not isinstance(payload, Mapping) or "value" not in payload:
        raise DataError("Box response must be an object with a 'value' key")

    body = payload["value"]
    if not isinstance(body, Mapping):
        raise DataError("Box response 'value' must be an object")

    out: dict[str, BoxSequence] = {}
    for pair, raw in body.items():
        key = normalize_instrument(pair)
        if raw is None:
            log.info("No box data for %s", key)
            continue
        out[key] = parse_sequence(raw, instrument=key, strict=strict)
    return out
