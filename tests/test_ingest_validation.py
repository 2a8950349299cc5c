"""Tests for resobox.ingest.validation."""

from __future__ import annotations

import logging

import pytest

from resobox.ingest import clean_boxes, parse_box, parse_box_response, parse_sequence
from resobox.model import Box, DataError


# ── helpers ──────────────────────────────────────────────────────────────

def _raw(high=1.5, low=1.0, value=0.5) -> dict:
    return {"high": high, "low": low, "value": value}


# ── parse_box ────────────────────────────────────────────────────────────

def test_valid_box():
    assert parse_box(_raw()) == Box(high=1.5, low=1.0, value=0.5)


def test_numeric_strings_are_accepted():
    assert parse_box({"high": "1.5", "low": "1", "value": "-0.25"}).value == -0.25


def test_box_instance_passes_through():
    box = Box(high=2.0, low=1.0, value=-1.0)
    assert parse_box(box) == box


def test_equal_bounds_are_allowed():
    assert parse_box(_raw(high=1.0, low=1.0)).high == 1.0


def test_not_an_object():
    with pytest.raises(DataError, match="must be an object"):
        parse_box([1.5, 1.0, 0.5])


def test_missing_field():
    raw = _raw()
    del raw["value"]
    with pytest.raises(DataError, match=r"missing fields: \['value'\]"):
        parse_box(raw)


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf"), "NaN"])
def test_non_finite_value(bad):
    with pytest.raises(DataError, match="not finite"):
        parse_box(_raw(value=bad))


@pytest.mark.parametrize("bad", ["abc", None, True, [1]])
def test_non_numeric_value(bad):
    with pytest.raises(DataError, match="not a number"):
        parse_box(_raw(value=bad))


def test_high_below_low():
    with pytest.raises(DataError, match="below low"):
        parse_box(_raw(high=0.9, low=1.0))


def test_data_error_is_a_value_error():
    assert issubclass(DataError, ValueError)


# ── clean_boxes ──────────────────────────────────────────────────────────

def test_clean_drops_malformed_and_keeps_order(caplog):
    raw = [_raw(value=0.3), _raw(value=float("nan")), _raw(value=-0.2), {"high": 1.0}]
    with caplog.at_level(logging.WARNING, logger="resobox.ingest.validation"):
        boxes, dropped = clean_boxes(raw)

    assert [b.value for b in boxes] == [0.3, -0.2]
    assert dropped == 2
    assert "Dropping box 1" in caplog.text
    assert "Dropped 2 of 4 boxes" in caplog.text


def test_clean_strict_raises():
    with pytest.raises(DataError):
        clean_boxes([_raw(), _raw(value=float("inf"))], strict=True)


def test_clean_none():
    assert clean_boxes(None) == ((), 0)


# ── parse_sequence / parse_box_response ──────────────────────────────────

def test_parse_sequence():
    seq = parse_sequence(
        {"timestamp": "2026-10-19T08:30:00Z", "boxes": [_raw(), _raw(value=-0.1)]},
        instrument="eurusd",
    )
    assert seq.instrument == "EURUSD"
    assert seq.timestamp == "2026-10-19T08:30:00Z"
    assert len(seq) == 2


def test_parse_sequence_none_is_empty():
    seq = parse_sequence(None, instrument="USDJPY")
    assert seq.is_empty
    assert seq.instrument == "USDJPY"


def test_parse_sequence_without_boxes_is_empty():
    assert parse_sequence({"timestamp": "2026-10-19T08:30:00Z"}).is_empty


def test_parse_box_response():
    payload = {
        "value": {
            "usdjpy ": {"timestamp": "t1", "boxes": [_raw()]},
            "EURUSD": {"timestamp": "t2", "boxes": [_raw(), _raw(value="nan")]},
            "GBPUSD": None,
        }
    }
    out = parse_box_response(payload)

    assert sorted(out) == ["EURUSD", "USDJPY"]
    assert out["USDJPY"].instrument == "USDJPY"
    assert len(out["EURUSD"]) == 1


@pytest.mark.parametrize("payload", [{}, {"value": []}, []])
def test_parse_box_response_rejects_bad_shape(payload):
    with pytest.raises(DataError):
        parse_box_response(payload)
