"""Tests for resobox.ingest.JsonSnapshotSource."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from resobox.ingest import BoxSource, JsonSnapshotSource
from resobox.model import DataError


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _box(value: float) -> dict:
    return {"high": 2.0, "low": 1.0, "value": value}


def test_satisfies_box_source_protocol(tmp_path):
    assert isinstance(JsonSnapshotSource(tmp_path / "x.json"), BoxSource)


def test_keyed_response(tmp_path):
    path = _write(tmp_path / "boxes.json", {
        "value": {
            "USDJPY": {"timestamp": "2026-10-19T08:30:00Z", "boxes": [_box(0.5), _box(-0.2)]},
            "EURUSD": {"timestamp": "2026-10-19T08:30:00Z", "boxes": [_box(0.1)]},
        }
    })
    source = JsonSnapshotSource(path)

    fetched = source.fetch(["usdjpy", "XAUUSD"])
    assert list(fetched) == ["USDJPY"]
    assert len(fetched["USDJPY"]) == 2


def test_single_sequence_file(tmp_path):
    path = _write(tmp_path / "one.json", {
        "instrument": "eurusd",
        "timestamp": "2026-10-19T08:30:00Z",
        "boxes": [_box(0.1), _box(float("nan"))],
    })
    loaded = JsonSnapshotSource(path).load()
    assert list(loaded) == ["EURUSD"]
    assert len(loaded["EURUSD"]) == 1


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataError, match="not valid JSON"):
        JsonSnapshotSource(path).load()


def test_unknown_shape(tmp_path):
    path = _write(tmp_path / "odd.json", {"prices": []})
    with pytest.raises(DataError, match="neither"):
        JsonSnapshotSource(path).load()
