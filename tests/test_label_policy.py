"""Tests for resobox.labels.policy."""

from __future__ import annotations

import pytest

from resobox.labels import LABEL_LIMIT_THRESHOLD, format_price, label_visibility
from resobox.layout import build_layout, rank
from resobox.model import Box


def _visibility(values, signal_match=False):
    ranked = rank([Box(high=1.0, low=0.0, value=v) for v in values])
    nodes = build_layout(ranked, 12.0)
    return [
        (lv.show_high, lv.show_low)
        for lv in (label_visibility(n, ranked, signal_match=signal_match) for n in nodes)
    ]


def test_root_shows_both():
    assert _visibility([5.0])[0] == (True, True)
    assert _visibility([-5.0])[0] == (True, True)


def test_consecutive_positive_hides_high():
    assert _visibility([5.0, 3.0]) == [(True, True), (False, True)]


def test_consecutive_negative_hides_low():
    assert _visibility([-5.0, -3.0]) == [(True, True), (True, False)]


def test_flip_to_negative_shows_low_only():
    assert _visibility([5.0, -3.0])[1] == (False, True)


def test_flip_to_positive_shows_high_only():
    assert _visibility([-5.0, 3.0])[1] == (True, False)


def test_zero_after_positive_shows_both():
    assert _visibility([5.0, 0.0])[1] == (True, True)


def test_zero_after_negative_shows_both():
    assert _visibility([-5.0, 0.0])[1] == (True, True)


class TestLimit:
    def test_long_sequence_hides_same_sign_boxes(self):
        values = [float(v) for v in range(LABEL_LIMIT_THRESHOLD + 1, 0, -1)]
        vis = _visibility(values)
        assert vis[0] == (True, True)
        assert all(v == (False, False) for v in vis[1:])

    def test_long_sequence_keeps_flips(self):
        values = [float(v) for v in range(LABEL_LIMIT_THRESHOLD + 1, 0, -1)]
        values[5] = -values[5]
        vis = _visibility(values)
        assert vis[5] == (False, True)   # flip to negative
        assert vis[6] == (True, False)   # flip back to positive

    def test_threshold_is_exclusive(self):
        values = [float(v) for v in range(LABEL_LIMIT_THRESHOLD, 0, -1)]
        vis = _visibility(values)
        assert all(v == (False, True) for v in vis[1:])


def test_signal_match_forces_both_labels():
    values = [float(v) for v in range(LABEL_LIMIT_THRESHOLD + 1, 0, -1)]
    assert all(v == (True, True) for v in _visibility(values, signal_match=True))


@pytest.mark.parametrize(
    "instrument, expected",
    [
        ("USDJPY", "151.42"),
        ("EURUSD", "151.42000"),
        ("GBPCHF", "151.42000"),
        ("XAUCHF", "151.42000000"),
        (None, "151.42000"),
        ("", "151.42000"),
    ],
)
def test_format_price(instrument, expected):
    assert format_price(151.42, instrument) == expected
