"""Tests for resobox.layout.corners: the sign-transition resolver."""

from __future__ import annotations

import itertools

import pytest

from resobox.layout import Corner, resolve_corner, resolve_corner_fallback
from resobox.model import Box


def _box(value: float) -> Box:
    return Box(high=1.0, low=0.0, value=value)


def test_root_is_upper_and_not_first_different():
    res = resolve_corner(_box(-3.0), None)
    assert res.corner is Corner.UPPER
    assert res.is_first_different is False


@pytest.mark.parametrize(
    "current, predecessor, corner, first_different",
    [
        (3.0, 5.0, Corner.UPPER, False),    # same sign, positive
        (-3.0, -5.0, Corner.LOWER, False),  # same sign, negative
        (-3.0, 5.0, Corner.UPPER, True),    # flip after positive
        (3.0, -5.0, Corner.LOWER, True),    # flip after negative
    ],
)
def test_sign_combinations(current, predecessor, corner, first_different):
    res = resolve_corner(_box(current), _box(predecessor))
    assert res.corner is corner
    assert res.is_first_different is first_different


@pytest.mark.parametrize(
    "current, predecessor, corner, first_different",
    [
        (0.0, 5.0, Corner.UPPER, False),
        (0.0, -5.0, Corner.UPPER, False),
        (3.0, 0.0, Corner.UPPER, False),
        (-3.0, 0.0, Corner.LOWER, False),
        (0.0, 0.0, Corner.UPPER, False),
    ],
)
def test_zero_never_flips(current, predecessor, corner, first_different):
    res = resolve_corner(_box(current), _box(predecessor))
    assert res.corner is corner
    assert res.is_first_different is first_different


def test_both_phrasings_agree_exhaustively():
    magnitudes = [0.0, 0.5, 1.0, 7.25]
    values = sorted({s * m for s in (-1, 1) for m in magnitudes})
    for _ in range(3):
        for cur, prev in itertools.product(values, repeat=2):
            a = resolve_corner(_box(cur), _box(prev))
            b = resolve_corner_fallback(_box(cur), _box(prev))
            assert a == b, (cur, prev)
    assert resolve_corner_fallback(_box(1.0), None) == resolve_corner(_box(1.0), None)
