"""
Unit tests for the set-level lifting formulas.

Covered:
- estimated_one_rep_max: Brzycki inside 0 < reps < 37, raw weight outside
- set_volume
- mean / mean_or_none on empty input
"""

import pytest

from app.services.lift_math import estimated_one_rep_max, mean, mean_or_none, set_volume

pytestmark = pytest.mark.unit


def test_brzycki_five_reps():
    """100 kg x 5 -> 100 * 36 / 32 = 112.5"""
    assert estimated_one_rep_max(100, 5) == pytest.approx(112.5)


@pytest.mark.parametrize("reps", [1, 10, 20, 36])
def test_brzycki_inside_valid_range(reps):
    assert estimated_one_rep_max(80, reps) == pytest.approx(80 * 36 / (37 - reps))


def test_single_rep_is_the_weight():
    assert estimated_one_rep_max(140, 1) == pytest.approx(140)


@pytest.mark.parametrize("reps", [0, -3, 37, 50])
def test_out_of_range_reps_return_weight(reps):
    assert estimated_one_rep_max(60, reps) == 60


def test_set_volume():
    assert set_volume(82.5, 8) == pytest.approx(660)


def test_mean_of_nothing_is_zero():
    assert mean([]) == 0.0


def test_mean_or_none_skips_missing():
    assert mean_or_none([8, None, 6]) == pytest.approx(7)
    assert mean_or_none([None, None]) is None
