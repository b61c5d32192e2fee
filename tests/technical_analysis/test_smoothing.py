"""Tests for the smoothing strategies."""

import math

import pytest

from tawindow.technical_analysis.indicators.smoothing import (
    EmaSmoothing,
    SmoothingStrategy,
    WildersSmoothing,
)


def test_alphas():
    assert WildersSmoothing(14).get_alpha() == pytest.approx(1 / 14)
    assert EmaSmoothing(9).get_alpha() == pytest.approx(0.2)


def test_strategy_is_abstract():
    with pytest.raises(TypeError):
        SmoothingStrategy(3)


def test_first_valid_update_seeds():
    smoothing = WildersSmoothing(4)
    assert not smoothing.is_seeded
    assert smoothing.update(8.0) == 8.0
    assert smoothing.is_seeded
    assert smoothing.update(4.0) == pytest.approx(7.0)


def test_explicit_seed():
    smoothing = EmaSmoothing(3)
    assert smoothing.seed(10.0) == 10.0
    assert smoothing.update(20.0) == pytest.approx(15.0)


def test_non_finite_seed_is_ignored():
    smoothing = EmaSmoothing(3)
    assert math.isnan(smoothing.seed(float("nan")))
    assert not smoothing.is_seeded


@pytest.mark.parametrize("invalid", [float("nan"), float("inf"), None])
def test_invalid_input_keeps_state(invalid):
    smoothing = EmaSmoothing(3)
    smoothing.update(10.0)
    assert math.isnan(smoothing.update(invalid))
    assert smoothing.value == 10.0
    assert smoothing.update(20.0) == pytest.approx(15.0)


def test_reset():
    smoothing = WildersSmoothing(2)
    smoothing.update(1.0)
    smoothing.reset()
    assert smoothing.value is None
    assert smoothing.update(5.0) == 5.0
