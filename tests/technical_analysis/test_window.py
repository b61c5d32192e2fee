"""Tests for the sliding-window processor."""

import math

import numpy as np
import pytest

from tawindow.technical_analysis.exceptions import EmptyDataError, InvalidLengthError
from tawindow.technical_analysis.window import iter_windows, process


def _sum(values, _i):
    return values.sum() if values.size else math.nan


def test_leading_positions_are_nan():
    result = process([1, 2, 3, 4], 3, _sum)
    assert np.isnan(result[:2]).all()
    np.testing.assert_array_equal(result[2:], [6.0, 9.0])


def test_output_has_input_length(prices):
    assert process(prices, 20, _sum).size == prices.size


def test_window_larger_than_series_is_all_nan():
    result = process([1, 2, 3], 5, _sum)
    assert result.size == 3
    assert np.isnan(result).all()


@pytest.mark.parametrize("window_size", [0, -1, 1.5])
def test_invalid_window_size(window_size):
    with pytest.raises(InvalidLengthError):
        process([1, 2, 3], window_size, _sum)


def test_empty_series():
    with pytest.raises(EmptyDataError):
        process([], 3, _sum)


def test_reducer_receives_only_valid_values_and_index():
    seen = []

    def reducer(values, i):
        seen.append((i, values.tolist()))
        return float(values.size)

    result = process([1, np.nan, 3, np.inf, 5], 2, reducer)

    assert seen == [(1, [1.0]), (2, [3.0]), (3, [3.0]), (4, [5.0])]
    np.testing.assert_array_equal(result[1:], [1.0, 1.0, 1.0, 1.0])


def test_empty_valid_window_follows_reducer_policy():
    result = process([np.nan, np.nan, 1.0], 2, _sum)
    assert np.isnan(result[1])
    assert result[2] == 1.0


def test_non_finite_reducer_results_become_nan():
    result = process([1, 2, 3], 1, lambda values, i: math.inf if i == 1 else values[0])
    assert result[0] == 1.0
    assert np.isnan(result[1])
    assert result[2] == 3.0


def test_does_not_mutate_caller_array():
    data = np.array([1.0, np.nan, 3.0])

    def reducer(values, _i):
        values[:] = 0.0
        return 0.0

    process(data, 2, reducer)
    assert data[0] == 1.0 and data[2] == 3.0


def test_iter_windows_yields_raw_windows():
    windows = list(iter_windows([1, 2, np.nan, 4], 2))
    assert [i for i, _ in windows] == [1, 2, 3]
    np.testing.assert_array_equal(windows[0][1], [1.0, 2.0])
    assert np.isnan(windows[1][1][1])


def test_iter_windows_validates_eagerly():
    with pytest.raises(InvalidLengthError):
        iter_windows([1, 2, 3], 0)
