"""Tests for quickselect order statistics."""

import math

import numpy as np
import pytest

from tawindow.technical_analysis.exceptions import (
    EmptyAfterSanitizationError,
    InvalidPercentileError,
    KOutOfBoundsError,
)
from tawindow.technical_analysis.order_statistics import (
    _partition,
    kth_largest,
    kth_smallest,
    median,
    percentile,
    rolling_median,
    rolling_percentile,
)


class TestKthSmallest:

    def test_example(self):
        assert kth_smallest([5, 3, 8, 2, 9, 1], 2) == 3

    def test_every_rank_matches_sorted(self, rng):
        values = rng.normal(size=101)
        expected = np.sort(values)
        for k in range(values.size):
            assert kth_smallest(values, k) == expected[k]

    @pytest.mark.parametrize("data", [
        list(range(50)),
        list(range(50, 0, -1)),
        [7.0] * 30,
        [1, 2, 1, 2, 1, 2, 3, 3, 3],
    ])
    def test_sorted_reversed_and_duplicate_inputs(self, data):
        expected = sorted(data)
        for k in range(len(data)):
            assert kth_smallest(data, k) == expected[k]

    def test_ignores_invalid_values(self):
        data = [np.nan, 4.0, None, np.inf, 1.0, -np.inf, 3.0]
        assert kth_smallest(data, 0) == 1.0
        assert kth_smallest(data, 2) == 4.0

    def test_does_not_mutate_input(self):
        data = np.array([5.0, 3.0, 8.0, 2.0])
        kth_smallest(data, 1)
        np.testing.assert_array_equal(data, [5.0, 3.0, 8.0, 2.0])

    @pytest.mark.parametrize("k", [-1, 6, 2.0, True])
    def test_k_out_of_bounds(self, k):
        with pytest.raises(KOutOfBoundsError) as exc_info:
            kth_smallest([5, 3, 8, 2, 9, 1], k)
        assert exc_info.value.max_index == 5
        assert "between 0 and 5" in str(exc_info.value)

    def test_bounds_use_valid_count(self):
        with pytest.raises(KOutOfBoundsError):
            kth_smallest([1.0, np.nan, 2.0], 2)

    @pytest.mark.parametrize("data", [[], [np.nan, None, np.inf]])
    def test_empty_after_sanitization(self, data):
        with pytest.raises(EmptyAfterSanitizationError):
            kth_smallest(data, 0)


class TestPartition:

    def test_three_bands_around_pivot(self, rng):
        work = rng.integers(0, 5, size=200).astype(float).tolist()
        lt, gt = _partition(work, 0, len(work) - 1)
        pivot = work[lt]
        assert all(v < pivot for v in work[:lt])
        assert all(v == pivot for v in work[lt:gt + 1])
        assert all(v > pivot for v in work[gt + 1:])

    def test_equal_values_form_a_single_band(self):
        work = [3.0] * 50
        assert _partition(work, 0, 49) == (0, 49)

    def test_heavily_repeated_values(self, rng):
        values = np.round(rng.normal(size=20000) * 2) / 2
        assert median(values) == np.median(values)
        assert median(np.full(20000, 7.5)) == 7.5
        for k in (0, 9999, 19999):
            assert kth_smallest(values, k) == np.sort(values)[k]


class TestKthLargest:

    def test_largest_ranks(self):
        data = [5, 3, 8, 2, 9, 1]
        assert kth_largest(data, 0) == 9
        assert kth_largest(data, 1) == 8
        assert kth_largest(data, 5) == 1

    def test_out_of_bounds(self):
        with pytest.raises(KOutOfBoundsError):
            kth_largest([1, 2], 2)


class TestMedian:

    def test_odd_length(self):
        assert median([1, 2, 3, 4, 5]) == 3

    def test_even_length(self):
        assert median([1, 2, 3, 4]) == 2.5

    def test_matches_numpy(self, rng):
        for size in (1, 2, 9, 10, 255, 256):
            values = rng.normal(size=size)
            assert median(values) == pytest.approx(np.median(values))

    def test_ignores_nan(self):
        assert median([np.nan, 10.0, 2.0, np.nan, 6.0]) == 6.0

    def test_all_invalid(self):
        with pytest.raises(EmptyAfterSanitizationError):
            median([np.nan])


class TestPercentile:

    @pytest.mark.parametrize("p, expected", [(0, 1), (50, 3), (100, 5), (25, 2), (99, 4)])
    def test_floor_rank(self, p, expected):
        assert percentile([5, 1, 4, 2, 3], p) == expected

    @pytest.mark.parametrize("p", [-0.1, 100.5, float("nan"), "50", None])
    def test_invalid_percentile(self, p):
        with pytest.raises(InvalidPercentileError):
            percentile([1, 2, 3], p)

    def test_percentile_checked_before_data(self):
        with pytest.raises(InvalidPercentileError):
            percentile([], 150)

    def test_empty(self):
        with pytest.raises(EmptyAfterSanitizationError):
            percentile([], 50)


class TestRollingOrderStatistics:

    def test_rolling_median_matches_numpy(self, prices):
        result = rolling_median(prices, 5)
        assert np.isnan(result[:4]).all()
        for i in range(4, prices.size):
            assert result[i] == pytest.approx(np.median(prices[i - 4:i + 1]))

    def test_rolling_median_empty_window_is_nan(self):
        result = rolling_median([np.nan, np.nan, 4.0, 2.0], 2)
        assert math.isnan(result[1])
        assert result[2] == 4.0
        assert result[3] == 3.0

    def test_rolling_percentile(self):
        result = rolling_percentile([1, 2, 3, 4, 5], 3, 100)
        np.testing.assert_array_equal(result, [np.nan, np.nan, 3, 4, 5])

    def test_rolling_percentile_validates_p(self):
        with pytest.raises(InvalidPercentileError):
            rolling_percentile([1, 2, 3], 2, 101)
