"""Checks on the package-level API."""

import numpy as np

import tawindow.technical_analysis as ta


def test_all_names_resolve():
    for name in ta.__all__:
        assert hasattr(ta, name), name


def test_top_level_usage():
    np.testing.assert_allclose(ta.sma([1, 2, 3, 4, 5], 3), [np.nan, np.nan, 2, 3, 4])
    assert ta.median([1, 2, 3, 4]) == 2.5
    assert ta.kth_smallest([5, 3, 8, 2, 9, 1], 2) == 3
    np.testing.assert_array_equal(ta.rolling_max([5, 3, 8, 2, 9, 1], 3), [np.nan, np.nan, 8, 8, 9, 9])
