"""Tests for rolling statistic dispatch."""

import numpy as np
import pandas as pd
import pytest

from tawindow.technical_analysis.chunking import ChunkConfig
from tawindow.technical_analysis.exceptions import InvalidChunkConfigError, InvalidParameterError
from tawindow.technical_analysis.rolling import (
    STATISTICS,
    rolling_statistic,
    rolling_statistic_chunked,
)


@pytest.mark.parametrize("statistic, method", [
    ("min", "min"), ("max", "max"), ("mean", "mean"), ("sum", "sum"), ("median", "median"),
])
def test_matches_pandas_rolling(prices, statistic, method):
    expected = getattr(pd.Series(prices).rolling(15), method)().to_numpy()
    np.testing.assert_allclose(rolling_statistic(prices, 15, statistic), expected)


def test_statistic_is_case_insensitive():
    np.testing.assert_allclose(rolling_statistic([1, 2, 3], 2, "MAX"), [np.nan, 2, 3])


@pytest.mark.parametrize("statistic", ["std", "", None])
def test_unknown_statistic(statistic):
    with pytest.raises(InvalidParameterError, match="statistic"):
        rolling_statistic([1, 2, 3], 2, statistic)


def test_statistics_listing():
    assert STATISTICS == ("max", "mean", "median", "min", "sum")


def test_windows_without_valid_samples_are_nan():
    result = rolling_statistic([1.0, np.nan, np.nan, 4.0], 2, "sum")
    np.testing.assert_allclose(result, [np.nan, 1.0, np.nan, 4.0])


@pytest.mark.parametrize("statistic", STATISTICS)
def test_chunked_matches_unchunked(gappy_prices, statistic):
    config = ChunkConfig(chunk_size=48, overlap=1)
    np.testing.assert_allclose(
        rolling_statistic_chunked(gappy_prices, 9, statistic, config),
        rolling_statistic(gappy_prices, 9, statistic),
    )


@pytest.mark.parametrize("statistic", ["max", "mean"])
def test_chunked_window_must_fit(prices, statistic):
    with pytest.raises(InvalidChunkConfigError):
        rolling_statistic_chunked(prices, 30, statistic, ChunkConfig(chunk_size=20, overlap=0))
