"""
Technical Analysis Indicators Module

Rolling extrema, smoothing strategies and the moving-average family built on
the window primitives.
"""

from .smoothing import SmoothingStrategy, WildersSmoothing, EmaSmoothing
from .minmax import MonotonicDeque, RollingMinMax, rolling_max, rolling_min
from .moving_averages import (
    MovingAverageType,
    moving_average,
    moving_average_chunked,
    sma,
    ema,
    wma,
    hull_moving_average,
    rma,
)

__all__ = [
    # Rolling extrema
    "MonotonicDeque",
    "RollingMinMax",
    "rolling_max",
    "rolling_min",

    # Moving averages
    "MovingAverageType",
    "moving_average",
    "moving_average_chunked",
    "sma",
    "ema",
    "wma",
    "hull_moving_average",
    "rma",

    # Smoothing strategies
    "SmoothingStrategy",
    "WildersSmoothing",
    "EmaSmoothing",
]
