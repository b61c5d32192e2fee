"""
Recursive smoothers used by the exponential moving averages.

Each strategy holds the running value of a single pass over one series and
applies ``s = α * x + (1 - α) * s_prev``. Subclasses only choose α.

Classes:
    SmoothingStrategy: Shared recurrence and NaN handling
    EmaSmoothing: α = 2/(N+1), used by EMA
    WildersSmoothing: α = 1/N, used by RMA
"""

import math
from abc import ABC, abstractmethod
from typing import Optional


def _is_valid(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


class SmoothingStrategy(ABC):
    """
    Base class for α-weighted recursive smoothing.

    Invalid samples (NaN, None, ±inf) produce NaN for that step and do not
    touch the running value, so the next valid sample continues from the
    last valid result.
    """

    def __init__(self, period: int):
        """
        Args:
            period (int): Smoothing period N.
        """
        self.period = period
        self._state: Optional[float] = None

    @abstractmethod
    def get_alpha(self) -> float:
        """Weight given to the newest sample."""

    def seed(self, value: float) -> float:
        """
        Start the recurrence from ``value``.

        A non-finite seed is rejected: NaN is returned and the strategy stays
        unseeded.
        """
        if not _is_valid(value):
            return math.nan
        self._state = float(value)
        return self._state

    def update(self, sample: float) -> float:
        """
        Feed one sample and return the smoothed value at this step.

        Before seeding, the first valid sample becomes the seed.

        Args:
            sample (float): Next observation.

        Returns:
            float: Smoothed value, or NaN if ``sample`` is invalid.
        """
        if not _is_valid(sample):
            return math.nan
        if self._state is None:
            return self.seed(sample)

        alpha = self.get_alpha()
        blended = alpha * sample + (1 - alpha) * self._state
        if not math.isfinite(blended):
            return math.nan

        self._state = blended
        return blended

    @property
    def value(self) -> Optional[float]:
        """Last valid smoothed value, None before seeding."""
        return self._state

    @property
    def is_seeded(self) -> bool:
        return self._state is not None

    def reset(self) -> None:
        """Forget the running value."""
        self._state = None


class EmaSmoothing(SmoothingStrategy):
    """Exponential moving average weighting, α = 2/(N+1)."""

    def get_alpha(self) -> float:
        return 2.0 / (self.period + 1)


class WildersSmoothing(SmoothingStrategy):
    """
    Wilder's smoothing, α = 1/N.

    Reacts more slowly than EMA for the same N; this is the RMA/SMMA
    recurrence behind RSI and ATR.
    """

    def get_alpha(self) -> float:
        return 1.0 / self.period
