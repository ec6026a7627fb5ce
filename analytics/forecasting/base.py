"""
analytics/forecasting/base.py
─────────────────────────────
Shared types and the abstract base class for the heuristic forecasters.

Classes
-------
ModelSelector
    String enum naming the three forecasting models.
ForecastResult
    Immutable record of four aligned output sequences.
BaseForecastor
    Abstract interface every model must implement, plus the shared
    preprocessing (price extraction, last price/date, forecast dates).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

# Minimum number of historical points before any model will run.
MIN_HISTORY_POINTS = 30


# ─── Types ────────────────────────────────────────────────────────────────────


class ModelSelector(str, Enum):
    """Tag selecting one of the three forecasting models."""

    MOVING_AVERAGE_TREND = "movingAverageTrend"
    TREND_SEASONALITY = "trendSeasonality"
    MOMENTUM_VOLATILITY = "momentumVolatility"


@dataclass(frozen=True)
class ForecastResult:
    """
    Output of a single forecast run.

    All four lists have the same length (the forecast horizon).

    Attributes:
        forecast:    Predicted price per day.
        upper_bound: Upper edge of the confidence band per day.
        lower_bound: Lower edge of the confidence band per day.
        dates:       ``YYYY-MM-DD`` strings, one per forecast day.
    """

    forecast: List[float] = field(default_factory=list)
    upper_bound: List[float] = field(default_factory=list)
    lower_bound: List[float] = field(default_factory=list)
    dates: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.forecast)

    def to_dict(self) -> Dict[str, List]:
        """Return the camelCase shape consumed by the charting layer."""
        return {
            "forecast": list(self.forecast),
            "upperBound": list(self.upper_bound),
            "lowerBound": list(self.lower_bound),
            "dates": list(self.dates),
        }


# ─── Input conversion ─────────────────────────────────────────────────────────


def build_price_series(history: Sequence[Sequence[float]]) -> pd.Series:
    """
    Convert ``[timestamp_ms, price]`` pairs into a UTC-indexed price Series.

    Order is preserved as given; no sorting or positivity checks are made.

    Args:
        history: Ordered sequence of ``(timestamp_ms, price)`` pairs.

    Returns:
        pd.Series of float prices with a UTC ``DatetimeIndex``.

    Raises:
        ValueError: If a point does not have exactly two components.
        TypeError:  If a timestamp or price is not numeric.
    """
    timestamps: List[int] = []
    prices: List[float] = []
    for point in history:
        if len(point) != 2:
            raise ValueError(f"Expected [timestamp, price] pair, got {point!r}")
        timestamps.append(int(point[0]))
        prices.append(float(point[1]))

    index = pd.to_datetime(timestamps, unit="ms", utc=True)
    return pd.Series(prices, index=index, name="price", dtype=float)


# ─── Abstract Base ────────────────────────────────────────────────────────────


class BaseForecastor(ABC):
    """
    Abstract base class for the heuristic price forecasters.

    Enforces a fit → forecast lifecycle. ``fit`` captures the shared
    preprocessing state (``_prices``, ``_last_price``, ``_last_date``) and
    lets each subclass derive its own parameters in ``_fit_model``.
    """

    selector: ModelSelector

    def __init__(self) -> None:
        self._prices: Optional[np.ndarray] = None
        self._last_price: float = 0.0
        self._last_date: Optional[pd.Timestamp] = None
        self._is_fitted: bool = False

    # ── lifecycle ────────────────────────────────────────────────────────

    def fit(self, prices: pd.Series) -> None:
        """
        Capture the price history and compute model parameters.

        Args:
            prices: pd.Series with a DatetimeIndex in chronological order.

        Raises:
            TypeError:  If prices is not a pd.Series with DatetimeIndex.
            ValueError: If the series is empty.
        """
        self._validate_prices(prices, min_samples=1)

        self._prices = prices.to_numpy(dtype=float)
        self._last_price = float(self._prices[-1])
        last_ts = prices.index[-1]
        if last_ts.tz is not None:
            last_ts = last_ts.tz_convert("UTC").tz_localize(None)
        self._last_date = last_ts.normalize()

        self._fit_model(self._prices)
        self._is_fitted = True

    @abstractmethod
    def _fit_model(self, prices: np.ndarray) -> None:
        """Derive model parameters from the raw price array."""

    @abstractmethod
    def forecast(self, periods: int = 7) -> ForecastResult:
        """
        Generate forward-looking forecasts.

        Args:
            periods: Number of future days to predict. Zero or negative
                     yields an empty result.

        Returns:
            ForecastResult with ``periods`` entries per sequence.

        Raises:
            ValueError: If called before fit().
        """

    def get_model_info(self) -> Dict[str, Any]:
        """
        Return model metadata for logging / API responses.

        Returns:
            Dict with at least ``model_name``, ``version`` and ``selector``.
        """
        return {
            "model_name": self.__class__.__name__,
            "version": "1.0",
            "selector": self.selector.value,
            "is_fitted": self._is_fitted,
        }

    # ── Shared helpers ────────────────────────────────────────────────────

    def _check_fitted(self) -> None:
        if not self._is_fitted or self._prices is None:
            raise ValueError("Call fit() before forecast()")

    def _forecast_dates(self, periods: int) -> List[str]:
        """Calendar days following the last historical date, ``YYYY-MM-DD``."""
        return [
            (self._last_date + timedelta(days=h)).strftime("%Y-%m-%d")
            for h in range(1, periods + 1)
        ]

    def _sunday_weekday(self) -> int:
        """Weekday of the last historical date with Sunday = 0."""
        return self._last_date.isoweekday() % 7

    @staticmethod
    def _trend(prices: np.ndarray, window: int) -> float:
        """
        Linear slope per day over the last ``window`` steps.

        Returns 0.0 when the history has no point ``window`` steps before
        the last one.
        """
        if len(prices) <= window:
            return 0.0
        return float((prices[-1] - prices[-1 - window]) / window)

    @staticmethod
    def _validate_prices(prices: pd.Series, min_samples: int = 1) -> None:
        """
        Validate that `prices` is a non-null pd.Series with DatetimeIndex.

        Args:
            prices:      The series to validate.
            min_samples: Minimum required data points.

        Raises:
            TypeError:  Wrong type or wrong index type.
            ValueError: Too few rows, or NaN values present.
        """
        if not isinstance(prices, pd.Series):
            raise TypeError("prices must be a pandas Series")
        if not isinstance(prices.index, pd.DatetimeIndex):
            raise TypeError("prices must have a DatetimeIndex")
        if len(prices) < min_samples:
            raise ValueError(
                f"Need at least {min_samples} data points, got {len(prices)}"
            )
        if prices.isnull().any():
            raise ValueError("prices contains NaN values; clean data before fitting")
