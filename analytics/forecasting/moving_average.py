"""
analytics/forecasting/moving_average.py
───────────────────────────────────────
Moving-average + recent-trend forecaster (selector ``movingAverageTrend``).

The point forecast extends the slope of the last seven days and adds a
small uniform jitter proportional to that slope, so repeated runs with an
unseeded generator differ. The confidence band has constant width,
``±1.96`` standard deviations of the last 30 prices around the 7-day
moving average.

Both averages divide by their nominal window size (7 and 30) even when
fewer prices are available.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np

from analytics.forecasting.base import BaseForecastor, ForecastResult, ModelSelector

logger = logging.getLogger(__name__)

MA_WINDOW = 7
STD_WINDOW = 30
TREND_WINDOW = 7
Z_SCORE = 1.96  # ~95% band
JITTER_SCALE = 0.5


class MovingAverageTrendForecaster(BaseForecastor):
    """
    Trend extrapolation with random jitter and a constant-width band.

    Args:
        rng: Source of the uniform jitter. Defaults to a fresh, unseeded
             ``numpy.random.Generator``; pass a seeded one for
             reproducible forecasts.
    """

    selector = ModelSelector.MOVING_AVERAGE_TREND

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__()
        self._rng = rng if rng is not None else np.random.default_rng()

        self._moving_average: float = 0.0
        self._std_dev: float = 0.0
        self._recent_trend: float = 0.0

    # ── fit ──────────────────────────────────────────────────────────────

    def _fit_model(self, prices: np.ndarray) -> None:
        if len(prices) < TREND_WINDOW + 1:
            raise ValueError(
                f"Need at least {TREND_WINDOW + 1} prices for the recent trend, "
                f"got {len(prices)}"
            )

        self._moving_average = float(prices[-MA_WINDOW:].sum() / MA_WINDOW)

        recent = prices[-STD_WINDOW:]
        self._std_dev = float(
            np.sqrt(((recent - self._moving_average) ** 2).sum() / STD_WINDOW)
        )
        self._recent_trend = float(
            (prices[-1] - prices[-1 - TREND_WINDOW]) / TREND_WINDOW
        )

        logger.debug(
            "movingAverageTrend fitted: ma=%.6f std=%.6f trend=%.6f",
            self._moving_average,
            self._std_dev,
            self._recent_trend,
        )

    # ── forecast ─────────────────────────────────────────────────────────

    def forecast(self, periods: int = 7) -> ForecastResult:
        """
        Project the recent trend forward with jitter.

        Args:
            periods: Number of future days to forecast.

        Returns:
            ForecastResult with a constant-width band.

        Raises:
            ValueError: If called before fit().
        """
        self._check_fitted()

        margin = Z_SCORE * self._std_dev
        forecast, upper, lower = [], [], []

        for h in range(1, periods + 1):
            noise = (self._rng.random() - 0.5) * self._recent_trend * JITTER_SCALE
            point = self._last_price + self._recent_trend * h + noise
            forecast.append(point)
            upper.append(point + margin)
            lower.append(point - margin)

        return ForecastResult(
            forecast=forecast,
            upper_bound=upper,
            lower_bound=lower,
            dates=self._forecast_dates(periods),
        )

    def get_model_info(self) -> Dict[str, Any]:
        """Return moving-average model metadata."""
        info = super().get_model_info()
        info.update(
            {
                "moving_average": round(self._moving_average, 6) if self._is_fitted else None,
                "std_dev": round(self._std_dev, 6) if self._is_fitted else None,
                "recent_trend": round(self._recent_trend, 6) if self._is_fitted else None,
            }
        )
        return info
