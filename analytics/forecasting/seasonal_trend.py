"""
analytics/forecasting/seasonal_trend.py
───────────────────────────────────────
Weighted trend + day-of-week seasonality (selector ``trendSeasonality``).

Three slopes (7, 14 and 30 days) are blended with weights 3:2:1 and a fixed
weekday offset, expressed as a fraction of the last price, is added on top.
The band widens with ``sqrt(horizon)`` scaled by recent return volatility.
"""

import logging
from typing import Any, Dict, Tuple

import numpy as np

from analytics.forecasting.base import BaseForecastor, ForecastResult, ModelSelector

logger = logging.getLogger(__name__)

# (window in days, weight)
TREND_WEIGHTS: Tuple[Tuple[int, float], ...] = ((7, 3.0), (14, 2.0), (30, 1.0))

# Fraction of the last price added per weekday, Sunday first.
WEEKDAY_SEASONALITY: Tuple[float, ...] = (0.005, -0.003, 0.001, 0.002, -0.001, -0.002, -0.002)

VOLATILITY_WINDOW = 30


class TrendSeasonalityForecaster(BaseForecastor):
    """Blended multi-window trend with a weekly seasonal pattern."""

    selector = ModelSelector.TREND_SEASONALITY

    def __init__(self) -> None:
        super().__init__()
        self._weighted_trend: float = 0.0
        self._volatility: float = 0.0

    # ── fit ──────────────────────────────────────────────────────────────

    def _fit_model(self, prices: np.ndarray) -> None:
        total_weight = sum(weight for _, weight in TREND_WEIGHTS)
        self._weighted_trend = sum(
            self._trend(prices, window) * weight for window, weight in TREND_WEIGHTS
        ) / total_weight

        # Squared simple returns over the window; the first price has no
        # predecessor and contributes zero. Divisor stays fixed at window - 1.
        recent = prices[-VOLATILITY_WINDOW:]
        squared_returns = (recent[1:] / recent[:-1] - 1.0) ** 2
        self._volatility = float(
            np.sqrt(squared_returns.sum() / (VOLATILITY_WINDOW - 1)) * self._last_price
        )

        logger.debug(
            "trendSeasonality fitted: trend=%.6f volatility=%.6f",
            self._weighted_trend,
            self._volatility,
        )

    # ── forecast ─────────────────────────────────────────────────────────

    def forecast(self, periods: int = 7) -> ForecastResult:
        """
        Extend the blended trend and apply weekday offsets.

        Args:
            periods: Number of future days to forecast.

        Returns:
            ForecastResult whose band grows with ``sqrt(h)``.

        Raises:
            ValueError: If called before fit().
        """
        self._check_fitted()

        start_weekday = self._sunday_weekday()
        forecast, upper, lower = [], [], []

        for h in range(1, periods + 1):
            seasonal = WEEKDAY_SEASONALITY[(start_weekday + h) % 7] * self._last_price
            point = self._last_price + self._weighted_trend * h + seasonal
            margin = self._volatility * np.sqrt(h)
            forecast.append(float(point))
            upper.append(float(point + margin))
            lower.append(float(point - margin))

        return ForecastResult(
            forecast=forecast,
            upper_bound=upper,
            lower_bound=lower,
            dates=self._forecast_dates(periods),
        )

    def get_model_info(self) -> Dict[str, Any]:
        """Return trend/seasonality model metadata."""
        info = super().get_model_info()
        info.update(
            {
                "weighted_trend": round(self._weighted_trend, 6) if self._is_fitted else None,
                "volatility": round(self._volatility, 6) if self._is_fitted else None,
            }
        )
        return info
