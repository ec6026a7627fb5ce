"""
analytics/forecasting/momentum.py
─────────────────────────────────
Momentum / volatility forecaster (selector ``momentumVolatility``).

A blend of four slopes drives exponential growth that is damped as the
horizon lengthens. The band is multiplicative, ``exp(±k·σ·sqrt(h))``
around the forecast, so the lower bound stays positive while the
forecast does.

σ here is the population std of log returns scaled by the last price, so
high-priced assets get very wide (possibly overflowing) bands. Overflow
is left to IEEE semantics: ``inf`` upper bound, ``0.0`` lower bound.
"""

import logging
from typing import Any, Dict, Tuple

import numpy as np

from analytics.forecasting.base import BaseForecastor, ForecastResult, ModelSelector

logger = logging.getLogger(__name__)

# (window in days, weight)
TREND_WEIGHTS: Tuple[Tuple[int, float], ...] = ((7, 4.0), (14, 2.0), (30, 1.5), (60, 1.0))

DAMPING_RATE = 0.05
BAND_SCALE = 0.05


class MomentumVolatilityForecaster(BaseForecastor):
    """Damped exponential momentum with log-normal style bounds."""

    selector = ModelSelector.MOMENTUM_VOLATILITY

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

        log_returns = np.diff(np.log(prices))
        self._volatility = float(np.std(log_returns) * self._last_price)

        logger.debug(
            "momentumVolatility fitted: trend=%.6f volatility=%.6f",
            self._weighted_trend,
            self._volatility,
        )

    # ── forecast ─────────────────────────────────────────────────────────

    def forecast(self, periods: int = 7) -> ForecastResult:
        """
        Compound the blended trend with exponential damping.

        The damping factor is 1 on the first forecast day and decays by
        ``exp(-0.05)`` per day after that.

        Args:
            periods: Number of future days to forecast.

        Returns:
            ForecastResult with a multiplicative band.

        Raises:
            ValueError: If called before fit().
        """
        self._check_fitted()

        periods = max(periods, 0)
        horizon = np.arange(1, periods + 1, dtype=float)
        growth_rate = self._weighted_trend / self._last_price

        with np.errstate(over="ignore"):
            damping = np.exp(-DAMPING_RATE * (horizon - 1))
            forecast = self._last_price * np.exp(growth_rate * horizon * damping)
            band = self._volatility * np.sqrt(horizon) * BAND_SCALE
            upper = forecast * np.exp(band)
            lower = forecast * np.exp(-band)

        if not np.isfinite(upper).all():
            logger.warning(
                "momentumVolatility upper bound overflowed (volatility=%.4f)",
                self._volatility,
            )

        return ForecastResult(
            forecast=forecast.tolist(),
            upper_bound=upper.tolist(),
            lower_bound=lower.tolist(),
            dates=self._forecast_dates(periods),
        )

    def get_model_info(self) -> Dict[str, Any]:
        """Return momentum model metadata."""
        info = super().get_model_info()
        info.update(
            {
                "weighted_trend": round(self._weighted_trend, 6) if self._is_fitted else None,
                "volatility": round(self._volatility, 6) if self._is_fitted else None,
            }
        )
        return info
