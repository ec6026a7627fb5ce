"""
analytics/forecasting: Heuristic price forecasters.

Public API
----------
    from analytics.forecasting import predict, ModelSelector, ForecastResult
    from analytics.forecasting import ForecastingFactory, forecast_with_info
    from analytics.forecasting import (
        MovingAverageTrendForecaster,
        TrendSeasonalityForecaster,
        MomentumVolatilityForecaster,
    )
"""

from analytics.forecasting.base import (
    MIN_HISTORY_POINTS,
    BaseForecastor,
    ForecastResult,
    ModelSelector,
    build_price_series,
)
from analytics.forecasting.engine import forecast_with_info, predict
from analytics.forecasting.factory import DEFAULT_MODEL, ForecastingFactory
from analytics.forecasting.momentum import MomentumVolatilityForecaster
from analytics.forecasting.moving_average import MovingAverageTrendForecaster
from analytics.forecasting.seasonal_trend import TrendSeasonalityForecaster

__all__ = [
    "MIN_HISTORY_POINTS",
    "DEFAULT_MODEL",
    "BaseForecastor",
    "ForecastResult",
    "ModelSelector",
    "ForecastingFactory",
    "MovingAverageTrendForecaster",
    "TrendSeasonalityForecaster",
    "MomentumVolatilityForecaster",
    "build_price_series",
    "forecast_with_info",
    "predict",
]
