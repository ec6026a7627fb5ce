"""
analytics/forecasting/engine.py
───────────────────────────────
Single entry point for price forecasting.

``predict`` turns ``[timestamp_ms, price]`` pairs into a ForecastResult, or
``None`` when there is not enough history or the computation fails. All
failure modes collapse to ``None`` here; callers decide what to show.
``forecast_with_info`` does the same and also hands back the fitted
model's ``get_model_info()``.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from analytics.forecasting.base import (
    MIN_HISTORY_POINTS,
    ForecastResult,
    ModelSelector,
    build_price_series,
)
from analytics.forecasting.factory import DEFAULT_MODEL, ForecastingFactory

logger = logging.getLogger(__name__)


def forecast_with_info(
    history: Iterable[Sequence[float]],
    model: Union[str, ModelSelector, None] = DEFAULT_MODEL,
    days_to_predict: int = 7,
    rng: Optional[np.random.Generator] = None,
    min_points: int = MIN_HISTORY_POINTS,
) -> Optional[Tuple[ForecastResult, Dict[str, Any]]]:
    """
    Like :func:`predict`, but also return the fitted model's metadata.

    Returns:
        ``(result, model_info)``, or ``None`` under the same conditions
        as :func:`predict`.
    """
    if history is None:
        logger.warning("Not enough historical data for prediction (0 < %d)", min_points)
        return None

    try:
        points = list(history)
        if len(points) < min_points:
            logger.warning(
                "Not enough historical data for prediction (%d < %d)",
                len(points),
                min_points,
            )
            return None

        prices = build_price_series(points)
        name = ForecastingFactory.resolve(model)
        kwargs = {}
        if name == ModelSelector.MOVING_AVERAGE_TREND.value:
            kwargs["rng"] = rng
        forecaster = ForecastingFactory.create_forecaster(name, **kwargs)
        forecaster.fit(prices)
        result = forecaster.forecast(periods=max(int(days_to_predict), 0))
        return result, forecaster.get_model_info()
    except Exception:
        logger.exception("Error in prediction with model %r", model)
        return None


def predict(
    history: Iterable[Sequence[float]],
    model: Union[str, ModelSelector, None] = DEFAULT_MODEL,
    days_to_predict: int = 7,
    rng: Optional[np.random.Generator] = None,
    min_points: int = MIN_HISTORY_POINTS,
) -> Optional[ForecastResult]:
    """
    Forecast ``days_to_predict`` days following the last historical point.

    Args:
        history:         ``[timestamp_ms, price]`` pairs, oldest first. Any
                         iterable is accepted; it is read once.
        model:           Selector tag, legacy alias or ``ModelSelector``.
                         Unknown values fall back to ``movingAverageTrend``.
        days_to_predict: Forecast horizon in days. Zero or negative gives
                         an empty result.
        rng:             Generator for the ``movingAverageTrend`` jitter.
                         Ignored by the other models.
        min_points:      Minimum history length.

    Returns:
        ForecastResult, or ``None`` if history is shorter than
        ``min_points`` or the model raised.
    """
    outcome = forecast_with_info(history, model, days_to_predict, rng, min_points)
    return None if outcome is None else outcome[0]
