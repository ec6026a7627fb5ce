"""
=============================================================================
FORECASTING FACTORY - Model Selection and Management
=============================================================================

Maps selector tags to forecaster classes. Canonical tags are the
``ModelSelector`` values; the legacy names ``arima``, ``prophet`` and
``lstm`` are accepted as aliases. Anything else resolves to the default
model (``movingAverageTrend``).

Usage:
    from analytics.forecasting.factory import ForecastingFactory

    forecaster = ForecastingFactory.create_forecaster("trendSeasonality")

    # Model A accepts a seeded generator
    forecaster = ForecastingFactory.create_forecaster(
        "movingAverageTrend",
        rng=np.random.default_rng(42),
    )
=============================================================================
"""

import logging
from typing import Any, Dict, Type, Union

from analytics.forecasting.base import BaseForecastor, ModelSelector
from analytics.forecasting.momentum import MomentumVolatilityForecaster
from analytics.forecasting.moving_average import MovingAverageTrendForecaster
from analytics.forecasting.seasonal_trend import TrendSeasonalityForecaster

logger = logging.getLogger(__name__)

DEFAULT_MODEL = ModelSelector.MOVING_AVERAGE_TREND


class ForecastingFactory:
    """
    Factory for creating forecaster instances from selector tags.

    Unknown tags never raise; they fall back to ``DEFAULT_MODEL``.
    """

    # Registry of available models
    _models: Dict[str, Type[BaseForecastor]] = {
        ModelSelector.MOVING_AVERAGE_TREND.value: MovingAverageTrendForecaster,
        ModelSelector.TREND_SEASONALITY.value: TrendSeasonalityForecaster,
        ModelSelector.MOMENTUM_VOLATILITY.value: MomentumVolatilityForecaster,
    }

    _aliases: Dict[str, str] = {
        "arima": ModelSelector.MOVING_AVERAGE_TREND.value,
        "prophet": ModelSelector.TREND_SEASONALITY.value,
        "lstm": ModelSelector.MOMENTUM_VOLATILITY.value,
    }

    @classmethod
    def resolve(cls, model_type: Union[str, ModelSelector, None]) -> str:
        """
        Map a tag, alias or ``ModelSelector`` to a registered model name.

        Args:
            model_type: Requested model. ``None`` or unknown values resolve
                        to the default model.

        Returns:
            Name of a registered model.
        """
        if isinstance(model_type, ModelSelector):
            return model_type.value

        if isinstance(model_type, str):
            if model_type in cls._models:
                return model_type
            alias = cls._aliases.get(model_type.strip().lower())
            if alias is not None:
                return alias

        logger.warning(
            "Unknown model type %r, falling back to %s", model_type, DEFAULT_MODEL.value
        )
        return DEFAULT_MODEL.value

    @classmethod
    def create_forecaster(
        cls,
        model_type: Union[str, ModelSelector, None] = DEFAULT_MODEL,
        **kwargs: Any
    ) -> BaseForecastor:
        """
        Create a forecasting model instance.

        Args:
            model_type: Tag, alias or ``ModelSelector`` of the model.
            **kwargs:   Keyword arguments passed to the model's __init__.

        Returns:
            An instance of the resolved forecasting model.

        Raises:
            ValueError: If kwargs don't match the model's constructor.
        """
        name = cls.resolve(model_type)
        model_class = cls._models[name]
        logger.debug("Creating %s forecaster with params: %s", name, kwargs)

        try:
            return model_class(**kwargs)
        except TypeError as e:
            raise ValueError(f"Invalid parameters for {name}: {e}") from e

    @classmethod
    def register_model(
        cls,
        name: str,
        model_class: Type[BaseForecastor]
    ) -> None:
        """
        Register a new forecasting model class.

        Args:
            name: Name to register the model under.
            model_class: Class that inherits from BaseForecastor

        Raises:
            TypeError: If model_class does not inherit from BaseForecastor
            ValueError: If name already exists
        """
        if not isinstance(model_class, type) or not issubclass(model_class, BaseForecastor):
            raise TypeError(
                f"{getattr(model_class, '__name__', model_class)} must inherit from BaseForecastor"
            )

        if name in cls._models or name in cls._aliases:
            raise ValueError(
                f"Model '{name}' is already registered. "
                f"Use a different name or update the existing model."
            )

        cls._models[name] = model_class
        logger.info("Registered new forecasting model: %s", name)

    @classmethod
    def list_available_models(cls) -> list[str]:
        """List all registered model names (aliases excluded)."""
        return list(cls._models.keys())

    @classmethod
    def list_aliases(cls) -> Dict[str, str]:
        """Map of legacy alias → registered model name."""
        return dict(cls._aliases)

    @classmethod
    def get_model_info(cls, model_type: Union[str, ModelSelector]) -> Dict[str, Any]:
        """
        Get information about a specific model type.

        Args:
            model_type: Tag, alias or ``ModelSelector`` of the model.

        Returns:
            Dictionary containing model information
        """
        name = cls.resolve(model_type)
        model_class = cls._models[name]
        return {
            "name": name,
            "class": model_class.__name__,
            "module": model_class.__module__,
            "doc": model_class.__doc__,
        }
