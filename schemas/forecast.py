"""
Pydantic schemas for forecast request / response.

Both forecast endpoints (raw history and symbol lookup) return the same
``ForecastResponse`` so the frontend only needs to change the URL to
switch input source.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from analytics.forecasting import DEFAULT_MODEL


class _ForecastOptions(BaseModel):
    """
    Fields shared by every forecast request.

    Attributes:
        model: Selector tag (``movingAverageTrend``, ``trendSeasonality``,
               ``momentumVolatility``) or a legacy alias (``arima``,
               ``prophet``, ``lstm``). Unknown values fall back to
               ``movingAverageTrend``.
        days:  Forecast horizon in days. ``0`` returns empty sequences;
               omitted means ``DEFAULT_FORECAST_DAYS``. The upper limit is
               ``MAX_FORECAST_DAYS``, checked by the endpoint.
        seed:  Optional seed for the ``movingAverageTrend`` jitter.
    """

    model: str = DEFAULT_MODEL.value
    days: Optional[int] = Field(default=None, ge=0)
    seed: Optional[int] = Field(default=None, ge=0)


class HistoryForecastRequest(_ForecastOptions):
    """
    Payload carrying the price history inline.

    Attributes:
        history: ``[timestamp_ms, price]`` pairs, oldest first.
    """

    history: List[List[float]]

    @field_validator("history")
    @classmethod
    def check_pairs(cls, v: List[List[float]]) -> List[List[float]]:
        for point in v:
            if len(point) != 2:
                raise ValueError("each history point must be [timestamp_ms, price]")
        return v


class ForecastRequest(_ForecastOptions):
    """
    Payload for forecasting a ticker whose history the server fetches.

    Attributes:
        symbol:       Yahoo Finance ticker (e.g. ``BTC-USD``).
        history_days: Calendar days of daily closes to fetch; omitted means
                      ``DEFAULT_HISTORY_DAYS``.
    """

    symbol: str
    history_days: Optional[int] = Field(default=None, ge=1)

    @field_validator("symbol")
    @classmethod
    def normalise_symbol(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("symbol must not be empty")
        return v


class ForecastResponse(BaseModel):
    """
    Standardised forecast result returned by every forecast endpoint.

    Bounds are ``None`` where the model overflowed to a non-finite value.

    Attributes:
        symbol:           Ticker the forecast was built for, if any.
        model:            Selector tag of the model that actually ran.
        days:             Number of forecast days.
        data_points_used: Historical points fed to the model.
        dates:            ``YYYY-MM-DD`` date for each forecast day.
        forecast:         Central estimate for each day.
        upper_bound:      Upper confidence-band edge.
        lower_bound:      Lower confidence-band edge.
        model_info:       Free-form model metadata dict.
    """

    model_config = ConfigDict(protected_namespaces=())

    symbol: Optional[str] = None
    model: str
    days: int
    data_points_used: int
    dates: List[str]
    forecast: List[Optional[float]]
    upper_bound: List[Optional[float]]
    lower_bound: List[Optional[float]]
    model_info: Dict[str, Any]


class ModelListResponse(BaseModel):
    """Available model tags and the default one."""

    models: List[str]
    aliases: Dict[str, str]
    default: str
