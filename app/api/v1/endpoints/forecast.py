"""
app/api/v1/endpoints/forecast.py
──────────────────────────────────
Forecast endpoints.

Routes
------
GET  /api/v1/forecast/models   Available model tags and aliases.
POST /api/v1/forecast/         Forecast from an inline price history.
POST /api/v1/forecast/symbol   Fetch daily closes for a ticker, then forecast.

Both POST routes return ``ForecastResponse``.

Design note
-----------
Fetching and model maths are blocking. Each endpoint offloads the work to
a thread-pool executor so FastAPI's asyncio event loop is never blocked.
Requests are independent; a client that fires several in a row must drop
stale responses itself.
"""

import asyncio
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np
from fastapi import APIRouter, Depends, HTTPException

from analytics.forecasting import DEFAULT_MODEL, ForecastingFactory, forecast_with_info
from app.api.dependencies import get_app_settings, get_fetcher
from core.config import Settings
from data_engine.fetcher import YFinanceFetcher
from schemas.forecast import (
    ForecastRequest,
    ForecastResponse,
    HistoryForecastRequest,
    ModelListResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="forecast")

INSUFFICIENT_DATA_DETAIL = "Not enough historical data available for prediction"
FORECAST_FAILED_DETAIL = "Failed to generate forecast. Please try again later."


class ForecastInputError(ValueError):
    """The request cannot be forecast as sent; reported as HTTP 422."""


# ── helpers ───────────────────────────────────────────────────────────────────


def _finite_or_none(values: Sequence[float]) -> List[Optional[float]]:
    """JSON has no inf/NaN; report them as null."""
    return [v if math.isfinite(v) else None for v in values]


def _run_forecast(
    history: Sequence[Sequence[float]],
    model: str,
    days: int,
    seed: Optional[int],
    settings: Settings,
    symbol: Optional[str] = None,
) -> ForecastResponse:
    """
    Run the engine synchronously (called inside thread pool).

    Raises:
        ForecastInputError: History shorter than ``MIN_HISTORY_POINTS`` or
                            horizon above ``MAX_FORECAST_DAYS``.
        RuntimeError:       The engine returned no result on sufficient data.
    """
    if days > settings.MAX_FORECAST_DAYS:
        raise ForecastInputError(
            f"days must be at most {settings.MAX_FORECAST_DAYS}, got {days}"
        )
    if len(history) < settings.MIN_HISTORY_POINTS:
        raise ForecastInputError(INSUFFICIENT_DATA_DETAIL)

    name = ForecastingFactory.resolve(model)
    rng = np.random.default_rng(seed) if seed is not None else None
    outcome = forecast_with_info(
        history,
        model=name,
        days_to_predict=days,
        rng=rng,
        min_points=settings.MIN_HISTORY_POINTS,
    )
    if outcome is None:
        raise RuntimeError(f"{name} forecast returned no result")
    result, model_info = outcome

    return ForecastResponse(
        symbol=symbol,
        model=name,
        days=len(result),
        data_points_used=len(history),
        dates=result.dates,
        forecast=_finite_or_none(result.forecast),
        upper_bound=_finite_or_none(result.upper_bound),
        lower_bound=_finite_or_none(result.lower_bound),
        model_info=model_info,
    )


def _horizon(req_days: Optional[int], settings: Settings) -> int:
    return settings.DEFAULT_FORECAST_DAYS if req_days is None else req_days


def _run_history(req: HistoryForecastRequest, settings: Settings) -> ForecastResponse:
    """Forecast an inline history (called inside thread pool)."""
    return _run_forecast(
        req.history, req.model, _horizon(req.days, settings), req.seed, settings
    )


def _run_symbol(
    req: ForecastRequest, fetcher: YFinanceFetcher, settings: Settings
) -> ForecastResponse:
    """Fetch ``history_days`` of closes and forecast (called inside thread pool)."""
    history_days = (
        settings.DEFAULT_HISTORY_DAYS if req.history_days is None else req.history_days
    )
    history = fetcher.fetch_price_points(req.symbol, days=history_days)
    logger.info("Fetched %d price points for %s", len(history), req.symbol)
    return _run_forecast(
        history,
        req.model,
        _horizon(req.days, settings),
        req.seed,
        settings,
        symbol=req.symbol,
    )


async def _offload(label: str, func, *args) -> ForecastResponse:
    """Run ``func`` in the executor and map failures onto HTTP errors."""
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(_executor, func, *args)
    except ForecastInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Forecast failed for %s", label)
        raise HTTPException(status_code=500, detail=FORECAST_FAILED_DETAIL) from exc


# ── endpoints ─────────────────────────────────────────────────────────────────


@router.get("/models", response_model=ModelListResponse, summary="Available forecast models")
def list_models() -> ModelListResponse:
    """
    List the model tags accepted by the forecast endpoints.

    Returns:
        Canonical tags, legacy aliases, and the fallback default.
    """
    return ModelListResponse(
        models=ForecastingFactory.list_available_models(),
        aliases=ForecastingFactory.list_aliases(),
        default=DEFAULT_MODEL.value,
    )


@router.post("/", response_model=ForecastResponse, summary="Forecast from inline history")
async def history_forecast(
    request: HistoryForecastRequest,
    settings: Settings = Depends(get_app_settings),
) -> ForecastResponse:
    """
    Forecast from ``[timestamp_ms, price]`` pairs supplied by the client.

    Args:
        request: History, model tag, horizon and optional seed.

    Returns:
        Point forecast with confidence bounds.

    Raises:
        HTTPException 422: Too little history or horizon out of range.
        HTTPException 500: The model failed on the supplied data.
    """
    return await _offload("inline history", _run_history, request, settings)


@router.post("/symbol", response_model=ForecastResponse, summary="Forecast a ticker")
async def symbol_forecast(
    request: ForecastRequest,
    fetcher: YFinanceFetcher = Depends(get_fetcher),
    settings: Settings = Depends(get_app_settings),
) -> ForecastResponse:
    """
    Fetch daily closes for ``symbol`` from Yahoo Finance and forecast.

    An unknown ticker or a provider outage yields no data, which is
    reported like any other short history.

    Args:
        request: Ticker, history window, model tag, horizon and seed.

    Returns:
        Point forecast with confidence bounds.

    Raises:
        HTTPException 422: Too little history or horizon out of range.
        HTTPException 500: The model failed on the fetched data.
    """
    return await _offload(request.symbol, _run_symbol, request, fetcher, settings)
