"""
tests/test_forecast_endpoint.py
────────────────────────────────
HTTP-level tests for the forecast endpoints:

  GET  /
  GET  /api/v1/forecast/models
  POST /api/v1/forecast/
  POST /api/v1/forecast/symbol

The market-data fetcher is mocked; no network calls are made.

Run with::

    pytest tests/test_forecast_endpoint.py -v
"""
from unittest.mock import patch

import pytest

from analytics.forecasting import ForecastResult


# ── URL constants ─────────────────────────────────────────────────────────────

_FORECAST_URL = "/api/v1/forecast/"
_SYMBOL_URL = "/api/v1/forecast/symbol"
_MODELS_URL = "/api/v1/forecast/models"


# ── GET / ─────────────────────────────────────────────────────────────────────


async def test_health_check(app_client) -> None:
    resp = await app_client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_health_check_sync(sync_client) -> None:
    assert sync_client.get("/").status_code == 200


# ── GET /api/v1/forecast/models ───────────────────────────────────────────────


class TestListModels:

    async def test_200_lists_tags_and_aliases(self, app_client) -> None:
        resp = await app_client.get(_MODELS_URL)
        assert resp.status_code == 200
        data = resp.json()
        assert {"movingAverageTrend", "trendSeasonality", "momentumVolatility"} <= set(
            data["models"]
        )
        assert data["aliases"]["prophet"] == "trendSeasonality"
        assert data["default"] == "movingAverageTrend"


# ── POST /api/v1/forecast/ ────────────────────────────────────────────────────


class TestHistoryForecast:
    """Forecasts from an inline ``[timestamp_ms, price]`` history."""

    async def test_200_returns_aligned_sequences(self, app_client, linear_history) -> None:
        resp = await app_client.post(
            _FORECAST_URL,
            json={"history": linear_history, "model": "trendSeasonality", "days": 7},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["model"] == "trendSeasonality"
        assert data["days"] == 7
        assert data["data_points_used"] == 90
        assert data["symbol"] is None
        for key in ("dates", "forecast", "upper_bound", "lower_bound"):
            assert len(data[key]) == 7
        assert data["dates"][0] == "2024-03-31"
        assert data["model_info"]["model_name"] == "TrendSeasonalityForecaster"
        assert data["model_info"]["is_fitted"] is True

    async def test_200_unknown_model_falls_back(self, app_client, linear_history) -> None:
        resp = await app_client.post(
            _FORECAST_URL, json={"history": linear_history, "model": "foo"}
        )
        assert resp.status_code == 200
        assert resp.json()["model"] == "movingAverageTrend"

    async def test_200_legacy_alias(self, app_client, linear_history) -> None:
        resp = await app_client.post(
            _FORECAST_URL, json={"history": linear_history, "model": "lstm", "days": 3}
        )
        assert resp.status_code == 200
        assert resp.json()["model"] == "momentumVolatility"

    async def test_200_seed_makes_moving_average_reproducible(
        self, app_client, linear_history
    ) -> None:
        body = {"history": linear_history, "model": "movingAverageTrend", "seed": 11}
        first = await app_client.post(_FORECAST_URL, json=body)
        second = await app_client.post(_FORECAST_URL, json=body)
        assert first.json()["forecast"] == second.json()["forecast"]

    async def test_200_zero_days_gives_empty_lists(self, app_client, linear_history) -> None:
        resp = await app_client.post(
            _FORECAST_URL, json={"history": linear_history, "days": 0}
        )
        assert resp.status_code == 200
        assert resp.json()["forecast"] == []
        assert resp.json()["dates"] == []

    async def test_200_overflowing_bounds_become_null(self, app_client, make_history) -> None:
        prices = [100_000.0 if i % 2 == 0 else 200_000.0 for i in range(90)]
        resp = await app_client.post(
            _FORECAST_URL,
            json={"history": make_history(prices), "model": "momentumVolatility", "days": 2},
        )
        assert resp.status_code == 200
        assert resp.json()["upper_bound"] == [None, None]

    async def test_422_short_history(self, app_client, make_history) -> None:
        resp = await app_client.post(
            _FORECAST_URL, json={"history": make_history([1.0] * 29)}
        )
        assert resp.status_code == 422
        assert resp.json()["detail"] == "Not enough historical data available for prediction"

    async def test_422_malformed_point(self, app_client, linear_history) -> None:
        history = linear_history[:-1] + [[linear_history[-1][0]]]
        resp = await app_client.post(_FORECAST_URL, json={"history": history})
        assert resp.status_code == 422

    @pytest.mark.parametrize("days", [-1, 366])
    async def test_422_days_out_of_range(self, app_client, linear_history, days) -> None:
        resp = await app_client.post(
            _FORECAST_URL, json={"history": linear_history, "days": days}
        )
        assert resp.status_code == 422

    async def test_422_days_above_configured_limit(
        self, app_client, override_settings, linear_history
    ) -> None:
        override_settings(MAX_FORECAST_DAYS=10)
        resp = await app_client.post(
            _FORECAST_URL, json={"history": linear_history, "days": 11}
        )
        assert resp.status_code == 422
        assert resp.json()["detail"] == "days must be at most 10, got 11"

    async def test_200_raised_limit_allows_longer_horizon(
        self, app_client, override_settings, linear_history
    ) -> None:
        override_settings(MAX_FORECAST_DAYS=500)
        resp = await app_client.post(
            _FORECAST_URL, json={"history": linear_history, "days": 400}
        )
        assert resp.status_code == 200
        assert resp.json()["days"] == 400
        assert len(resp.json()["forecast"]) == 400

    async def test_200_default_horizon_comes_from_settings(
        self, app_client, override_settings, linear_history
    ) -> None:
        override_settings(DEFAULT_FORECAST_DAYS=3)
        resp = await app_client.post(_FORECAST_URL, json={"history": linear_history})
        assert resp.status_code == 200
        assert resp.json()["dates"] == ["2024-03-31", "2024-04-01", "2024-04-02"]

    async def test_200_model_info_carries_fitted_parameters(
        self, app_client, linear_history
    ) -> None:
        resp = await app_client.post(
            _FORECAST_URL,
            json={"history": linear_history, "model": "movingAverageTrend", "seed": 1},
        )
        info = resp.json()["model_info"]
        assert info["selector"] == "movingAverageTrend"
        assert info["moving_average"] == pytest.approx(186.0)
        assert info["recent_trend"] == pytest.approx(1.0)
        assert "doc" not in info

    async def test_500_when_engine_returns_none(self, app_client, linear_history) -> None:
        with patch("app.api.v1.endpoints.forecast.forecast_with_info", return_value=None):
            resp = await app_client.post(_FORECAST_URL, json={"history": linear_history})
        assert resp.status_code == 500
        assert "Failed to generate forecast" in resp.json()["detail"]

    async def test_500_when_response_cannot_be_built(self, app_client, linear_history) -> None:
        """A malformed engine result is a server fault, not a bad request."""
        result = ForecastResult(
            forecast=[1.0], upper_bound=[1.0], lower_bound=[1.0], dates=["2024-03-31"]
        )
        with patch(
            "app.api.v1.endpoints.forecast.forecast_with_info",
            return_value=(result, None),
        ):
            resp = await app_client.post(_FORECAST_URL, json={"history": linear_history})
        assert resp.status_code == 500
        assert "Failed to generate forecast" in resp.json()["detail"]


# ── POST /api/v1/forecast/symbol ──────────────────────────────────────────────


class TestSymbolForecast:
    """Forecasts for a ticker whose history comes from the fetcher."""

    async def test_200_fetches_and_forecasts(
        self, app_client, mock_fetcher, linear_history
    ) -> None:
        mock_fetcher.fetch_price_points.return_value = linear_history
        resp = await app_client.post(
            _SYMBOL_URL,
            json={"symbol": " btc-usd ", "model": "prophet", "days": 14},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["symbol"] == "BTC-USD"
        assert data["model"] == "trendSeasonality"
        assert len(data["forecast"]) == 14
        mock_fetcher.fetch_price_points.assert_called_once_with("BTC-USD", days=90)

    async def test_200_custom_history_window(
        self, app_client, mock_fetcher, linear_history
    ) -> None:
        mock_fetcher.fetch_price_points.return_value = linear_history
        resp = await app_client.post(
            _SYMBOL_URL, json={"symbol": "ETH-USD", "history_days": 180}
        )
        assert resp.status_code == 200
        mock_fetcher.fetch_price_points.assert_called_once_with("ETH-USD", days=180)

    async def test_200_defaults_come_from_settings(
        self, app_client, override_settings, mock_fetcher, linear_history
    ) -> None:
        override_settings(DEFAULT_HISTORY_DAYS=45, DEFAULT_FORECAST_DAYS=3)
        mock_fetcher.fetch_price_points.return_value = linear_history
        resp = await app_client.post(_SYMBOL_URL, json={"symbol": "SOL-USD"})
        assert resp.status_code == 200
        assert resp.json()["days"] == 3
        mock_fetcher.fetch_price_points.assert_called_once_with("SOL-USD", days=45)

    async def test_422_when_provider_returns_nothing(self, app_client, mock_fetcher) -> None:
        mock_fetcher.fetch_price_points.return_value = []
        resp = await app_client.post(_SYMBOL_URL, json={"symbol": "NOPE-USD"})
        assert resp.status_code == 422
        assert "Not enough historical data" in resp.json()["detail"]

    async def test_422_blank_symbol(self, app_client) -> None:
        resp = await app_client.post(_SYMBOL_URL, json={"symbol": "   "})
        assert resp.status_code == 422

    async def test_500_when_fetcher_raises(self, app_client, mock_fetcher) -> None:
        mock_fetcher.fetch_price_points.side_effect = RuntimeError("boom")
        resp = await app_client.post(_SYMBOL_URL, json={"symbol": "BTC-USD"})
        assert resp.status_code == 500
