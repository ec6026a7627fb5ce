"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the test suite.

Fixtures
--------
make_history
    Factory turning a list of prices into ``[timestamp_ms, price]`` pairs,
    one per UTC day starting 2024-01-01.

linear_history / flat_history
    90-day synthetic series (``100 + day`` and constant 50).

mock_fetcher
    ``MagicMock`` standing in for :class:`YFinanceFetcher`.

override_settings
    Factory that swaps the ``Settings`` dependency for one built from
    keyword overrides, e.g. ``override_settings(MAX_FORECAST_DAYS=500)``.

app_client / sync_client
    HTTP clients wired to the FastAPI app with the fetcher overridden by
    ``mock_fetcher`` so tests never hit Yahoo Finance.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Callable, Iterator, List, Sequence
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_app_settings, get_fetcher
from app.main import app
from core.config import Settings

HISTORY_START = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ── Synthetic price histories ─────────────────────────────────────────────────


def build_history(
    prices: Sequence[float], start: datetime = HISTORY_START
) -> List[List[float]]:
    """One ``[timestamp_ms, price]`` pair per day from ``start``."""
    return [
        [int((start + timedelta(days=i)).timestamp() * 1000), float(p)]
        for i, p in enumerate(prices)
    ]


@pytest.fixture
def make_history() -> Callable[..., List[List[float]]]:
    return build_history


@pytest.fixture
def linear_history() -> List[List[float]]:
    """90 days of ``price(day) = 100 + day``; last date 2024-03-30."""
    return build_history([100.0 + day for day in range(90)])


@pytest.fixture
def flat_history() -> List[List[float]]:
    """90 days at a constant price of 50."""
    return build_history([50.0] * 90)


# ── Mock market-data fetcher ──────────────────────────────────────────────────


@pytest.fixture
def mock_fetcher() -> MagicMock:
    """
    Return a MagicMock that mimics :class:`YFinanceFetcher`.

    ``fetch_price_points`` returns an empty list by default. Override in
    individual tests as needed:

        def test_something(mock_fetcher, linear_history):
            mock_fetcher.fetch_price_points.return_value = linear_history
    """
    fetcher = MagicMock()
    fetcher.fetch_price_points.return_value = []
    return fetcher


# ── Test clients ──────────────────────────────────────────────────────────────


@pytest.fixture
async def app_client(mock_fetcher: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTPX client with the fetcher dependency overridden."""
    app.dependency_overrides[get_fetcher] = lambda: mock_fetcher

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sync_client(mock_fetcher: MagicMock) -> TestClient:
    """Synchronous ``TestClient`` using the same ``mock_fetcher`` override."""
    app.dependency_overrides[get_fetcher] = lambda: mock_fetcher
    client = TestClient(app, raise_server_exceptions=True)
    yield client
    app.dependency_overrides.clear()


# ── Settings override ─────────────────────────────────────────────────────────


@pytest.fixture
def override_settings() -> Iterator[Callable[..., Settings]]:
    """
    Serve a custom ``Settings`` to the endpoints for the rest of the test.

        async def test_something(app_client, override_settings):
            override_settings(DEFAULT_FORECAST_DAYS=3)
    """

    def _override(**values) -> Settings:
        settings = Settings(**values)
        app.dependency_overrides[get_app_settings] = lambda: settings
        return settings

    yield _override
    app.dependency_overrides.pop(get_app_settings, None)
