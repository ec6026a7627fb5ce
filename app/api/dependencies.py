"""
app/api/dependencies.py
───────────────────────
FastAPI dependency functions shared across all endpoints.

Usage
-----
    from app.api.dependencies import get_fetcher

    @router.post("/foo")
    def my_route(fetcher: YFinanceFetcher = Depends(get_fetcher)):
        ...
"""

from functools import lru_cache

from core.config import Settings, get_settings
from data_engine.fetcher import YFinanceFetcher


@lru_cache(maxsize=1)
def get_fetcher() -> YFinanceFetcher:
    """
    FastAPI dependency that returns the market-data fetcher singleton.

    Tests override this via ``app.dependency_overrides[get_fetcher]``.
    """
    return YFinanceFetcher()


def get_app_settings() -> Settings:
    """FastAPI dependency wrapper around :func:`core.config.get_settings`."""
    return get_settings()
