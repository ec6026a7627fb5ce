"""
data_engine: Market data fetching.

Public API
----------
    from data_engine import YFinanceFetcher
"""

from data_engine.fetcher import YFinanceFetcher

__all__ = ["YFinanceFetcher"]
