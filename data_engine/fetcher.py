"""
data_engine/fetcher.py
───────────────────────
Thin wrapper around ``yfinance``, the ONLY place in the codebase that
calls Yahoo Finance directly.

The forecast engine consumes ``[timestamp_ms, price]`` pairs; this module
produces them from daily closes.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Literal

import pandas as pd
import yfinance as yf

logger = logging.getLogger(__name__)

# Type alias for the supported intervals.
Interval = Literal["1d", "1wk", "1mo"]


class YFinanceFetcher:
    """
    Fetch price data from Yahoo Finance for a single ticker.

    Example:
        >>> fetcher = YFinanceFetcher()
        >>> points = fetcher.fetch_price_points("BTC-USD", days=90)
        >>> points[0]
        [1704067200000, 42280.23]
    """

    # ── public API ────────────────────────────────────────────────────────

    def fetch_history(
        self,
        symbol: str,
        interval: Interval = "1d",
        period: str = "max",
        start: datetime | None = None,
    ) -> pd.DataFrame:
        """
        Download OHLCV history for ``symbol``.

        Args:
            symbol:   Ticker (e.g. ``"BTC-USD"``, ``"ETH-USD"``).
            interval: Aggregation interval: ``"1d"``, ``"1wk"`` or ``"1mo"``.
            period:   How far back to fetch (``"max"``, ``"1y"``, …). Ignored
                      when ``start`` is given.
            start:    Optional first date to include.

        Returns:
            DataFrame with columns ``timestamp``, ``open``, ``high``,
            ``low``, ``close``, ``volume``. Empty DataFrame on failure.

        Raises:
            ValueError: If ``interval`` is not ``"1d"``, ``"1wk"`` or ``"1mo"``.
        """
        if interval not in ("1d", "1wk", "1mo"):
            raise ValueError(
                f"Unsupported interval '{interval}'. Use '1d', '1wk' or '1mo'."
            )

        try:
            ticker = yf.Ticker(symbol)
            if start is not None:
                df = ticker.history(interval=interval, start=start)
            else:
                df = ticker.history(interval=interval, period=period)
        except Exception:
            logger.exception("yfinance fetch failed for %s", symbol)
            return pd.DataFrame()

        if df.empty:
            logger.warning("yfinance returned empty data for %s", symbol)
            return df

        df = df.reset_index()
        df.columns = [str(col).lower().replace(" ", "_") for col in df.columns]
        if "date" in df.columns:
            df = df.rename(columns={"date": "timestamp"})
        elif "datetime" in df.columns:
            df = df.rename(columns={"datetime": "timestamp"})

        logger.info("Fetched %d rows for %s (%s)", len(df), symbol, interval)
        return df

    def fetch_price_points(self, symbol: str, days: int = 90) -> List[List[float]]:
        """
        Return the last ``days`` days of daily closes as engine input.

        Args:
            symbol: Ticker symbol.
            days:   Calendar days of history to request.

        Returns:
            ``[[timestamp_ms, close], ...]`` oldest first, or ``[]`` when
            the provider returns nothing.
        """
        start = datetime.now(timezone.utc) - timedelta(days=days)
        df = self.fetch_history(symbol, interval="1d", start=start)
        if df.empty or "timestamp" not in df.columns or "close" not in df.columns:
            return []

        df = df.dropna(subset=["close"]).sort_values("timestamp")
        timestamps = pd.to_datetime(df["timestamp"], utc=True)
        return [
            [int(ts.timestamp() * 1000), float(close)]
            for ts, close in zip(timestamps, df["close"])
        ]

    def get_latest_price(self, symbol: str) -> float:
        """
        Return the most recent closing price for ``symbol``.

        Args:
            symbol: Ticker symbol.

        Returns:
            Latest close price, or ``0.0`` if unavailable.
        """
        try:
            data = yf.Ticker(symbol).history(period="1d")
            if not data.empty:
                return float(data["Close"].iloc[-1])
        except Exception:
            logger.exception("Could not fetch latest price for %s", symbol)
        return 0.0
