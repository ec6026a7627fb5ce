"""
Fetch a ticker's recent daily closes and print a forecast table.

    python scripts/forecast_symbol.py BTC-USD --model trendSeasonality --days 14
"""
import argparse
import logging
import sys

from analytics.forecasting import DEFAULT_MODEL, ForecastingFactory, predict
from core.config import get_settings
from data_engine.fetcher import YFinanceFetcher

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("symbol", help="Yahoo Finance ticker, e.g. BTC-USD")
    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL.value,
        help="one of: " + ", ".join(ForecastingFactory.list_available_models()),
    )
    parser.add_argument("--days", type=int, default=settings.DEFAULT_FORECAST_DAYS)
    parser.add_argument("--history-days", type=int, default=settings.DEFAULT_HISTORY_DAYS)
    args = parser.parse_args(argv)

    history = YFinanceFetcher().fetch_price_points(args.symbol, days=args.history_days)
    logger.info("Fetched %d points for %s", len(history), args.symbol)

    result = predict(
        history,
        model=args.model,
        days_to_predict=args.days,
        min_points=settings.MIN_HISTORY_POINTS,
    )
    if result is None:
        logger.error("No forecast for %s", args.symbol)
        return 1

    print(f"{'date':<12}{'lower':>14}{'forecast':>14}{'upper':>14}")
    for date, lower, point, upper in zip(
        result.dates, result.lower_bound, result.forecast, result.upper_bound
    ):
        print(f"{date:<12}{lower:>14.4f}{point:>14.4f}{upper:>14.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
