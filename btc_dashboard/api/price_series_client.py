"""
Price series adapter (CoinGecko market chart, 2-day window)

The raw series holds roughly hourly [timestamp_ms, price] pairs for two days;
only the trailing 24 points are kept for the chart.
"""
from datetime import datetime
from typing import Any, List, Sequence

from btc_dashboard.models import PriceSeries
from .base import BaseSourceAdapter, require


SERIES_LENGTH = 24


def hour_label(timestamp_ms: float) -> str:
    """'<H>:00' using the local hour of a millisecond epoch timestamp"""
    return f"{datetime.fromtimestamp(timestamp_ms / 1000).hour}:00"


def build_series(points: Sequence[Sequence[float]], length: int = SERIES_LENGTH) -> PriceSeries:
    """
    Label every point, then keep the trailing `length` entries in order.

    Shorter inputs are returned whole, without padding.
    """
    labels: List[str] = []
    values: List[float] = []
    for point in points:
        timestamp_ms, price = point[0], point[1]
        labels.append(hour_label(timestamp_ms))
        values.append(float(price))

    return PriceSeries(labels=labels[-length:], values=values[-length:])


class PriceSeriesAdapter(BaseSourceAdapter):
    """Last 24 hourly prices in USD"""

    SOURCE = "price_series"
    DESCRIPTION = "price data"
    DEFAULT_URL = "https://api.coingecko.com/api/v3/coins/bitcoin/market_chart"
    DEFAULT_PARAMS = {"vs_currency": "usd", "days": 2}

    def _parse(self, payload: Any) -> PriceSeries:
        prices = require(payload, "prices")
        if not isinstance(prices, list):
            raise TypeError(f"'prices' must be a list, got {type(prices).__name__}")
        return build_series(prices)
