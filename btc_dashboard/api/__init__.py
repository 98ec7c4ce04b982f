"""
Source adapters
===============

One adapter per public endpoint:

- block:        latest block (Blockchair)
- market:       market metrics (CoinGecko)
- price_series: 24h hourly price chart (CoinGecko market_chart)
- sentiment:    Fear & Greed index (alternative.me)

Usage:

    async with httpx.AsyncClient(timeout=10) as client:
        adapters = create_adapters(client)
        block = await adapters[0].fetch()
"""

from .base import BaseSourceAdapter, FetchError, require
from .block_client import BlockInfoAdapter
from .market_client import MarketMetricsAdapter
from .price_series_client import PriceSeriesAdapter, build_series, hour_label
from .sentiment_client import SentimentAdapter
from .factory import ADAPTERS, create_adapter, create_adapters, get_supported_sources

__all__ = [
    "BaseSourceAdapter",
    "FetchError",
    "require",
    "BlockInfoAdapter",
    "MarketMetricsAdapter",
    "PriceSeriesAdapter",
    "SentimentAdapter",
    "build_series",
    "hour_label",
    "ADAPTERS",
    "create_adapter",
    "create_adapters",
    "get_supported_sources",
]
