"""
Source adapter factory
======================

Builds the adapter set for one aggregator from a shared HTTP client and the
optional per-source endpoint overrides in configuration.
"""

from typing import Dict, List, Mapping, Optional, Type

import httpx

from btc_dashboard.config import SourceSettings
from .base import BaseSourceAdapter
from .block_client import BlockInfoAdapter
from .market_client import MarketMetricsAdapter
from .price_series_client import PriceSeriesAdapter
from .sentiment_client import SentimentAdapter


# All supported sources, in display order
ADAPTERS: Dict[str, Type[BaseSourceAdapter]] = {
    BlockInfoAdapter.SOURCE: BlockInfoAdapter,
    MarketMetricsAdapter.SOURCE: MarketMetricsAdapter,
    PriceSeriesAdapter.SOURCE: PriceSeriesAdapter,
    SentimentAdapter.SOURCE: SentimentAdapter,
}


def create_adapter(
    source: str,
    client: httpx.AsyncClient,
    settings: Optional[SourceSettings] = None
) -> BaseSourceAdapter:
    """
    Create one adapter by source name

    Raises:
        ValueError: unknown source
    """
    adapter_class = ADAPTERS.get(source)
    if not adapter_class:
        supported = ", ".join(ADAPTERS.keys())
        raise ValueError(
            f"Unsupported source: '{source}'. "
            f"Supported sources: {supported}"
        )

    settings = settings or SourceSettings()
    return adapter_class(client, url=settings.url, params=settings.params)


def create_adapters(
    client: httpx.AsyncClient,
    sources: Optional[Mapping[str, SourceSettings]] = None
) -> List[BaseSourceAdapter]:
    """
    Create the full adapter set, one per supported source.

    Raises:
        ValueError: configuration names a source that does not exist
    """
    sources = sources or {}
    unknown = set(sources) - set(ADAPTERS)
    if unknown:
        raise ValueError(f"Unknown source(s) in configuration: {', '.join(sorted(unknown))}")

    return [create_adapter(name, client, sources.get(name)) for name in ADAPTERS]


def get_supported_sources() -> list:
    return list(ADAPTERS.keys())
