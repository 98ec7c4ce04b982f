"""
Market metrics adapter (CoinGecko coin endpoint)
"""
from typing import Any

from btc_dashboard.models import MarketSnapshot
from .base import BaseSourceAdapter, require


class MarketMetricsAdapter(BaseSourceAdapter):
    """Price, market cap, 24h volume and 24h/7d change in USD"""

    SOURCE = "market"
    DESCRIPTION = "Bitcoin metrics"
    DEFAULT_URL = "https://api.coingecko.com/api/v3/coins/bitcoin"
    DEFAULT_PARAMS = {"localization": "false"}

    def _parse(self, payload: Any) -> MarketSnapshot:
        return MarketSnapshot(
            price_usd=float(require(payload, "market_data.current_price.usd")),
            market_cap_usd=float(require(payload, "market_data.market_cap.usd")),
            volume_24h_usd=float(require(payload, "market_data.total_volume.usd")),
            price_change_24h_pct=float(require(payload, "market_data.price_change_percentage_24h")),
            price_change_7d_pct=float(require(payload, "market_data.price_change_percentage_7d")),
        )
