"""
Fear & Greed index adapter (alternative.me)
"""
from typing import Any

from btc_dashboard.models import SentimentSnapshot, glyph_for
from .base import BaseSourceAdapter, require


class SentimentAdapter(BaseSourceAdapter):
    """Current Fear & Greed value (0-100) and its classification"""

    SOURCE = "sentiment"
    DESCRIPTION = "Fear and Greed Index"
    DEFAULT_URL = "https://api.alternative.me/fng/"
    DEFAULT_PARAMS = {"limit": 1}

    def _parse(self, payload: Any) -> SentimentSnapshot:
        # value arrives as a numeric string, e.g. "54"
        value = int(require(payload, "data.0.value"))
        if not 0 <= value <= 100:
            raise ValueError(f"index value {value} outside 0-100")

        classification = str(require(payload, "data.0.value_classification"))
        return SentimentSnapshot(
            value=value,
            classification=classification,
            glyph=glyph_for(classification),
        )
