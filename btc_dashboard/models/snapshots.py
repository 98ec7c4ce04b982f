"""
Normalized display records produced by the source adapters.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Any, List, Optional


@dataclass(frozen=True)
class BlockSnapshot:
    """Most recent block on the chain."""
    height: int
    hash: str
    size_bytes: int
    difficulty: float
    weight: int


@dataclass(frozen=True)
class MarketSnapshot:
    """USD-denominated market metrics."""
    price_usd: float
    market_cap_usd: float
    volume_24h_usd: float
    price_change_24h_pct: float
    price_change_7d_pct: float


@dataclass(frozen=True)
class PriceSeries:
    """
    Hourly price series for charting.

    labels and values are aligned and in chronological order.
    """
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    title: str = "Bitcoin Price (USD)"

    def __post_init__(self):
        if len(self.labels) != len(self.values):
            raise ValueError(
                f"labels and values must be aligned ({len(self.labels)} != {len(self.values)})"
            )

    def __len__(self) -> int:
        return len(self.values)


class SentimentClass(str, Enum):
    """Known Fear & Greed classifications"""
    EXTREME_FEAR = "Extreme Fear"
    FEAR = "Fear"
    NEUTRAL = "Neutral"
    GREED = "Greed"
    EXTREME_GREED = "Extreme Greed"


SENTIMENT_GLYPHS: Dict[SentimentClass, str] = {
    SentimentClass.EXTREME_FEAR: "🙀",
    SentimentClass.FEAR: "😨",
    SentimentClass.NEUTRAL: "😐",
    SentimentClass.GREED: "🤑",
    SentimentClass.EXTREME_GREED: "😈",
}


def glyph_for(classification: str) -> str:
    """Glyph for a classification string; unknown strings map to ''."""
    try:
        return SENTIMENT_GLYPHS[SentimentClass(classification)]
    except ValueError:
        return ""


@dataclass(frozen=True)
class SentimentSnapshot:
    """Fear & Greed index reading."""
    value: int
    classification: str
    glyph: str = ""


def snapshot_to_dict(snapshot) -> Optional[Dict[str, Any]]:
    """Serialize any snapshot record (None stays None)"""
    if snapshot is None:
        return None
    return asdict(snapshot)
