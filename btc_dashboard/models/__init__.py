from .snapshots import (
    BlockSnapshot,
    MarketSnapshot,
    PriceSeries,
    SentimentClass,
    SentimentSnapshot,
    SENTIMENT_GLYPHS,
    glyph_for,
    snapshot_to_dict,
)

__all__ = [
    "BlockSnapshot",
    "MarketSnapshot",
    "PriceSeries",
    "SentimentClass",
    "SentimentSnapshot",
    "SENTIMENT_GLYPHS",
    "glyph_for",
    "snapshot_to_dict",
]
