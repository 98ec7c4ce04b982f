"""
Latest block adapter (Blockchair)
"""
from typing import Any

from btc_dashboard.models import BlockSnapshot
from .base import BaseSourceAdapter, require


class BlockInfoAdapter(BaseSourceAdapter):
    """Most recent block: height, hash, size, difficulty, weight"""

    SOURCE = "block"
    DESCRIPTION = "latest block info"
    DEFAULT_URL = "https://api.blockchair.com/bitcoin/blocks"
    DEFAULT_PARAMS = {"limit": 1}

    def _parse(self, payload: Any) -> BlockSnapshot:
        blocks = require(payload, "data")
        if not blocks:
            raise self._error("No latest block data found")

        latest = blocks[0]
        return BlockSnapshot(
            height=int(require(latest, "id")),
            hash=str(require(latest, "hash")),
            size_bytes=int(require(latest, "size")),
            difficulty=float(require(latest, "difficulty")),
            weight=int(require(latest, "weight")),
        )
