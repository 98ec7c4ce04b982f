from btc_dashboard.utils.logger import log
from btc_dashboard.utils.task_util import FetchResult
from btc_dashboard.models import (
    BlockSnapshot,
    MarketSnapshot,
    PriceSeries,
    SentimentSnapshot,
    snapshot_to_dict,
)
from typing import Any, Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field
from datetime import datetime

SOURCES = ("block", "market", "price_series", "sentiment")


@dataclass(frozen=True)
class StateView:
    """Read-only copy of AggregateState handed to the presentation layer"""

    block: Optional[BlockSnapshot] = None
    market: Optional[MarketSnapshot] = None
    price_series: Optional[PriceSeries] = None
    sentiment: Optional[SentimentSnapshot] = None
    last_error: Optional[str] = None
    cycle_counter: int = 0
    last_update: str = ""
    updated_at: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "block": snapshot_to_dict(self.block),
            "market": snapshot_to_dict(self.market),
            "price_series": snapshot_to_dict(self.price_series),
            "sentiment": snapshot_to_dict(self.sentiment),
            "last_error": self.last_error,
            "cycle_counter": self.cycle_counter,
            "last_update": self.last_update,
            "updated_at": dict(self.updated_at),
        }


@dataclass
class AggregateState:
    """
    Latest known snapshot of every source.

    Each source field is either None (never fetched) or the last value that
    source fetched successfully. Only merge() writes it; consumers read
    view() or subscribe() for a notification after every completed cycle.
    """

    # Source snapshots
    block: Optional[BlockSnapshot] = None
    market: Optional[MarketSnapshot] = None
    price_series: Optional[PriceSeries] = None
    sentiment: Optional[SentimentSnapshot] = None

    # Most recent failure message
    last_error: Optional[str] = None

    # Cycle tracking
    cycle_counter: int = 0
    last_update: str = ""
    updated_at: Dict[str, str] = field(default_factory=dict)  # {source: "%Y-%m-%d %H:%M:%S"}

    _listeners: List[Callable[[StateView], None]] = field(default_factory=list, repr=False)

    def merge(self, results: Sequence[FetchResult]) -> StateView:
        """
        Fold one cycle's settled results into the state, in the given order.

        Successes overwrite their own field only. Failures leave every field
        alone and set last_error; the last failure in `results` wins. A cycle
        without failures clears last_error.
        """
        unknown = [r.source for r in results if r.source not in SOURCES]
        if unknown:
            raise ValueError(f"Unknown source(s): {', '.join(unknown)}")

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cycle_error = None

        for result in results:
            if result.ok:
                setattr(self, result.source, result.value)
                self.updated_at[result.source] = timestamp
            else:
                cycle_error = result.error

        self.last_error = cycle_error
        self.cycle_counter += 1
        self.last_update = timestamp

        view = self.view()
        self._notify(view)
        return view

    def view(self) -> StateView:
        return StateView(
            block=self.block,
            market=self.market,
            price_series=self.price_series,
            sentiment=self.sentiment,
            last_error=self.last_error,
            cycle_counter=self.cycle_counter,
            last_update=self.last_update,
            updated_at=dict(self.updated_at),
        )

    def subscribe(self, callback: Callable[[StateView], None]) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it"""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, view: StateView):
        for callback in list(self._listeners):
            try:
                callback(view)
            except Exception as e:
                log.error(f"State listener {getattr(callback, '__name__', callback)} failed: {e}")
