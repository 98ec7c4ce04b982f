import asyncio
import time

from typing import List, Optional, Sequence

from btc_dashboard.api import BaseSourceAdapter
from btc_dashboard.server.state import AggregateState, StateView, SOURCES
from btc_dashboard.utils.logger import log
from btc_dashboard.utils.task_util import FetchResult, run_settled


class Aggregator:
    """
    Runs every source adapter concurrently and merges the outcomes into the
    AggregateState it owns.
    """

    def __init__(
        self,
        adapters: Sequence[BaseSourceAdapter],
        state: Optional[AggregateState] = None
    ):
        sources = [adapter.SOURCE for adapter in adapters]
        unknown = [s for s in sources if s not in SOURCES]
        if unknown:
            raise ValueError(f"Adapters for unknown source(s): {', '.join(unknown)}")
        if len(set(sources)) != len(sources):
            raise ValueError(f"Duplicate adapter sources: {sources}")

        self.adapters = list(adapters)
        self.state = state if state is not None else AggregateState()

    async def run_cycle(self) -> StateView:
        """
        Fan out to all adapters, wait for every one to settle, merge.

        Never raises for adapter failures; a failed source keeps its previous
        value and its message lands in last_error. Results are merged in
        settlement order so the last failure to settle wins.
        """
        started = time.time()

        tasks = [
            asyncio.ensure_future(run_settled(source=adapter.SOURCE, task_factory=adapter.fetch))
            for adapter in self.adapters
        ]
        results: List[FetchResult] = []
        for next_settled in asyncio.as_completed(tasks):
            results.append(await next_settled)

        view = self.state.merge(results)

        failed = [r for r in results if not r.ok]
        duration = time.time() - started
        for result in results:
            if result.ok:
                log.source(result.source, f"ok ({result.duration_ms}ms)")
        log.cycle(
            f"#{view.cycle_counter} done in {duration:.2f}s | "
            f"ok={len(results) - len(failed)} failed={len(failed)}",
            degraded=bool(failed)
        )
        return view
