"""
Refresh scheduler
=================

Fixed-rate repeating timer on the running asyncio loop. The first tick is
launched immediately on start(); later ticks every interval. Each tick runs
as its own task, so stop() only prevents future ticks and never cancels one
already in flight. Ticks are not serialized: a slow tick may overlap the next.
If the loop stalls past several deadlines, one tick fires and the cadence
restarts from there.
"""

import asyncio

from typing import Any, Awaitable, Callable, Optional, Set

from btc_dashboard.utils.logger import log


TickCallback = Callable[[], Awaitable[Any]]


class ScheduleHandle:
    """Returned by RefreshScheduler.start(); cancel() stops future ticks."""

    def __init__(self, scheduler: "RefreshScheduler"):
        self._scheduler = scheduler
        self.active = True

    def cancel(self):
        if self.active:
            self._scheduler._cancel(self)


class RefreshScheduler:
    """Cancellable repeating timer driving aggregation cycles"""

    def __init__(self):
        self._handle: Optional[ScheduleHandle] = None
        self._timer: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()
        self.tick_count = 0

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.active

    def start(self, interval_ms: int, on_tick: TickCallback) -> ScheduleHandle:
        """
        Launch on_tick now, then every interval_ms.

        Must be called from inside a running event loop.

        Raises:
            ValueError: non-positive interval
            RuntimeError: already started
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        if self.running:
            raise RuntimeError("Scheduler already started")

        loop = asyncio.get_running_loop()
        handle = ScheduleHandle(self)
        self._handle = handle

        self._launch_tick(on_tick)
        self._timer = loop.create_task(self._run_timer(interval_ms / 1000.0, on_tick))
        log.scheduler(f"started, interval={interval_ms}ms")
        return handle

    def stop(self):
        """Cancel future ticks; in-flight ticks run to completion"""
        if self._handle is not None:
            self._handle.cancel()

    async def drain(self):
        """Wait for every tick still in flight"""
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def _cancel(self, handle: ScheduleHandle):
        handle.active = False
        if handle is self._handle:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._handle = None
            log.scheduler(f"stopped after {self.tick_count} tick(s)")

    async def _run_timer(self, interval: float, on_tick: TickCallback):
        loop = asyncio.get_running_loop()
        next_at = loop.time() + interval
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            self._launch_tick(on_tick)
            next_at += interval
            # missed deadlines after a loop stall are dropped
            if next_at <= loop.time():
                next_at = loop.time() + interval

    def _launch_tick(self, on_tick: TickCallback):
        self.tick_count += 1
        task = asyncio.ensure_future(self._guarded(on_tick, self.tick_count))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _guarded(self, on_tick: TickCallback, tick_number: int):
        try:
            return await on_tick()
        except Exception as e:
            log.error(f"Tick #{tick_number} failed: {e}")
            return None
