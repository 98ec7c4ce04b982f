"""
Unit tests for RefreshScheduler (immediate first tick, fixed cadence, cancellation)
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import asyncio
import time

import pytest

from btc_dashboard.runner import RefreshScheduler


class TickCounter:

    def __init__(self, duration: float = 0.0, fail: bool = False):
        self.duration = duration
        self.fail = fail
        self.started = 0
        self.finished = 0
        self.running = 0
        self.max_running = 0

    async def __call__(self):
        self.started += 1
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            if self.duration:
                await asyncio.sleep(self.duration)
            if self.fail:
                raise RuntimeError("tick exploded")
        finally:
            self.running -= 1
            self.finished += 1


class TestStart:

    def test_first_tick_is_immediate(self):
        async def _run():
            counter = TickCounter()
            scheduler = RefreshScheduler()
            scheduler.start(1000, counter)
            await asyncio.sleep(0.05)
            calls = counter.started
            scheduler.stop()
            return calls

        assert asyncio.run(_run()) == 1

    def test_ticks_on_interval(self):
        async def _run():
            counter = TickCounter()
            scheduler = RefreshScheduler()
            scheduler.start(100, counter)
            await asyncio.sleep(0.35)
            scheduler.stop()
            return counter.started

        # ticks at 0, 100, 200, 300 ms
        calls = asyncio.run(_run())
        assert 3 <= calls <= 5

    def test_invalid_interval(self):
        async def _run():
            RefreshScheduler().start(0, TickCounter())

        with pytest.raises(ValueError):
            asyncio.run(_run())

    def test_double_start_rejected(self):
        async def _run():
            scheduler = RefreshScheduler()
            scheduler.start(1000, TickCounter())
            try:
                scheduler.start(1000, TickCounter())
            finally:
                scheduler.stop()

        with pytest.raises(RuntimeError, match="already started"):
            asyncio.run(_run())

    def test_restart_after_stop(self):
        async def _run():
            counter = TickCounter()
            scheduler = RefreshScheduler()
            scheduler.start(1000, counter)
            scheduler.stop()
            scheduler.start(1000, counter)
            await asyncio.sleep(0.05)
            scheduler.stop()
            return counter.started

        assert asyncio.run(_run()) == 2


class TestStop:

    def test_no_ticks_after_stop(self):
        async def _run():
            counter = TickCounter()
            scheduler = RefreshScheduler()
            scheduler.start(50, counter)
            await asyncio.sleep(0.12)
            scheduler.stop()
            at_stop = counter.started
            await asyncio.sleep(0.2)
            return at_stop, counter.started, scheduler.running

        at_stop, later, running = asyncio.run(_run())
        assert at_stop >= 2
        assert later == at_stop
        assert running is False

    def test_handle_cancel(self):
        async def _run():
            counter = TickCounter()
            scheduler = RefreshScheduler()
            handle = scheduler.start(50, counter)
            await asyncio.sleep(0.01)
            handle.cancel()
            await asyncio.sleep(0.15)
            return counter.started, handle.active

        calls, active = asyncio.run(_run())
        assert calls == 1
        assert active is False

    def test_in_flight_tick_completes(self):
        async def _run():
            counter = TickCounter(duration=0.1)
            scheduler = RefreshScheduler()
            scheduler.start(1000, counter)
            await asyncio.sleep(0.01)
            scheduler.stop()
            finished_at_stop = counter.finished
            await scheduler.drain()
            return finished_at_stop, counter.finished

        finished_at_stop, finished = asyncio.run(_run())
        assert finished_at_stop == 0
        assert finished == 1

    def test_stop_before_start_is_noop(self):
        RefreshScheduler().stop()


class TestTickBehaviour:

    def test_failing_tick_does_not_stop_timer(self):
        async def _run():
            counter = TickCounter(fail=True)
            scheduler = RefreshScheduler()
            scheduler.start(50, counter)
            await asyncio.sleep(0.13)
            scheduler.stop()
            await scheduler.drain()
            return counter.started

        assert asyncio.run(_run()) >= 2

    def test_slow_ticks_may_overlap(self):
        async def _run():
            counter = TickCounter(duration=0.15)
            scheduler = RefreshScheduler()
            scheduler.start(50, counter)
            await asyncio.sleep(0.12)
            scheduler.stop()
            await scheduler.drain()
            return counter.max_running

        assert asyncio.run(_run()) >= 2

    def test_stalled_loop_does_not_burst_missed_ticks(self):
        async def _run():
            loop = asyncio.get_running_loop()
            starts = []

            async def tick():
                starts.append(loop.time())
                if len(starts) == 2:
                    # block the whole loop across several deadlines
                    time.sleep(0.35)

            scheduler = RefreshScheduler()
            scheduler.start(100, tick)
            await asyncio.sleep(0.8)
            scheduler.stop()
            await scheduler.drain()
            return starts

        starts = asyncio.run(_run())
        gaps = [later - earlier for earlier, later in zip(starts, starts[1:])]
        assert len(starts) >= 4
        assert min(gaps) >= 0.05
