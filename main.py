"""
₿ Bitcoin Dashboard - polling loop
==================================

Pipeline:
1. RefreshScheduler - immediate first cycle, then one every refresh interval
2. Aggregator - fetches the four sources concurrently and merges what succeeded
3. TerminalDisplay - redraws after every completed cycle
4. Status API (optional) - serves the same state as JSON
"""

import asyncio
import signal
import sys
import os
from dataclasses import replace

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '.')))

import httpx
import uvicorn

from btc_dashboard.api import create_adapters
from btc_dashboard.cli import TerminalDisplay
from btc_dashboard.config import Config, DashboardSettings
from btc_dashboard.runner import Aggregator, RefreshScheduler
from btc_dashboard.server.app import create_app
from btc_dashboard.server.state import AggregateState
from btc_dashboard.utils.logger import log


def build_aggregator(client: httpx.AsyncClient, settings: DashboardSettings) -> Aggregator:
    """One adapter per source, sharing the given client, over a fresh state"""
    adapters = create_adapters(client, settings.sources)
    return Aggregator(adapters, AggregateState())


async def run_once(settings: DashboardSettings, display: TerminalDisplay = None):
    """Single cycle, render, exit"""
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        aggregator = build_aggregator(client, settings)
        view = await aggregator.run_cycle()
    if display is not None:
        display.print_dashboard(view)
    return view


async def run_continuous(
    settings: DashboardSettings,
    display: TerminalDisplay = None,
    serve: bool = False
):
    """Poll until SIGINT/SIGTERM, optionally serving the status API"""
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C still raises KeyboardInterrupt
            pass

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        aggregator = build_aggregator(client, settings)

        if display is not None:
            display.print_header(settings.refresh_interval_ms)
            aggregator.state.subscribe(display.print_dashboard)

        server = None
        server_task = None
        if serve:
            app = create_app(aggregator.state, settings.refresh_interval_ms)
            server = uvicorn.Server(uvicorn.Config(
                app,
                host=settings.server_host,
                port=settings.server_port,
                log_level="warning",
            ))
            server_task = asyncio.ensure_future(server.serve())
            log.info(f"🌐 Status API on http://{settings.server_host}:{settings.server_port}/api/status")

        scheduler = RefreshScheduler()
        scheduler.start(settings.refresh_interval_ms, aggregator.run_cycle)

        # uvicorn captures SIGINT itself while serving; its exit also ends the loop
        waiters = [asyncio.ensure_future(stop_event.wait())]
        if server_task is not None:
            waiters.append(server_task)
        await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        waiters[0].cancel()
        log.info("🛑 Shutdown requested")
        scheduler.stop()
        await scheduler.drain()

        if server is not None:
            server.should_exit = True
            await server_task


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Bitcoin dashboard: block, market, price and sentiment polling')
    parser.add_argument('--interval-ms', type=int, default=None, help='Refresh interval in milliseconds (default from config, 60000)')
    parser.add_argument('--once', action='store_true', help='Run a single cycle, print it and exit')
    parser.add_argument('--server', action='store_true', help='Also serve the status API')
    parser.add_argument('--host', default=None, help='Status API host')
    parser.add_argument('--port', type=int, default=None, help='Status API port')
    parser.add_argument('--no-display', action='store_true', help='Disable the terminal dashboard')
    parser.add_argument('--clear', action='store_true', help='Clear the screen before every redraw')

    args = parser.parse_args()

    settings = Config().settings()
    # Priority: Command line > Env Var > config.yaml
    overrides = {}
    if args.interval_ms is not None:
        overrides['refresh_interval_ms'] = args.interval_ms
    if args.host:
        overrides['server_host'] = args.host
    if args.port:
        overrides['server_port'] = args.port
    # replace() re-validates
    settings = replace(settings, **overrides)

    display = None if args.no_display else TerminalDisplay(clear=args.clear)

    if args.once:
        view = asyncio.run(run_once(settings, display))
        sys.exit(1 if view.last_error else 0)

    try:
        asyncio.run(run_continuous(settings, display, serve=args.server))
    except KeyboardInterrupt:
        log.info("🛑 Interrupted")


if __name__ == '__main__':
    main()
