"""
CLI Terminal Display Module for the Bitcoin Dashboard
=====================================================

Renders the aggregated state in the terminal:
- Latest block
- Market data
- Fear & Greed index
- 24h price chart
- Last error, if any

Panels whose source has not delivered yet show a loading line; panels whose
source failed keep showing the last good data.
"""

from typing import List, Optional

from rich.console import Console, Group
from rich.table import Table
from rich.panel import Panel
from rich.columns import Columns
from rich.progress_bar import ProgressBar
from rich.text import Text
from rich import box

from btc_dashboard.server.state import StateView
from btc_dashboard.models import BlockSnapshot, MarketSnapshot, PriceSeries, SentimentSnapshot


SPARK_CHARS = "▁▂▃▄▅▆▇█"


def sparkline(values: List[float]) -> str:
    """Unicode sparkline, one character per value"""
    if not values:
        return ""
    low, high = min(values), max(values)
    span = high - low
    if span == 0:
        return SPARK_CHARS[len(SPARK_CHARS) // 2] * len(values)
    last = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[int((v - low) / span * last)] for v in values)


def _loading(what: str) -> Text:
    return Text(f"Loading {what}...", style="dim")


class TerminalDisplay:
    """
    Terminal-based display for the dashboard.
    Subscribe print_dashboard to AggregateState to redraw after every cycle.
    """

    def __init__(self, console: Optional[Console] = None, clear: bool = False):
        self.console = console or Console()
        self.clear = clear

    def print_header(self, interval_ms: int):
        """Print startup header"""
        header = Panel(
            f"[bold cyan]₿ Bitcoin Dashboard[/bold cyan]\n"
            f"[yellow]Refresh every {interval_ms / 1000:.0f}s[/yellow]\n"
            f"[dim]Press Ctrl+C to stop[/dim]",
            box=box.DOUBLE,
            border_style="cyan"
        )
        self.console.print(header)

    def block_panel(self, block: Optional[BlockSnapshot]) -> Panel:
        if block is None:
            return Panel(_loading("latest block information"), title="Latest Block", border_style="blue")

        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("⛓️ Block Height", f"{block.height}")
        table.add_row("🔑 Block Hash", block.hash)
        table.add_row("📦 Block Size", f"{block.size_bytes:,} bytes")
        table.add_row("⛏️ Mining Difficulty", f"{block.difficulty:,.0f}")
        table.add_row("⚖️ Weight", f"{block.weight:,}")
        return Panel(table, title="Latest Block", border_style="blue")

    def market_panel(self, market: Optional[MarketSnapshot]) -> Panel:
        if market is None:
            return Panel(_loading("Bitcoin market data"), title="Market Data", border_style="cyan")

        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("💰 Price (USD)", f"${market.price_usd:,.2f}")
        table.add_row("🏦 Market Cap", f"${market.market_cap_usd:,.0f}")
        table.add_row("📊 24h Volume", f"${market.volume_24h_usd:,.0f}")
        for label, change in (("24h Change", market.price_change_24h_pct),
                              ("7d Change", market.price_change_7d_pct)):
            change_text = Text(f"{change:+.2f}%")
            change_text.stylize("green" if change >= 0 else "red")
            table.add_row(f"📈 {label}", change_text)
        return Panel(table, title="Market Data", border_style="cyan")

    def sentiment_panel(self, sentiment: Optional[SentimentSnapshot]) -> Panel:
        if sentiment is None:
            return Panel(_loading("Fear and Greed Index"), title="Fear and Greed Index", border_style="magenta")

        body = Group(
            Text(f"Current Index: {sentiment.value}"),
            Text(f"Market Sentiment: {sentiment.classification}"),
            ProgressBar(total=100, completed=sentiment.value, width=40),
        )
        title = f"Fear and Greed Index {sentiment.glyph}".rstrip()
        return Panel(body, title=title, border_style="magenta")

    def price_panel(self, series: Optional[PriceSeries]) -> Panel:
        if series is None:
            return Panel(_loading("Bitcoin price chart"), title="Price - Last 24 Hours", border_style="green")

        table = Table(box=box.SIMPLE, show_edge=False)
        table.add_column("Time (Hourly)", style="dim")
        table.add_column("Price (USD)", justify="right")
        for label, value in zip(series.labels, series.values):
            table.add_row(label, f"${value:,.2f}")
        chart = Text(sparkline(series.values), style="green")
        return Panel(Group(chart, table), title=f"{series.title} - Last 24 Hours", border_style="green")

    def render(self, view: StateView) -> Group:
        """Build the full dashboard renderable"""
        left = Group(self.block_panel(view.block), self.market_panel(view.market))
        right = Group(self.sentiment_panel(view.sentiment), self.price_panel(view.price_series))
        parts = [Columns([left, right], equal=True, expand=True)]

        footer = f"Cycle #{view.cycle_counter}"
        if view.last_update:
            footer += f" | Updated {view.last_update}"
        parts.append(Text(footer, style="dim"))

        if view.last_error:
            parts.append(Text(view.last_error, style="bold red"))
        return Group(*parts)

    def print_dashboard(self, view: StateView):
        """Redraw the whole dashboard"""
        if self.clear:
            self.console.clear()
        self.console.print(self.render(view))
