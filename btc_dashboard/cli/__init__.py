"""
CLI Module for the Bitcoin Dashboard
====================================

Terminal rendering of the aggregated state.
"""

from btc_dashboard.cli.terminal_display import TerminalDisplay, sparkline

__all__ = ['TerminalDisplay', 'sparkline']
