"""
Bitcoin Dashboard
=================

Polls four public Bitcoin data sources on a fixed cadence and keeps the
latest good reading of each in one AggregateState.
"""

__version__ = "0.1.0"
