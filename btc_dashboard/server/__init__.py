from .state import AggregateState, StateView, SOURCES

__all__ = ["AggregateState", "StateView", "SOURCES"]
