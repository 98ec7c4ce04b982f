from .aggregator import Aggregator
from .scheduler import RefreshScheduler, ScheduleHandle

__all__ = ["Aggregator", "RefreshScheduler", "ScheduleHandle"]
