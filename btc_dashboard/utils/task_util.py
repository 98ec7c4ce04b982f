import time

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from btc_dashboard.utils.logger import log


@dataclass(frozen=True)
class FetchResult:
    """Settled outcome of one source fetch: either value or error is meaningful."""
    source: str
    ok: bool
    value: Any = None
    error: Optional[str] = None
    duration_ms: int = 0

    @classmethod
    def success(cls, source: str, value: Any, duration_ms: int = 0) -> "FetchResult":
        return cls(source=source, ok=True, value=value, duration_ms=duration_ms)

    @classmethod
    def failure(cls, source: str, error: str, duration_ms: int = 0) -> "FetchResult":
        return cls(source=source, ok=False, error=error, duration_ms=duration_ms)


async def run_settled(
    *,
    source: str,
    task_factory: Callable[[], Awaitable[Any]],
    log_errors: bool = True
) -> FetchResult:
    """
    Execute one async task and convert its outcome into a FetchResult.

    Never raises: any exception becomes a failure result carrying its message.
    """
    started = time.time()
    try:
        value = await task_factory()
    except Exception as e:
        duration_ms = int((time.time() - started) * 1000)
        message = str(e) or e.__class__.__name__
        if log_errors:
            log.source(source, f"failed after {duration_ms}ms: {message}", success=False)
        return FetchResult.failure(source, message, duration_ms)

    duration_ms = int((time.time() - started) * 1000)
    log.debug(f"[{source}] fetched in {duration_ms}ms")
    return FetchResult.success(source, value, duration_ms)
