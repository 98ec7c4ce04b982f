"""
Dashboard Settings Module
=========================

Typed, validated settings built from the raw config dictionary
(config.yaml + environment overrides).
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional


DEFAULT_REFRESH_INTERVAL_MS = 60000
DEFAULT_HTTP_TIMEOUT = 10.0


@dataclass
class SourceSettings:
    """Endpoint override for one source adapter. None keeps the adapter default."""
    url: Optional[str] = None
    params: Optional[Dict[str, Any]] = None


@dataclass
class DashboardSettings:
    """
    Settings for the polling engine and its consumers.

    Only the refresh interval and the endpoint URLs drive the engine itself;
    the remaining fields configure the transport and the presentation layer.
    """

    refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    sources: Dict[str, SourceSettings] = field(default_factory=dict)
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    def __post_init__(self):
        if self.refresh_interval_ms <= 0:
            raise ValueError(f"refresh_interval_ms must be positive, got {self.refresh_interval_ms}")
        if self.http_timeout <= 0:
            raise ValueError(f"http_timeout must be positive, got {self.http_timeout}")

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'DashboardSettings':
        """
        Create DashboardSettings from a dictionary (e.g., from config.yaml)

        Args:
            config: Raw configuration with refresh/http/sources/server sections

        Returns:
            DashboardSettings instance
        """
        refresh = config.get('refresh') or {}
        http = config.get('http') or {}
        server = config.get('server') or {}

        sources = {}
        for name, entry in (config.get('sources') or {}).items():
            entry = entry or {}
            sources[name] = SourceSettings(
                url=entry.get('url'),
                params=entry.get('params'),
            )

        return cls(
            refresh_interval_ms=int(refresh.get('interval_ms', DEFAULT_REFRESH_INTERVAL_MS)),
            http_timeout=float(http.get('timeout', DEFAULT_HTTP_TIMEOUT)),
            sources=sources,
            server_host=server.get('host', "127.0.0.1"),
            server_port=int(server.get('port', 8000)),
        )
