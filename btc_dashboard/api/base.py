"""
Source adapter base class and errors
====================================

Every adapter issues a single GET against one public endpoint, decodes the
JSON body and maps it into a normalized record. All failure modes collapse
into FetchError.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx


class FetchError(Exception):
    """A single adapter call failed (transport, HTTP status, or payload shape)."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source


_MISSING = object()


def require(payload: Any, path: str) -> Any:
    """
    Walk a dotted path through nested dicts/lists.

    Numeric segments index into lists, e.g. 'data.0.hash'.

    Raises:
        KeyError: carrying the full path when any segment is absent
    """
    value = payload
    for key in path.split('.'):
        if isinstance(value, list) and key.isdigit():
            index = int(key)
            value = value[index] if index < len(value) else _MISSING
        elif isinstance(value, dict):
            value = value.get(key, _MISSING)
        else:
            value = _MISSING
        if value is _MISSING or value is None:
            raise KeyError(path)
    return value


class BaseSourceAdapter(ABC):
    """
    Source adapter abstract base class

    Subclasses declare their endpoint and implement _parse().
    The HTTP client is injected and owned by the caller.
    """

    # Overridden by subclasses
    SOURCE: str = "base"
    DESCRIPTION: str = "data"
    DEFAULT_URL: str = ""
    DEFAULT_PARAMS: Dict[str, Any] = {}

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None
    ):
        self.client = client
        self.url = url or self.DEFAULT_URL
        self.params = dict(self.DEFAULT_PARAMS if params is None else params)

    @abstractmethod
    def _parse(self, payload: Any):
        """Map the decoded JSON body into a normalized record"""

    def _error(self, message: str) -> FetchError:
        return FetchError(message, source=self.SOURCE)

    async def _request_json(self) -> Any:
        try:
            response = await self.client.get(self.url, params=self.params)
        except httpx.HTTPError as e:
            raise self._error(f"Failed to fetch {self.DESCRIPTION}: {e}") from e

        if not response.is_success:
            raise self._error(
                f"Failed to fetch {self.DESCRIPTION}: HTTP {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise self._error(f"Failed to fetch {self.DESCRIPTION}: invalid JSON body") from e

    async def fetch(self):
        """
        Fetch and normalize one reading.

        Returns:
            The adapter's normalized record

        Raises:
            FetchError: on any transport, status or shape failure
        """
        payload = await self._request_json()
        try:
            return self._parse(payload)
        except FetchError:
            raise
        except KeyError as e:
            raise self._error(
                f"Unexpected {self.DESCRIPTION} payload: missing field '{e.args[0]}'"
            ) from e
        except (IndexError, TypeError, ValueError, OverflowError, OSError) as e:
            raise self._error(f"Unexpected {self.DESCRIPTION} payload: {e}") from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(url={self.url!r})"
