from __future__ import annotations

import logging
from typing import Callable

import httpx

from check_graphite.core.config import DEFAULT_USER_AGENT, PluginSettings
from check_graphite.core.errors import ResourceError, TransportError


logger = logging.getLogger(__name__)


def build_render_url(base_url: str, target: str, from_minutes: int, scale: float = 1.0) -> str:
    """Compose the render API query for a target over the last ``from_minutes`` minutes.

    The target is interpolated as-is; callers must pass a value that is already
    safe to place in a query string. A scale of exactly 1.0 means "unscaled".
    """
    if scale == 1.0:
        expression = target
    else:
        expression = f"scale({target},{scale:.2f})"
    return f"{base_url}/render/?target={expression}&format=json&from=-{from_minutes}mins"


class ResponseBuffer:
    """Collects a streamed response body into one contiguous buffer."""

    def __init__(self) -> None:
        self._data = bytearray()

    def write(self, chunk: bytes) -> int:
        try:
            self._data.extend(chunk)
        except MemoryError as exc:
            raise ResourceError("not enough memory to buffer the response") from exc
        return len(chunk)

    @property
    def size(self) -> int:
        return len(self._data)

    def getvalue(self) -> bytes:
        return bytes(self._data)


def _describe(exc: Exception) -> str:
    text = str(exc).strip()
    if not text:
        return exc.__class__.__name__
    return text.splitlines()[0]


class GraphiteClient:
    """Fetches render API responses over HTTP."""

    def __init__(
        self,
        *,
        timeout: float = 5.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client_factory: Callable[[], httpx.Client] | None = None,
    ):
        self._timeout = httpx.Timeout(timeout)
        self._user_agent = user_agent
        self._client_factory = client_factory or self._default_client

    @classmethod
    def from_settings(
        cls,
        settings: PluginSettings,
        *,
        client_factory: Callable[[], httpx.Client] | None = None,
    ) -> GraphiteClient:
        return cls(
            timeout=settings.http_timeout_seconds,
            user_agent=settings.user_agent,
            client_factory=client_factory,
        )

    def _default_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._timeout,
            follow_redirects=True,
            headers={"User-Agent": self._user_agent},
        )

    def fetch(self, url: str) -> bytes:
        """GET ``url`` and return the whole body; any HTTP failure raises TransportError."""
        buffer = ResponseBuffer()
        logger.debug("Requesting %s", url)
        try:
            with self._client_factory() as client:
                with client.stream("GET", url) as response:
                    response.raise_for_status()
                    for chunk in response.iter_bytes():
                        buffer.write(chunk)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"HTTP error - {_describe(exc)}") from exc
        except MemoryError as exc:
            raise ResourceError("not enough memory to buffer the response") from exc
        logger.debug("Received %s bytes from %s", buffer.size, url)
        return buffer.getvalue()
