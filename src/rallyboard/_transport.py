"""HTTP transport for the remote scoreboard source."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from rallyboard._constants import NO_CACHE_HEADERS
from rallyboard.exceptions import RallyboardTransportError

_logger = logging.getLogger(__name__)


class RemoteTransport(Protocol):
    """Structural interface for anything that can produce a remote payload.

    The sync loop only depends on this protocol, so tests can pass a fake
    backend in place of :class:`HttpRemoteSource`.
    """

    async def fetch(self) -> Any:
        ...


class HttpRemoteSource:
    """Fetch the remote payload with caching disabled.

    Every failure (connection error, timeout, non-2xx status, body that is
    not JSON) is raised as :class:`RallyboardTransportError`.
    """

    def __init__(self, url: str, http_session: aiohttp.ClientSession) -> None:
        self._url = url
        self._http = http_session

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self) -> Any:
        _logger.debug("GET %s", self._url)

        try:
            async with self._http.get(self._url, headers=NO_CACHE_HEADERS) as resp:
                body = await resp.read()
                if not 200 <= resp.status < 300:
                    raise RallyboardTransportError(
                        f"HTTP {resp.status}",
                        status_code=resp.status,
                        url=self._url,
                    )
                status = resp.status
        except RallyboardTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RallyboardTransportError(
                f"Request failed: {exc!r}",
                url=self._url,
            ) from exc

        try:
            return json.loads(body)
        except ValueError as exc:
            raise RallyboardTransportError(
                f"Invalid JSON: {body[:200]!r}",
                status_code=status,
                url=self._url,
            ) from exc
