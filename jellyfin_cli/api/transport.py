"""
Pooled HTTP transport shared by the session, catalog and streaming layers.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from jellyfin_cli.exceptions import TransportError

log = logging.getLogger(__name__)


class Transport:
    """
    Thin async wrapper around a pooled aiohttp ClientSession.

    Requests are never retried. Any connection-level failure is raised as a
    TransportError before the caller gets a chance to inspect a status code.
    Callers own the returned response and must release or close it.
    """

    def __init__(self, max_connections: int = 8, timeout: Optional[float] = None):
        """
        Args:
            max_connections: Size of the per-host connection pool.
            timeout: Total timeout per request in seconds. None disables it;
                long-lived audio streams would otherwise be cut off.
        """
        self.max_connections = max_connections
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def closed(self) -> bool:
        return self._session is None or self._session.closed

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_connections * 2,
                limit_per_host=self.max_connections,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": "jellyfin-cli"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
            log.debug(f"Created HTTP pool with limit_per_host={self.max_connections}")
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> aiohttp.ClientResponse:
        """
        Sends a single request and returns once the response headers arrive.

        The body is left unread so that streaming callers can consume it
        incrementally.

        Raises:
            TransportError: If the connection could not be made or was reset.
        """
        session = await self._initialize_session()
        try:
            response = await session.request(
                method, url, headers=headers, params=params, json=json
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug(f"{method} {url} failed: {e!r}")
            raise TransportError(f"{method} {url} failed: {e}") from e

        log.debug(f"{method} {url} -> {response.status}")
        return response

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("HTTP pool closed.")
