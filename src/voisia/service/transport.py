"""HTTP transport - one shared httpx connection pool for all provider calls."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from ..domain.domain_type import Provider
from ..domain.errors import TransportError
from ..log import get_logger

logger = get_logger(__name__)

_POOL_LIMITS = httpx.Limits(
    max_keepalive_connections=20,
    max_connections=100,
    keepalive_expiry=30,
)


class HttpTransport:
    """
    Lazily-created, process-wide ``httpx.AsyncClient``.

    Responsibilities:
    - Hand out one pooled client, safe for concurrent tasks
    - POST JSON with a per-call deadline
    - Turn network failures into TransportError (cancellation passes through)
    """

    def __init__(
        self,
        timeout_seconds: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the pooled client (lazy)."""
        async with self._lock:
            if self._client is None or self._client.is_closed:
                logger.info("creating http client", timeout_seconds=self.timeout_seconds)
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self.timeout_seconds),
                    limits=_POOL_LIMITS,
                    transport=self._transport,
                )
            return self._client

    async def post_json(
        self,
        provider: Provider,
        url: str,
        *,
        headers: dict[str, str],
        payload: dict[str, Any],
        timeout_seconds: float | None = None,
    ) -> httpx.Response:
        """POST ``payload`` as JSON and read the full body.

        Raises:
            TransportError: DNS/TCP/TLS failure, connection reset, timeout,
                undecodable body or malformed URL
        """
        client = await self.get_client()
        timeout = httpx.Timeout(timeout_seconds) if timeout_seconds is not None else httpx.USE_CLIENT_DEFAULT
        try:
            return await client.post(url, headers=headers, json=payload, timeout=timeout)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(provider, exc) from exc

    async def aclose(self) -> None:
        async with self._lock:
            client, self._client = self._client, None
        if client is not None:
            await client.aclose()
            logger.info("http client closed")


__all__ = ["HttpTransport"]
