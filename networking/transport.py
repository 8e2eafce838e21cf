import logging
from typing import Any

import httpx

from .types import TransportOptions

logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Default transport: sends requests through one lazily opened
    ``httpx.AsyncClient`` and returns the fully read response.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, follow_redirects: bool = False):
        self._client = client
        self._owns_client = client is None
        self._follow_redirects = follow_redirects

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=self._follow_redirects)
        return self._client

    async def close(self) -> None:
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        await self._ensure_client()
        return self

    async def __aexit__(self, *_args: Any) -> None:
        await self.close()

    async def __call__(self, request: httpx.Request, options: TransportOptions) -> httpx.Response:
        client = await self._ensure_client()
        request.extensions["timeout"] = httpx.Timeout(options.timeout).as_dict()

        logger.debug(f"transport -> {request.method} {request.url}")
        return await client.send(request, follow_redirects=self._follow_redirects)
