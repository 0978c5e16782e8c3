"""Shared plumbing for repositories that talk HTTP through httpx."""

import logging
from typing import Any

import httpx

from challenge_solver.config import settings
from challenge_solver.exceptions import FetchError
from challenge_solver.utils.request_queue import RequestQueue

logger = logging.getLogger(__name__)


class HttpRepository:
    """Base class owning a lazily created ``httpx.AsyncClient``.

    Subclasses call ``_get_json`` / ``_post_json``; transport and status
    failures surface as ``FetchError``. When a ``RequestQueue`` is given,
    every request is dispatched through it.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        request_queue: RequestQueue | None = None,
    ) -> None:
        self._client = client
        self._timeout = timeout or settings.http_timeout
        self._headers = headers or {}
        self._queue = request_queue

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            )
        return self._client

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self.client.request(method, url, headers=self._headers, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise FetchError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"{method} {url} returned invalid JSON: {e}") from e

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug("%s %s", method, url)
        if self._queue is not None:
            return await self._queue.submit(lambda: self._send(method, url, **kwargs))
        return await self._send(method, url, **kwargs)

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", url, params=params)

    async def _post_json(self, url: str, payload: dict[str, Any]) -> Any:
        return await self._request("POST", url, json=payload)

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
