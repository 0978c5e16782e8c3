"""Creature catalog client (PokeAPI-compatible).

The list endpoint only carries names and detail URLs, so each entry's detail
page is fetched too. Detail requests go out in fixed-size concurrent batches;
the next batch starts only after the whole previous batch has completed.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from challenge_solver.config import settings
from challenge_solver.entities import Creature
from challenge_solver.utils.request_queue import RequestQueue
from challenge_solver.utils.retry import BackoffPolicy, with_retry

from .http_base import HttpRepository
from .normalization import ValidationMode, normalize_creature

logger = logging.getLogger(__name__)


class PokemonCatalogClient(HttpRepository):
    """Paginated, batch-enriched fetcher for creatures.

    Example:
        ```python
        catalog = PokemonCatalogClient.create()
        creatures = await catalog.fetch_creatures()
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        page_delay: float | None = None,
        detail_batch_size: int | None = None,
        page_size: int | None = None,
        validation_mode: ValidationMode | None = None,
        request_queue: RequestQueue | None = None,
        max_attempts: int | None = None,
        backoff: BackoffPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the catalog client.

        Args:
            base_url: Catalog root URL. Defaults to settings.pokeapi_url.
            client: Shared httpx client. Created lazily if None.
            page_delay: Seconds between list pages and between detail batches.
            detail_batch_size: Concurrent detail requests per batch.
            page_size: ``limit`` query parameter for the list endpoint.
            validation_mode: Coerce or drop invalid records. Defaults to settings.
            request_queue: Optional queue every request goes through.
            max_attempts: Attempts per dataset fetch. Defaults to settings.
            backoff: Delay policy between attempts. Defaults to settings.
            sleep: Awaitable sleep (injected by tests).
        """
        super().__init__(client=client, request_queue=request_queue)
        self._base_url = (base_url or settings.pokeapi_url).rstrip("/")
        self._page_delay = settings.page_delay if page_delay is None else page_delay
        self._batch_size = settings.detail_batch_size if detail_batch_size is None else detail_batch_size
        self._page_size = page_size or settings.pokemon_page_size
        self._mode = validation_mode or ValidationMode(settings.validation_mode)
        self._max_attempts = max_attempts or settings.max_retries
        self._backoff = backoff or BackoffPolicy.from_settings()
        self._sleep = sleep

        if self._batch_size < 1:
            raise ValueError("detail_batch_size must be at least 1")

    @classmethod
    def create(
        cls,
        client: httpx.AsyncClient | None = None,
        request_queue: RequestQueue | None = None,
    ) -> "PokemonCatalogClient":
        """Factory method to create PokemonCatalogClient with defaults."""
        return cls(client=client, request_queue=request_queue)

    async def _list_detail_urls(self) -> list[str]:
        urls: list[str] = []
        next_url: str | None = f"{self._base_url}/pokemon?limit={self._page_size}"

        while next_url:
            page = await self._get_json(next_url)
            urls.extend(entry["url"] for entry in page.get("results") or [] if entry.get("url"))
            next_url = page.get("next")
            if next_url:
                await self._sleep(self._page_delay)

        return urls

    async def _fetch_batch(self, urls: list[str]) -> list[dict[str, Any]]:
        """Fetch detail payloads concurrently; one failure cancels the rest."""
        tasks = [asyncio.ensure_future(self._get_json(url)) for url in urls]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _fetch_all(self) -> list[Creature]:
        urls = await self._list_detail_urls()
        creatures: list[Creature] = []

        for start in range(0, len(urls), self._batch_size):
            if start:
                await self._sleep(self._page_delay)
            batch = urls[start : start + self._batch_size]
            for raw in await self._fetch_batch(batch):
                creature = normalize_creature(raw, self._mode)
                if creature is not None:
                    creatures.append(creature)

        return creatures

    async def fetch_creatures(self) -> list[Creature]:
        """Fetch and enrich every creature in the catalog.

        Raises:
            FetchError: If a list or detail request keeps failing after all retries
        """
        creatures = await with_retry(
            self._fetch_all,
            max_attempts=self._max_attempts,
            backoff=self._backoff,
            sleep=self._sleep,
        )
        logger.info("Fetched %d creatures", len(creatures))
        return creatures
