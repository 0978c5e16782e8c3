"""People/planets catalog client (SWAPI-compatible).

Follows the ``next`` cursor of each page until it is empty, normalizing
every record on the way.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

from challenge_solver.config import settings
from challenge_solver.entities import Character, Planet
from challenge_solver.utils.request_queue import RequestQueue
from challenge_solver.utils.retry import BackoffPolicy, with_retry

from .http_base import HttpRepository
from .normalization import ValidationMode, normalize_character, normalize_planet

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StarWarsCatalogClient(HttpRepository):
    """Paginated fetcher for planets and characters.

    Example:
        ```python
        catalog = StarWarsCatalogClient.create()
        planets = await catalog.fetch_planets()
        people = await catalog.fetch_people()
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        page_delay: float | None = None,
        validation_mode: ValidationMode | None = None,
        request_queue: RequestQueue | None = None,
        max_attempts: int | None = None,
        backoff: BackoffPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the catalog client.

        Args:
            base_url: Catalog root URL. Defaults to settings.swapi_url.
            client: Shared httpx client. Created lazily if None.
            page_delay: Seconds to wait between pages. Defaults to settings.
            validation_mode: Coerce or drop invalid records. Defaults to settings.
            request_queue: Optional queue every request goes through.
            max_attempts: Attempts per dataset fetch. Defaults to settings.
            backoff: Delay policy between attempts. Defaults to settings.
            sleep: Awaitable sleep (injected by tests).
        """
        super().__init__(client=client, request_queue=request_queue)
        self._base_url = (base_url or settings.swapi_url).rstrip("/")
        self._page_delay = settings.page_delay if page_delay is None else page_delay
        self._mode = validation_mode or ValidationMode(settings.validation_mode)
        self._max_attempts = max_attempts or settings.max_retries
        self._backoff = backoff or BackoffPolicy.from_settings()
        self._sleep = sleep

    @classmethod
    def create(
        cls,
        client: httpx.AsyncClient | None = None,
        request_queue: RequestQueue | None = None,
    ) -> "StarWarsCatalogClient":
        """Factory method to create StarWarsCatalogClient with defaults.

        Args:
            client: Shared httpx client. Created lazily if None.
            request_queue: Optional throttling queue.

        Returns:
            Configured StarWarsCatalogClient
        """
        return cls(client=client, request_queue=request_queue)

    async def _paginate(
        self,
        url: str,
        normalize: Callable[[dict[str, Any], ValidationMode], T | None],
    ) -> list[T]:
        records: list[T] = []
        next_url: str | None = url

        while next_url:
            page = await self._get_json(next_url)
            for raw in page.get("results") or []:
                record = normalize(raw, self._mode)
                if record is not None:
                    records.append(record)

            next_url = page.get("next")
            if next_url:
                await self._sleep(self._page_delay)

        return records

    async def _fetch(
        self,
        resource: str,
        normalize: Callable[[dict[str, Any], ValidationMode], T | None],
    ) -> list[T]:
        url = f"{self._base_url}/{resource}/"
        records = await with_retry(
            lambda: self._paginate(url, normalize),
            max_attempts=self._max_attempts,
            backoff=self._backoff,
            sleep=self._sleep,
        )
        logger.info("Fetched %d %s", len(records), resource)
        return records

    async def fetch_planets(self) -> list[Planet]:
        """Fetch every planet in the catalog.

        Raises:
            FetchError: If a page keeps failing after all retries
        """
        return await self._fetch("planets", normalize_planet)

    async def fetch_people(self) -> list[Character]:
        """Fetch every character in the catalog.

        Raises:
            FetchError: If a page keeps failing after all retries
        """
        return await self._fetch("people", normalize_character)
