"""Loads the three reference datasets, going through the result cache."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, field
from typing import Any, TypeVar

from challenge_solver.entities import Character, Creature, Planet
from challenge_solver.repositories import PokemonCatalogClient, StarWarsCatalogClient

from .result_cache import CacheKey, ResultCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ReferenceData:
    """Normalized datasets supplied to the model as context."""

    planets: list[Planet] = field(default_factory=list)
    characters: list[Character] = field(default_factory=list)
    creatures: list[Creature] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when none of the three datasets is empty."""
        return bool(self.planets and self.characters and self.creatures)


class ReferenceDataService:
    """Cache-first loader for planets, characters and creatures.

    Example:
        ```python
        service = ReferenceDataService.create()
        reference = await service.load()
        ```
    """

    def __init__(
        self,
        star_wars: StarWarsCatalogClient,
        pokemon: PokemonCatalogClient,
        cache: ResultCache | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            star_wars: Planets/characters catalog client (required).
            pokemon: Creature catalog client (required).
            cache: Result cache. If None, every load hits the catalogs.
        """
        self._star_wars = star_wars
        self._pokemon = pokemon
        self._cache = cache

    @classmethod
    def create(cls, cache: ResultCache | None = None) -> "ReferenceDataService":
        """Factory method wiring catalog clients and cache from settings."""
        from challenge_solver.config import settings
        from challenge_solver.utils.request_queue import RequestQueue

        queue = RequestQueue(settings.queue_min_interval) if settings.queue_min_interval > 0 else None
        return cls(
            star_wars=StarWarsCatalogClient.create(request_queue=queue),
            pokemon=PokemonCatalogClient.create(),
            cache=cache or ResultCache.create(),
        )

    async def _load(
        self,
        key: CacheKey,
        fetch: Callable[[], Awaitable[list[T]]],
        from_dict: Callable[[dict[str, Any]], T],
    ) -> list[T]:
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                try:
                    return [from_dict(record) for record in cached]
                except (TypeError, AttributeError) as e:
                    logger.warning("Cached %s has an unexpected shape (%s), refetching", key.value, e)
                    self._cache.invalidate(key)

        records = await fetch()
        if self._cache is not None:
            self._cache.put(key, [asdict(record) for record in records])
        return records

    async def load_planets(self) -> list[Planet]:
        return await self._load(CacheKey.PLANETS, self._star_wars.fetch_planets, Planet.from_dict)

    async def load_characters(self) -> list[Character]:
        return await self._load(CacheKey.PEOPLE, self._star_wars.fetch_people, Character.from_dict)

    async def load_creatures(self) -> list[Creature]:
        return await self._load(CacheKey.POKEMON, self._pokemon.fetch_creatures, Creature.from_dict)

    async def load(self, concurrent: bool = True) -> ReferenceData:
        """Load all three datasets.

        Args:
            concurrent: Fetch the datasets at the same time. When False they
                load one after another (planets, creatures, characters).

        Returns:
            ReferenceData with every dataset loaded

        Raises:
            FetchError: If any dataset cannot be fetched
        """
        if concurrent:
            planets, creatures, characters = await asyncio.gather(
                self.load_planets(), self.load_creatures(), self.load_characters()
            )
        else:
            planets = await self.load_planets()
            creatures = await self.load_creatures()
            characters = await self.load_characters()

        logger.info(
            "Reference data ready: %d planets, %d characters, %d creatures",
            len(planets),
            len(characters),
            len(creatures),
        )
        return ReferenceData(planets=planets, characters=characters, creatures=creatures)

    async def close(self) -> None:
        await self._star_wars.close()
        await self._pokemon.close()
