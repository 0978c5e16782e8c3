"""Repository layer for data access.

This layer wraps external dependencies (catalog APIs, the challenge
service, the completion endpoint, key-value storage) so services only see
domain entities. Storage backends satisfy the KeyValueStore protocol
structurally; the completion client satisfies CompletionProvider.
"""

from challenge_solver.protocols import CompletionProvider, KeyValueStore

from .challenge_client import ChallengeClient
from .completion_client import CompletionClient
from .memory_store import InMemoryKeyValueStore
from .normalization import ValidationMode, to_number
from .pokemon_client import PokemonCatalogClient
from .redis_store import RedisKeyValueStore
from .star_wars_client import StarWarsCatalogClient

__all__ = [
    "CompletionProvider",
    "KeyValueStore",
    "ChallengeClient",
    "CompletionClient",
    "InMemoryKeyValueStore",
    "PokemonCatalogClient",
    "RedisKeyValueStore",
    "StarWarsCatalogClient",
    "ValidationMode",
    "to_number",
]
