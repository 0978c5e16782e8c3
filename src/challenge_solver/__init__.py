"""Challenge Solver - answers quiz challenges with reference data and an LLM.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (KeyValueStore, CompletionProvider)
    - repositories: Catalog, challenge and completion clients; key-value stores
    - services: Result cache, reference data, interpretation, orchestration
    - handlers: HTTP relay handler
    - dto: Data transfer objects (wire contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from challenge_solver.services import ChallengeSolver

    solver = ChallengeSolver.create()
    outcome = await solver.solve()
    ```

For the completion relay:
    ```python
    from challenge_solver.api.app import app
    ```
"""

from challenge_solver.config import get_redis_client, settings
from challenge_solver.entities import Answer, Challenge, Character, Creature, Planet, SubmissionResult
from challenge_solver.exceptions import ChallengeSolverError
from challenge_solver.handlers import RelayHandler
from challenge_solver.protocols import CompletionProvider, KeyValueStore
from challenge_solver.repositories import (
    ChallengeClient,
    CompletionClient,
    InMemoryKeyValueStore,
    PokemonCatalogClient,
    RedisKeyValueStore,
    StarWarsCatalogClient,
)
from challenge_solver.services import (
    ChallengeSolver,
    InterpretationService,
    ReferenceDataService,
    ResultCache,
)

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CompletionProvider",
    "KeyValueStore",
    # Services (business logic)
    "ChallengeSolver",
    "InterpretationService",
    "ReferenceDataService",
    "ResultCache",
    # Handlers (HTTP)
    "RelayHandler",
    # Repositories (data access)
    "ChallengeClient",
    "CompletionClient",
    "InMemoryKeyValueStore",
    "PokemonCatalogClient",
    "RedisKeyValueStore",
    "StarWarsCatalogClient",
    # Entities (domain models)
    "Answer",
    "Challenge",
    "Character",
    "Creature",
    "Planet",
    "SubmissionResult",
    # Errors
    "ChallengeSolverError",
]
