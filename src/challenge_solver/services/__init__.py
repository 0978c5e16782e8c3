"""Service layer for business logic.

Services depend on protocols and repositories passed in through their
constructors, making them testable with fakes.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from challenge_solver.services import ChallengeSolver

    solver = ChallengeSolver.create()
    outcome = await solver.solve()
    ```
"""

from .interpretation import InterpretationService
from .reference_data import ReferenceData, ReferenceDataService
from .result_cache import CacheConfig, CacheKey, ResultCache, reduce_pokemon_payload
from .solver import ChallengeSolver, SolveOutcome

__all__ = [
    "CacheConfig",
    "CacheKey",
    "ChallengeSolver",
    "InterpretationService",
    "ReferenceData",
    "ReferenceDataService",
    "ResultCache",
    "SolveOutcome",
    "reduce_pokemon_payload",
]
