"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the result cache backend (in-memory, Redis, ...)
- Replacing the completion endpoint with a fake in tests
- Clear separation of concerns

Usage:
    ```python
    from challenge_solver.protocols import CompletionProvider, KeyValueStore

    store: KeyValueStore = RedisKeyValueStore.create()
    store: KeyValueStore = InMemoryKeyValueStore()
    ```
"""

from .completion_provider import CompletionProvider
from .key_value_store import KeyValueStore

__all__ = [
    "CompletionProvider",
    "KeyValueStore",
]
