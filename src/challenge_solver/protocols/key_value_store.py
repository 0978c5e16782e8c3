"""Key-value storage protocol.

Defines the durable storage the result cache persists its snapshots in.
Values are opaque strings (the cache stores serialized JSON).

Implementations include:
- In-memory dict (session scoped, default)
- Redis
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for string key-value storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.
    """

    def get(self, key: str) -> str | None:
        """Read the value stored under ``key``.

        Args:
            key: The storage key

        Returns:
            The stored string, or None if the key is absent
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Args:
            key: The storage key
            value: The serialized value
        """
        ...

    def delete(self, key: str) -> bool:
        """Remove ``key``.

        Args:
            key: The storage key

        Returns:
            True if something was deleted, False otherwise
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
