"""In-memory implementation of KeyValueStore.

Session scoped: entries live as long as the store object. Satisfies the
KeyValueStore protocol through structural typing.
"""


class InMemoryKeyValueStore:
    """Dict-backed key-value store."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def health_check(self) -> bool:
        return True

    def keys(self) -> list[str]:
        """Return the stored keys (for inspection and tests)."""
        return list(self._data)
