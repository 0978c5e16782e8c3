"""Cache entry domain entity."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """Persisted snapshot of one reference-data set.

    Attributes:
        data: The cached payload (JSON-compatible)
        timestamp: Unix time (seconds) when the snapshot was written
        version: Schema version the payload was written with
    """

    data: Any
    timestamp: float
    version: int

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was written."""
        return now - self.timestamp

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "CacheEntryEntity":
        """Build an entry from its stored form.

        Raises:
            KeyError: If a field is missing
            TypeError, ValueError: If timestamp or version are not numeric
        """
        return cls(
            data=raw["data"],
            timestamp=float(raw["timestamp"]),
            version=int(raw["version"]),
        )
